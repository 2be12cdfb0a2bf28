from .constants import *  # noqa: F401,F403
from .ids import gen_id
from .metrics import calculate_performance_metrics
from .processors import NanoidLoggingSpanProcessor, NanoidMetricsSpanProcessor
from .sampler import ErrorAwareSampler
from .spans import (
    nanoid_span,
    set_attribute_alphabet,
    set_attribute_response,
)

__all__ = [
    "ErrorAwareSampler",
    "NanoidLoggingSpanProcessor",
    "NanoidMetricsSpanProcessor",
    "calculate_performance_metrics",
    "gen_id",
    "nanoid_span",
    "set_attribute_alphabet",
    "set_attribute_response",
]
