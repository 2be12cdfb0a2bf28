import logging
import traceback
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

from nanoid_server.nanoid import compute_mask
from nanoid_server.random_source import CountingRandom

from .constants import (
    ATTR_ALPHABET,
    ATTR_ALPHABET_LENGTH,
    ATTR_COUNT,
    ATTR_FORCE_SAMPLE,
    ATTR_MASK,
    ATTR_OUTPUT_COUNT,
    ATTR_RANDOM_BYTES,
    ATTR_RANDOM_CALLS,
    ATTR_SIZE,
    ATTR_STRATEGY,
    SPAN_GENERATE,
)

# Get tracer
tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


def set_attribute_alphabet(span: Span, alphabet: bytes):
    """Record the resolved alphabet length and its mask."""
    span.set_attribute(ATTR_ALPHABET_LENGTH, len(alphabet))
    if alphabet:
        span.set_attribute(ATTR_MASK, compute_mask(len(alphabet)))


def set_attribute_response(span: Span, ids: list, rng: CountingRandom | None = None):
    """Set response attributes automatically."""
    span.set_attribute(ATTR_OUTPUT_COUNT, len(ids))
    if rng is not None:
        span.set_attribute(ATTR_RANDOM_BYTES, rng.bytes_drawn)
        span.set_attribute(ATTR_RANDOM_CALLS, rng.calls)


@contextmanager
def nanoid_span(strategy: str, alphabet_name: str, size: int, count: int):
    """Create nanoid span with automatic timing and error handling."""
    span_name = f"{SPAN_GENERATE}.{strategy}"

    # Set initial attributes that will be available in on_start
    initial_attributes = {
        ATTR_STRATEGY: strategy,
        ATTR_ALPHABET: alphabet_name,
        ATTR_SIZE: size,
        ATTR_COUNT: count,
    }

    with tracer.start_as_current_span(span_name, attributes=initial_attributes) as span:
        try:
            yield span

        except Exception:
            error_str = traceback.format_exc()
            span.set_status(Status(StatusCode.ERROR, error_str))
            span.set_attribute(ATTR_FORCE_SAMPLE, True)
            raise
