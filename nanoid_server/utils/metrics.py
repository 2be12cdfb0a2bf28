from opentelemetry.sdk.trace import ReadableSpan

from .constants import (
    ATTR_OUTPUT_COUNT,
    ATTR_RANDOM_BYTES,
    ATTR_SIZE,
    METRIC_BYTES_PER_SYMBOL,
    METRIC_IDS_PER_SECOND,
    METRIC_SYMBOLS,
    METRIC_TOTAL_DURATION,
)


def calculate_performance_metrics(span: ReadableSpan):
    """Calculate performance metrics for a span after it has ended."""
    if not (span.end_time and span.start_time):
        return {}

    attrs = span.attributes or {}
    duration_ms = (span.end_time - span.start_time) / 1_000_000

    output_count = attrs.get(ATTR_OUTPUT_COUNT, 0)
    symbols = output_count * attrs.get(ATTR_SIZE, 0)
    random_bytes = attrs.get(ATTR_RANDOM_BYTES, 0)

    metrics = {
        METRIC_TOTAL_DURATION: duration_ms,
        METRIC_IDS_PER_SECOND: 0,
        METRIC_SYMBOLS: symbols,
        METRIC_BYTES_PER_SYMBOL: 0,
    }

    if duration_ms > 0 and output_count > 0:
        metrics[METRIC_IDS_PER_SECOND] = output_count / (duration_ms / 1000)

    # Rejection overhead: 1.0 means every drawn byte became a symbol
    if symbols > 0 and random_bytes > 0:
        metrics[METRIC_BYTES_PER_SYMBOL] = random_bytes / symbols

    return metrics
