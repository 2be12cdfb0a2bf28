import logging

from opentelemetry.sdk.trace.export import SpanProcessor
from opentelemetry.trace import StatusCode
from prometheus_client import Counter, Histogram

from .constants import (
    ATTR_ALPHABET,
    ATTR_ALPHABET_LENGTH,
    ATTR_COUNT,
    ATTR_OUTPUT_COUNT,
    ATTR_RANDOM_BYTES,
    ATTR_SIZE,
    ATTR_STRATEGY,
    LOG_KEY_ALPHABET,
    LOG_KEY_ALPHABET_LENGTH,
    LOG_KEY_BYTES_PER_SYMBOL,
    LOG_KEY_COUNT,
    LOG_KEY_DURATION_MS,
    LOG_KEY_IDS_PER_SECOND,
    LOG_KEY_OUTPUT_COUNT,
    LOG_KEY_RANDOM_BYTES,
    LOG_KEY_SIZE,
    LOG_KEY_STRATEGY,
    LOG_MSG_COMPLETED_CALL,
    LOG_MSG_FAILED_CALL,
    LOG_MSG_STARTING_CALL,
    METRIC_BYTES_PER_SYMBOL,
    METRIC_IDS_PER_SECOND,
    METRIC_TOTAL_DURATION,
    PROMETHEUS_BYTES_PER_SYMBOL,
    PROMETHEUS_BYTES_PER_SYMBOL_DESC,
    PROMETHEUS_ERROR_TOTAL,
    PROMETHEUS_ERROR_TOTAL_DESC,
    PROMETHEUS_GENERATION_DURATION,
    PROMETHEUS_GENERATION_DURATION_DESC,
    PROMETHEUS_IDS_PER_SECOND,
    PROMETHEUS_IDS_PER_SECOND_DESC,
    PROMETHEUS_IDS_TOTAL,
    PROMETHEUS_IDS_TOTAL_DESC,
    SPAN_GENERATE,
)
from .metrics import calculate_performance_metrics

# Registered once per process; every metrics processor shares them.
GENERATION_DURATION = Histogram(
    PROMETHEUS_GENERATION_DURATION,
    PROMETHEUS_GENERATION_DURATION_DESC,
    labelnames=["strategy", "status"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
)
IDS_TOTAL = Counter(
    PROMETHEUS_IDS_TOTAL,
    PROMETHEUS_IDS_TOTAL_DESC,
    labelnames=["strategy", "alphabet"],
)
IDS_PER_SECOND = Histogram(
    PROMETHEUS_IDS_PER_SECOND,
    PROMETHEUS_IDS_PER_SECOND_DESC,
    labelnames=["strategy"],
    buckets=[100, 500, 1000, 5000, 10000, 50000, 100000, 500000],
)
BYTES_PER_SYMBOL = Histogram(
    PROMETHEUS_BYTES_PER_SYMBOL,
    PROMETHEUS_BYTES_PER_SYMBOL_DESC,
    labelnames=["strategy"],
    buckets=[1.0, 1.25, 1.5, 1.75, 2.0, 2.5, 3.0, 4.0],
)
ERROR_TOTAL = Counter(
    PROMETHEUS_ERROR_TOTAL,
    PROMETHEUS_ERROR_TOTAL_DESC,
    labelnames=["strategy"],
)


class NanoidLoggingSpanProcessor(SpanProcessor):
    """Span processor for nanoid logging using constants."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def on_start(self, span, parent_context=None):
        """Log span start."""
        if not span.name.startswith(SPAN_GENERATE):
            return

        attrs = span.attributes or {}
        log_data = {
            LOG_KEY_ALPHABET: attrs.get(ATTR_ALPHABET, ""),
            LOG_KEY_SIZE: attrs.get(ATTR_SIZE, 0),
            LOG_KEY_COUNT: attrs.get(ATTR_COUNT, 0),
        }
        mode = attrs.get(ATTR_STRATEGY, "unknown")

        self.logger.info(LOG_MSG_STARTING_CALL.format(mode, log_data))

    def on_end(self, span):
        """Log span completion or error."""
        if not span.name.startswith(SPAN_GENERATE):
            return

        if span.status.status_code == StatusCode.ERROR:
            self.logger.error(LOG_MSG_FAILED_CALL.format(span.status.description))
            return

        # Merge calculated metrics with existing attributes for logging
        attrs = dict(span.attributes or {})
        attrs.update(calculate_performance_metrics(span))
        mode = attrs.get(ATTR_STRATEGY, "unknown")

        log_data = {
            LOG_KEY_DURATION_MS: round(attrs.get(METRIC_TOTAL_DURATION, 0), 2),
            LOG_KEY_ALPHABET_LENGTH: attrs.get(ATTR_ALPHABET_LENGTH, 0),
            LOG_KEY_OUTPUT_COUNT: attrs.get(ATTR_OUTPUT_COUNT, 0),
            LOG_KEY_IDS_PER_SECOND: round(attrs.get(METRIC_IDS_PER_SECOND, 0), 2),
            LOG_KEY_RANDOM_BYTES: attrs.get(ATTR_RANDOM_BYTES, 0),
            LOG_KEY_BYTES_PER_SYMBOL: round(attrs.get(METRIC_BYTES_PER_SYMBOL, 0), 2),
        }

        self.logger.info(LOG_MSG_COMPLETED_CALL.format(mode, log_data))

    def shutdown(self):
        pass

    def force_flush(self, timeout_millis: int = 30000):
        return True


class NanoidMetricsSpanProcessor(SpanProcessor):
    """Span processor for nanoid Prometheus metrics."""

    def __init__(self):
        self.generation_duration = GENERATION_DURATION
        self.ids_total = IDS_TOTAL
        self.ids_per_second = IDS_PER_SECOND
        self.bytes_per_symbol = BYTES_PER_SYMBOL
        self.error_total = ERROR_TOTAL

    def on_start(self, span, parent_context=None):
        pass

    def on_end(self, span):
        """Record metrics on span end."""
        if not span.name.startswith(SPAN_GENERATE):
            return

        attrs = span.attributes or {}
        strategy = attrs.get(ATTR_STRATEGY, "unknown")
        is_error = span.status.status_code == StatusCode.ERROR
        status = "error" if is_error else "success"

        all_attrs = dict(attrs)
        all_attrs.update(calculate_performance_metrics(span))

        duration_ms = all_attrs.get(METRIC_TOTAL_DURATION, 0)
        duration_s = duration_ms / 1000 if duration_ms > 0 else 0
        self.generation_duration.labels(strategy=strategy, status=status).observe(
            duration_s
        )

        if is_error:
            self.error_total.labels(strategy=strategy).inc()
            return

        output_count = all_attrs.get(ATTR_OUTPUT_COUNT, 0)
        if output_count > 0:
            self.ids_total.labels(
                strategy=strategy, alphabet=attrs.get(ATTR_ALPHABET, "unknown")
            ).inc(output_count)

        ids_per_second = all_attrs.get(METRIC_IDS_PER_SECOND, 0)
        if ids_per_second > 0:
            self.ids_per_second.labels(strategy=strategy).observe(ids_per_second)

        bytes_per_symbol = all_attrs.get(METRIC_BYTES_PER_SYMBOL, 0)
        if bytes_per_symbol > 0:
            self.bytes_per_symbol.labels(strategy=strategy).observe(bytes_per_symbol)

    def shutdown(self):
        pass

    def force_flush(self, timeout_millis: int = 30000):
        return True
