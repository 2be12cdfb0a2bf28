# Constants for span naming and attributes
SPAN_PREFIX = "nanoid"

# Span names
SPAN_GENERATE = f"{SPAN_PREFIX}.generate"

# Attribute names
ATTR_STRATEGY = f"{SPAN_PREFIX}.strategy"
ATTR_ALPHABET = f"{SPAN_PREFIX}.alphabet"
ATTR_ALPHABET_LENGTH = f"{SPAN_PREFIX}.alphabet.length"
ATTR_MASK = f"{SPAN_PREFIX}.mask"
ATTR_SIZE = f"{SPAN_PREFIX}.size"
ATTR_COUNT = f"{SPAN_PREFIX}.count"
ATTR_OUTPUT_COUNT = f"{SPAN_PREFIX}.output.count"
ATTR_RANDOM_BYTES = f"{SPAN_PREFIX}.random.bytes_drawn"
ATTR_RANDOM_CALLS = f"{SPAN_PREFIX}.random.calls"
ATTR_FORCE_SAMPLE = f"{SPAN_PREFIX}.force_sample"

# Calculated metric names (used as keys in calculate_performance_metrics)
METRIC_TOTAL_DURATION = f"{SPAN_PREFIX}.timing.total_duration_ms"
METRIC_IDS_PER_SECOND = f"{SPAN_PREFIX}.metrics.ids_per_second"
METRIC_SYMBOLS = f"{SPAN_PREFIX}.metrics.symbols"
METRIC_BYTES_PER_SYMBOL = f"{SPAN_PREFIX}.metrics.random_bytes_per_symbol"

# Log data keys (for consistent logging format)
LOG_KEY_STRATEGY = "strategy"
LOG_KEY_ALPHABET = "alphabet"
LOG_KEY_ALPHABET_LENGTH = "alphabet_length"
LOG_KEY_SIZE = "size"
LOG_KEY_COUNT = "count"
LOG_KEY_OUTPUT_COUNT = "output_count"
LOG_KEY_DURATION_MS = "duration_ms"
LOG_KEY_IDS_PER_SECOND = "ids_per_second"
LOG_KEY_RANDOM_BYTES = "random_bytes"
LOG_KEY_BYTES_PER_SYMBOL = "random_bytes_per_symbol"

# Prometheus metric names and descriptions
PROMETHEUS_GENERATION_DURATION = "nanoid_generation_duration_seconds"
PROMETHEUS_GENERATION_DURATION_DESC = "Nanoid generation duration in seconds"
PROMETHEUS_IDS_TOTAL = "nanoid_ids"
PROMETHEUS_IDS_TOTAL_DESC = "Total nanoids generated"
PROMETHEUS_IDS_PER_SECOND = "nanoid_ids_per_second"
PROMETHEUS_IDS_PER_SECOND_DESC = "Nanoid generation rate (ids/sec)"
PROMETHEUS_BYTES_PER_SYMBOL = "nanoid_random_bytes_per_symbol"
PROMETHEUS_BYTES_PER_SYMBOL_DESC = (
    "Random bytes drawn per accepted symbol, including rejected and discarded bytes"
)
PROMETHEUS_ERROR_TOTAL = "nanoid_errors"
PROMETHEUS_ERROR_TOTAL_DESC = "Total nanoid generation errors"

# Log message templates
LOG_MSG_STARTING_CALL = "[NANOID] starting {}: {}"
LOG_MSG_COMPLETED_CALL = "[NANOID] completed {}: {}"
LOG_MSG_FAILED_CALL = "[NANOID] failed: {}"
