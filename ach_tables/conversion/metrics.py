"""
Prometheus metrics for ACH table conversion.
"""

from prometheus_client import Counter, Histogram

FLATTEN_COUNTER = Counter(
    "ach_tables_flatten_total",
    "Total ACH files flattened into tables",
    ["status"],
)

RECONSTRUCT_COUNTER = Counter(
    "ach_tables_reconstruct_total",
    "Total ACH files reconstructed from tables",
    ["status"],
)

RECONSTRUCT_ERRORS = Counter(
    "ach_tables_reconstruct_errors_total",
    "Reconstruction failures by error code",
    ["error_code"],
)

CONVERSION_DURATION = Histogram(
    "ach_tables_conversion_duration_seconds",
    "Time spent converting between ACH files and tables",
    ["operation"],
)
