"""Prometheus metrics for variable expansion."""

from prometheus_client import Counter, Histogram

EXPANSIONS = Counter(
    "tagvars_expansions_total",
    "Top-level template expansions",
    labelnames=["outcome"],
)

PLACEHOLDERS_RESOLVED = Counter(
    "tagvars_placeholders_resolved_total",
    "Placeholders substituted into an expanded template",
)

FILTER_INVOCATIONS = Counter(
    "tagvars_filter_invocations_total",
    "Filter invocations by filter name and status",
    labelnames=["filter", "status"],
)

DIAGNOSTICS = Counter(
    "tagvars_diagnostics_total",
    "User-facing diagnostics reported during expansion",
    labelnames=["event"],
)

EXPANSION_LATENCY = Histogram(
    "tagvars_expansion_latency_seconds",
    "Latency of top-level template expansion",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0),
)
