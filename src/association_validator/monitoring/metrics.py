"""Custom Prometheus metrics for the Association Validator.

Counters are process-wide and only ever incremented by ValidationPipeline and
AssociationsClient; the pure stage functions never touch them.
"""

from prometheus_client import Counter

# === Validation Metrics ===

associations_validated_total = Counter(
    "associations_validated_total",
    "Total associations classified by stage and outcome",
    ["stage", "outcome"],
)
"""
Associations classified per stage.

Labels:
- stage: duplicates, company_role_limit, contact_role_limit
- outcome: valid, invalid
"""

invalid_associations_total = Counter(
    "invalid_associations_total",
    "Total rejected associations by stage and failure reason",
    ["stage", "failure_reason"],
)
"""
Rejected associations per stage.

Labels:
- stage: duplicates, company_role_limit, contact_role_limit
- failure_reason: ALREADY_EXISTS, WOULD_EXCEED_LIMIT
"""

# === Transport Metrics ===

transport_requests_total = Counter(
    "transport_requests_total",
    "Total remote API calls by operation and status",
    ["operation", "status"],
)
"""
Remote calls made by AssociationsClient.

Labels:
- operation: fetch_dataset, submit_results, fetch_expected_results
- status: HTTP status code, or timeout / network_error
"""
