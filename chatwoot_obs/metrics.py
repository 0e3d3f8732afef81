"""
Prometheus Metrics Registration.

Custom metrics for Chatwoot operations and the webhook trigger.
"""

from prometheus_client import Counter, Histogram

# ============================================================================
# COUNTERS
# ============================================================================

operation_executions_total = Counter(
    "chatwoot_operation_executions_total",
    "Total operation executions (one per input item)",
    ["resource", "operation", "status"],  # success, failure, continued
)

webhook_events_total = Counter(
    "chatwoot_webhook_events_total",
    "Inbound webhook deliveries",
)

webhook_events_dropped_total = Counter(
    "chatwoot_webhook_events_dropped_total",
    "Queued deliveries evicted because the event queue was full",
)

trigger_reconciliations_total = Counter(
    "chatwoot_trigger_reconciliations_total",
    "Webhook registration checks on activation",
    ["outcome"],  # active, replaced, missing
)

# ============================================================================
# HISTOGRAMS
# ============================================================================

operation_duration = Histogram(
    "chatwoot_operation_duration_seconds",
    "Operation execution duration per item",
    ["resource", "operation"],
    buckets=(0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 30.0, 60.0),
)
