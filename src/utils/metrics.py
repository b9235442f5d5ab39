"""Prometheus metrics exporters."""
from prometheus_client import Counter, CollectorRegistry, generate_latest

# Create registry
registry = CollectorRegistry()

# ========== SIGNAL METRICS ==========
signals_created = Counter(
    'signals_created_total',
    'Total number of signals stored',
    ['asset', 'direction'],
    registry=registry
)

signals_rejected = Counter(
    'signals_rejected_total',
    'Total number of submissions rejected by validation',
    registry=registry
)

# ========== NOTIFICATION METRICS ==========
notifications_sent = Counter(
    'notifications_total',
    'High-confidence notifications by outcome',
    ['outcome'],
    registry=registry
)

# ========== STORAGE METRICS ==========
storage_errors = Counter(
    'storage_errors_total',
    'Signal store failures',
    ['operation'],
    registry=registry
)

# ========== HELPER FUNCTIONS ==========
def record_signal_created(asset: str, direction: str):
    """Record a stored signal."""
    signals_created.labels(asset=asset, direction=direction).inc()

def record_signal_rejected():
    """Record a submission that failed validation."""
    signals_rejected.inc()

def record_notification(outcome: str):
    """Record a notification outcome ('sent', 'queued' or 'failed')."""
    notifications_sent.labels(outcome=outcome).inc()

def record_storage_error(operation: str):
    """Record a store failure for an operation."""
    storage_errors.labels(operation=operation).inc()

def render_metrics() -> bytes:
    """Render the registry in Prometheus text exposition format."""
    return generate_latest(registry)
