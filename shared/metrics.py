"""
Shared metrics for rate gates.
"""

from prometheus_client import Counter


GATE_CALLS_TOTAL = Counter(
    "gate_calls_total",
    "Total gate call resolutions by outcome",
    ["kind", "outcome"]
)

GATE_FLUSHES_TOTAL = Counter(
    "gate_flushes_total",
    "Total flushes that settled a pending call",
    ["kind"]
)

OUTCOMES = (
    "admitted",
    "superseded",
    "flushed_true",
    "flushed_false",
    "rejected_closed",
    "closed",
)


class GateMetrics:
    """Records gate outcomes, or nothing when disabled."""

    def __init__(self, kind: str, enabled: bool = True):
        self.kind = kind
        self.enabled = enabled

    def record_outcome(self, outcome: str) -> None:
        """Count one resolved call."""
        if not self.enabled:
            return
        if outcome not in OUTCOMES:
            raise ValueError(f"Unknown gate outcome: {outcome}")
        GATE_CALLS_TOTAL.labels(kind=self.kind, outcome=outcome).inc()

    def record_flush(self, value: bool) -> None:
        """Count one effective flush and the outcome it delivered."""
        if not self.enabled:
            return
        GATE_FLUSHES_TOTAL.labels(kind=self.kind).inc()
        GATE_CALLS_TOTAL.labels(
            kind=self.kind,
            outcome="flushed_true" if value else "flushed_false"
        ).inc()
