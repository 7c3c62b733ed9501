"""
Metrics Context

Responsibilities:
- Records first-seen client identifiers
- Counts PDFs produced (incremented by the API only after a successful export)

Owns: Usage counters
Never: Blocks or fails a PDF export
"""

from atsresume.contexts.metrics.store import MetricsSnapshot, MetricsStore

__all__ = ["MetricsSnapshot", "MetricsStore"]
