"""
Aggregation - Concurrent multi-provider lookup merged into one WordBundle.
"""

from .orchestrator import (
    ADAPTERS,
    AdapterOutcome,
    AdapterStatus,
    AggregationReport,
    WordBundleOrchestrator,
    build_word_bundle,
    get_default_orchestrator,
    reset_default_orchestrator,
)

__all__ = [
    "ADAPTERS",
    "AdapterOutcome",
    "AdapterStatus",
    "AggregationReport",
    "WordBundleOrchestrator",
    "build_word_bundle",
    "get_default_orchestrator",
    "reset_default_orchestrator",
]
