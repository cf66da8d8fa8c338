"""
Cross-document correlation and discovery engine.

Modules:
- normalize: name canonicalization (normalize, name_of)
- links: pairwise link detection between two records
- discovery: ranks records bridged to a target record
- cross_session: per-entity rollups across the whole record set
- actors / financial / flights / timeline: dashboard rollups
- result: Ok/Err channel for callers
"""

from .normalize import normalize, name_of
from .links import detect_links
from .discovery import find_discoveries
from .cross_session import compute_entity_correlations, correlate_records
from .actors import aggregate_actors, filter_actors
from .financial import summarize_flows, filter_transactions
from .flights import passenger_stats
from .timeline import timeline_events
from .result import Ok, Err, run_safely

__all__ = [
    "normalize",
    "name_of",
    "detect_links",
    "find_discoveries",
    "compute_entity_correlations",
    "correlate_records",
    "aggregate_actors",
    "filter_actors",
    "summarize_flows",
    "filter_transactions",
    "passenger_stats",
    "timeline_events",
    "Ok",
    "Err",
    "run_safely",
]
