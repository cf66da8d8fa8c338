"""
Domain models - single source of truth for records and derived views.

Design principles:
- Every shape defined once
- Lenient at the boundary (LLM output is schema-loose)
- Derived views (correlations, rollups) are never persisted
- Backend-agnostic (repository handles persistence)
"""

from .base import LooseModel, coerce_number
from .output import (
    AnalysisOutput,
    DocumentDetail,
    EntityDetail,
    PersonalData,
    FinancialTransaction,
    FlightLog,
    NamedRef,
    NameLike,
)
from .record import AnalysisRecord, AnalysisInput, RecordStatus, RecordIdSequence, SourceRef
from .correlation import LinkType, CorrelationLink, DiscoveryResult, EntityCorrelation
from .rollup import ActorProfile, CounterpartyFlow, EventKind, FlowSummary, PassengerCount, TimelineEvent

__all__ = [
    # Base
    "LooseModel",
    "coerce_number",
    # Output
    "AnalysisOutput",
    "DocumentDetail",
    "EntityDetail",
    "PersonalData",
    "FinancialTransaction",
    "FlightLog",
    "NamedRef",
    "NameLike",
    # Record
    "AnalysisRecord",
    "AnalysisInput",
    "RecordStatus",
    "RecordIdSequence",
    "SourceRef",
    # Correlation
    "LinkType",
    "CorrelationLink",
    "DiscoveryResult",
    "EntityCorrelation",
    # Rollups
    "ActorProfile",
    "CounterpartyFlow",
    "FlowSummary",
    "PassengerCount",
    "EventKind",
    "TimelineEvent",
]
