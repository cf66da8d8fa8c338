"""
Dashboard rollup models - main actors, financial flows, passengers, timeline.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ActorProfile(BaseModel):
    """An entity merged across every record that describes it."""
    name: str
    role: str = ""
    risk_level: float = 0.0
    influence: float = 0.0
    mentions: int = 0
    sources: list[str] = Field(default_factory=list)
    last_seen: int = 0  # epoch ms

    @property
    def weight(self) -> float:
        """Sort key for the actors view."""
        return self.risk_level * self.influence


class CounterpartyFlow(BaseModel):
    """Money sent and received by one counterparty."""
    name: str
    sent: float = 0.0
    received: float = 0.0
    count: int = 0

    @property
    def volume(self) -> float:
        return self.sent + self.received


class FlowSummary(BaseModel):
    """Aggregate view over every transaction in the record set."""
    transaction_count: int = 0
    total_volume: float = 0.0
    high_value_count: int = 0
    suspicious_count: int = 0
    top_counterparties: list[CounterpartyFlow] = Field(default_factory=list)


class PassengerCount(BaseModel):
    """How often a passenger name appears across flight logs."""
    name: str
    flights: int = 0


class EventKind(str, Enum):
    """Where a timeline event was read from."""
    DOCUMENT = "document"
    KEY_EVENT = "key_event"
    TRANSACTION = "transaction"


class TimelineEvent(BaseModel):
    """A dated event pulled from a record's documents or transactions."""
    id: str
    kind: EventKind
    year: int
    date: str = ""  # as written in the source
    title: str = ""
    description: str = ""
    source_id: str = ""
