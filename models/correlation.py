"""
Correlation models - derived views, computed per query and never persisted.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class LinkType(str, Enum):
    """Kind of bridge between two records."""
    ENTITY = "entity"
    PII = "pii"
    TRANSACTION = "transaction"
    FLIGHT = "flight"
    SEMANTIC = "semantic"


class CorrelationLink(BaseModel):
    """One detected bridge between two records."""
    type: LinkType
    label: str
    description: str = ""
    strength: int = Field(ge=0)
    related_data: dict[str, Any] = Field(default_factory=dict)


class DiscoveryResult(BaseModel):
    """Outcome of comparing exactly two records."""
    source_id: str
    target_id: str
    links: list[CorrelationLink] = Field(default_factory=list)
    total_strength: int = Field(default=0, ge=0, le=100)

    def other_id(self, record_id: str) -> str:
        """The record on the far side of the bridge from record_id."""
        return self.target_id if record_id == self.source_id else self.source_id


class EntityCorrelation(BaseModel):
    """Cross-session rollup for one entity."""
    entity: str
    occurrences: int = 0
    related_investigations: list[str] = Field(default_factory=list)
    shared_thematics: list[str] = Field(default_factory=list)
    risk_score: int = Field(default=0, ge=0, le=10)
    financial_hub: bool = False
    total_amount_sent: float = 0.0
    total_amount_received: float = 0.0
    pii_count: int = 0
