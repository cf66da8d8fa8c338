"""
Analysis records - one investigation unit as persisted by the record store.
"""

import time
from enum import Enum
from itertools import count
from typing import Optional, Sequence

from pydantic import AliasChoices, BaseModel, Field

from .base import LooseModel
from .output import AnalysisOutput


class RecordStatus(str, Enum):
    """Lifecycle of an analysis record."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class AnalysisInput(LooseModel):
    """The query that produced a record."""
    query: str = ""
    target_url: str = Field(default="", validation_alias=AliasChoices("target_url", "targetUrl"))
    timestamp: int = 0  # epoch milliseconds
    file_content: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("file_content", "fileContent")
    )


class SourceRef(BaseModel):
    """A grounding source cited by the LLM."""
    title: str = ""
    uri: str = ""


class AnalysisRecord(LooseModel):
    """
    One completed (or pending/failed) investigation.

    Only records with status COMPLETED and a non-null output take part in
    correlation; everything else is silently skipped.
    """
    id: str
    status: RecordStatus = RecordStatus.PENDING
    input: AnalysisInput = Field(default_factory=AnalysisInput)
    output: Optional[AnalysisOutput] = None

    logs: list[str] = Field(default_factory=list)
    sources: list[SourceRef] = Field(default_factory=list)
    duration_ms: int = Field(default=0, validation_alias=AliasChoices("duration_ms", "durationMs"))
    error: Optional[str] = None

    @property
    def is_correlatable(self) -> bool:
        """Completed with an output."""
        return self.status == RecordStatus.COMPLETED and self.output is not None

    @property
    def title(self) -> str:
        return self.input.query or "Untitled analysis"

    def summary(self) -> dict:
        """Compact dict for listings."""
        out = self.output
        return {
            "id": self.id,
            "status": self.status.value,
            "query": self.input.query,
            "timestamp": self.input.timestamp,
            "entities": len(out.key_entities) if out else 0,
            "transactions": len(out.financial_transactions) if out else 0,
            "pii": len(out.personal_data) if out else 0,
            "flights": len(out.flight_logs) if out else 0,
        }


DEFAULT_QUERIES = (
    "What are the last known positions based on the available data?",
    "Analyse social media activity in the 48h preceding the disappearance.",
    "Identify the individuals who had the last contacts with the person.",
    "Are there suspicious financial movements or recent withdrawals?",
    "Map the places habitually frequented.",
    "Detail the inconsistencies in the collected testimonies.",
)


class RecordIdSequence:
    """
    Mints pending records with sequential ids.

    Owns its own counter; create one per session instead of sharing state.
    """

    def __init__(self, queries: Sequence[str] = DEFAULT_QUERIES, start: int = 0,
                 target_url: str = "OSINT SCAN"):
        if not queries:
            raise ValueError("queries must not be empty")
        self._queries = list(queries)
        self._counter = count(start)
        self.target_url = target_url

    def next_id(self, now_ms: Optional[int] = None) -> tuple[str, int]:
        """Return (id, sequence index)."""
        now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
        index = next(self._counter)
        return f"ANALYSE-{str(now_ms)[-6:]}-{index}", index

    def generate(self, n: int, now_ms: Optional[int] = None) -> list[AnalysisRecord]:
        """Create n pending records, 2 seconds apart, cycling the query list."""
        now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
        records = []
        for i in range(n):
            record_id, index = self.next_id(now_ms)
            records.append(AnalysisRecord(
                id=record_id,
                status=RecordStatus.PENDING,
                input=AnalysisInput(
                    query=self._queries[index % len(self._queries)],
                    target_url=self.target_url,
                    timestamp=now_ms + i * 2000,
                ),
            ))
        return records
