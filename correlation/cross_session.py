"""
Cross-session correlator - rolls one entity's signal up across every record.

Scoring:
    risk_score = round(avg base risk + pii_count * 1.5 + occurrences * 0.8), max 10
"""

from dataclasses import dataclass, field
from math import floor
from typing import Iterable

from models import AnalysisRecord, EntityCorrelation
from .normalize import name_of, normalize

DEFAULT_ENTITY_RISK = 3   # entity without a details entry
PII_SUBJECT_RISK = 5      # subject known only through PII
PII_SUBJECT_THEME = "Identified via PII"
PII_BONUS = 1.5
FREQUENCY_BONUS = 0.8
MAX_RISK_SCORE = 10
FINANCIAL_HUB_THRESHOLD = 100_000
MAX_THEMES = 5
THEME_WORDS = 3


@dataclass
class _Accumulator:
    display_name: str
    investigations: dict = field(default_factory=dict)  # ordered set of record ids
    themes: dict = field(default_factory=dict)
    pii: dict = field(default_factory=dict)
    total_risk: float = 0.0
    sent: float = 0.0
    received: float = 0.0

    @property
    def significant(self) -> bool:
        """Corroborated, financial, or carrying PII."""
        return len(self.investigations) > 1 or self.sent > 0 or len(self.pii) > 0

    def to_correlation(self) -> EntityCorrelation:
        occurrences = len(self.investigations)
        raw = (
            self.total_risk / occurrences
            + len(self.pii) * PII_BONUS
            + occurrences * FREQUENCY_BONUS
        )
        return EntityCorrelation(
            entity=self.display_name,
            occurrences=occurrences,
            related_investigations=list(self.investigations),
            shared_thematics=list(self.themes)[:MAX_THEMES],
            risk_score=max(0, min(MAX_RISK_SCORE, floor(raw + 0.5))),
            financial_hub=(
                self.sent > FINANCIAL_HUB_THRESHOLD or self.received > FINANCIAL_HUB_THRESHOLD
            ),
            total_amount_sent=self.sent,
            total_amount_received=self.received,
            pii_count=len(self.pii),
        )


def _mentions(record: AnalysisRecord) -> dict[str, str]:
    """normalized key -> first spelling: key entities first, then counterparties."""
    mentions: dict[str, str] = {}
    names = [name_of(e) for e in record.output.key_entities]
    for t in record.output.financial_transactions:
        names.extend((t.source, t.destination))

    for name in names:
        key = normalize(name)
        if key:
            mentions.setdefault(key, name)
    return mentions


def _absorb(entities: dict[str, _Accumulator], record: AnalysisRecord) -> None:
    out = record.output

    risk_by_key: dict[str, float] = {}
    for detail in out.entity_details:
        risk_by_key.setdefault(normalize(detail.name), detail.risk_level)

    pii_by_owner: dict[str, list[str]] = {}
    pii_owner_name: dict[str, str] = {}
    for p in out.personal_data:
        key = normalize(p.owner)
        if key:
            pii_by_owner.setdefault(key, []).append(f"{p.type}:{p.value}")
            pii_owner_name.setdefault(key, p.owner)

    flows = [(normalize(t.source), normalize(t.destination), t) for t in out.financial_transactions]

    for key, name in _mentions(record).items():
        acc = entities.setdefault(key, _Accumulator(display_name=name))
        acc.investigations[record.id] = None
        acc.total_risk += risk_by_key.get(key, DEFAULT_ENTITY_RISK)

        for pii in pii_by_owner.get(key, []):
            acc.pii[pii] = None

        for src, dst, t in flows:
            if src == key:
                acc.sent += t.amount
            if dst == key:
                acc.received += t.amount
            if (src == key or dst == key) and t.description:
                acc.themes[" ".join(t.description.split(" ")[:THEME_WORDS])] = None

    # PII owners never named as entities still surface
    for key, values in pii_by_owner.items():
        if key in entities:
            continue
        entities[key] = _Accumulator(
            display_name=pii_owner_name[key],
            investigations={record.id: None},
            themes={PII_SUBJECT_THEME: None},
            pii=dict.fromkeys(values),
            total_risk=PII_SUBJECT_RISK,
        )


def correlate_records(records: Iterable[AnalysisRecord]) -> list[EntityCorrelation]:
    """Entity rollups over a record set, highest risk first."""
    entities: dict[str, _Accumulator] = {}
    for record in records:
        if record.is_correlatable:
            _absorb(entities, record)

    correlations = [acc.to_correlation() for acc in entities.values() if acc.significant]
    correlations.sort(key=lambda c: c.risk_score, reverse=True)
    return correlations


async def compute_entity_correlations(store) -> list[EntityCorrelation]:
    """Fetch every record from the store and roll entities up across them."""
    return correlate_records(await store.get_all_results())
