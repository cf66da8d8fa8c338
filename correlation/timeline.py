"""
Chronology of dated events across the record set.

Three sources per record:
    document     a document whose date carries a four-digit year
    key_event    a key fact mentioning a 19xx/20xx year
    transaction  a transaction whose date carries a four-digit year

Events are ordered newest year first; within a year they keep record order.
"""

import re
from typing import Iterable, Optional, Union

from models import AnalysisRecord, EventKind, TimelineEvent

UNKNOWN_DATE_MARKERS = ("inconnue", "unknown")
KEY_EVENT_TITLE = "Key fact"

_YEAR = re.compile(r"\d{4}")
_FACT_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")


def _year(text: str, pattern=_YEAR) -> Optional[int]:
    match = pattern.search(text or "")
    return int(match.group(0)) if match else None


def _record_events(record: AnalysisRecord) -> list[TimelineEvent]:
    out = record.output
    events = []

    for d_idx, doc in enumerate(out.documents):
        if any(marker in doc.date.lower() for marker in UNKNOWN_DATE_MARKERS):
            continue
        year = _year(doc.date)
        if year is not None:
            events.append(TimelineEvent(
                id=f"doc-{record.id}-{d_idx}",
                kind=EventKind.DOCUMENT,
                year=year,
                date=doc.date,
                title=doc.title,
                description=doc.description,
                source_id=record.id,
            ))

    for d_idx, doc in enumerate(out.documents):
        for f_idx, fact in enumerate(doc.key_facts):
            year = _year(fact, _FACT_YEAR)
            if year is not None:
                events.append(TimelineEvent(
                    id=f"fact-{record.id}-{d_idx}-{f_idx}",
                    kind=EventKind.KEY_EVENT,
                    year=year,
                    date=str(year),
                    title=KEY_EVENT_TITLE,
                    description=fact,
                    source_id=record.id,
                ))

    for t_idx, t in enumerate(out.financial_transactions):
        year = _year(t.date)
        if year is not None:
            events.append(TimelineEvent(
                id=f"tx-{record.id}-{t_idx}",
                kind=EventKind.TRANSACTION,
                year=year,
                date=t.date,
                title=f"Funds movement: {t.amount:,.0f} {t.currency}".strip(),
                description=t.description or f"{t.source} -> {t.destination}",
                source_id=record.id,
            ))

    return events


def timeline_events(
    records: Iterable[AnalysisRecord],
    query: str = "",
    kind: Union[EventKind, str, None] = None,
) -> list[TimelineEvent]:
    """
    Dated events from every completed record, newest year first.

    Args:
        records: Record set to scan
        query: Case-insensitive substring of title, description or date
        kind: Restrict to one EventKind; None or "all" keeps every kind

    Raises ValueError for an unknown kind.
    """
    if kind == "all":
        kind = None
    if kind is not None:
        kind = EventKind(kind)

    events = []
    for record in records:
        if record.is_correlatable:
            events.extend(_record_events(record))

    events.sort(key=lambda e: e.year, reverse=True)

    query = query.lower()
    return [
        e for e in events
        if (kind is None or e.kind == kind)
        and (not query or query in f"{e.title}\n{e.description}\n{e.date}".lower())
    ]
