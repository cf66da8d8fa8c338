"""
Financial flow rollup over every transaction in the record set.
"""

from typing import Iterable

from models import AnalysisRecord, CounterpartyFlow, FinancialTransaction, FlowSummary

HIGH_VALUE_THRESHOLD = 100_000
SUSPICIOUS_THRESHOLD = 500_000
FLAGGED_THRESHOLD = 1_000_000
FLAGGED_MARKER = "Offshore"
TOP_COUNTERPARTIES = 6

FILTER_MODES = ("all", "high", "suspicious")


def iter_transactions(records: Iterable[AnalysisRecord]):
    """Yield (record, transaction) over completed records."""
    for record in records:
        if record.is_correlatable:
            for t in record.output.financial_transactions:
                yield record, t


def summarize_flows(records: Iterable[AnalysisRecord]) -> FlowSummary:
    """Totals, threshold counts and the largest counterparties by volume."""
    flows: dict[str, CounterpartyFlow] = {}
    summary = FlowSummary()

    for _, t in iter_transactions(records):
        summary.transaction_count += 1
        summary.total_volume += t.amount
        if t.amount > HIGH_VALUE_THRESHOLD:
            summary.high_value_count += 1
        if t.amount > SUSPICIOUS_THRESHOLD:
            summary.suspicious_count += 1

        src = flows.setdefault(t.source, CounterpartyFlow(name=t.source))
        src.sent += t.amount
        src.count += 1
        dst = flows.setdefault(t.destination, CounterpartyFlow(name=t.destination))
        dst.received += t.amount
        dst.count += 1

    ranked = sorted(flows.values(), key=lambda f: f.volume, reverse=True)
    summary.top_counterparties = ranked[:TOP_COUNTERPARTIES]
    return summary


def is_flagged(t: FinancialTransaction) -> bool:
    return (
        t.amount > FLAGGED_THRESHOLD
        or FLAGGED_MARKER in t.source
        or FLAGGED_MARKER in t.destination
    )


def filter_transactions(
    records: Iterable[AnalysisRecord],
    query: str = "",
    mode: str = "all",
) -> list[tuple[str, FinancialTransaction]]:
    """
    Transactions matching a text query and a filter mode, newest first.

    Returns (record id, transaction) pairs. Undated transactions sort last.
    """
    if mode not in FILTER_MODES:
        raise ValueError(f"Unknown filter mode: {mode}")

    query = query.lower()
    matched = []
    for record, t in iter_transactions(records):
        text = f"{t.source}\n{t.destination}\n{t.description}".lower()
        if query not in text:
            continue
        if mode == "high" and t.amount <= HIGH_VALUE_THRESHOLD:
            continue
        if mode == "suspicious" and not is_flagged(t):
            continue
        matched.append((record.id, t))

    matched.sort(key=lambda pair: pair[1].date, reverse=True)
    return matched
