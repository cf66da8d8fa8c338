"""
Discovery aggregator - ranks every record bridged to a target record.
"""

import asyncio
from typing import Optional

from models import AnalysisRecord, DiscoveryResult, RecordStatus
from .links import detect_links


async def _compare(target: AnalysisRecord, candidate: AnalysisRecord) -> Optional[DiscoveryResult]:
    """One pairwise comparison. A failure counts as "no links" for that pair."""
    try:
        return detect_links(target, candidate)
    except Exception as e:
        print(f"[Discovery] Comparison {target.id} <-> {candidate.id} failed: {e}")
        return None


async def find_discoveries(store, target_id: str) -> list[DiscoveryResult]:
    """
    Compare target_id against every other completed record.

    Args:
        store: Anything exposing async get_all_results()
        target_id: Record to find bridges for

    Returns:
        Results with at least one link, strongest total first. Empty when the
        target is unknown or has no output. Store failures propagate.
    """
    records = await store.get_all_results()

    target = next((r for r in records if r.id == target_id), None)
    if target is None or target.output is None:
        return []

    candidates = [
        r for r in records
        if r.id != target_id and r.status == RecordStatus.COMPLETED
    ]

    results = await asyncio.gather(*(_compare(target, c) for c in candidates))

    found = [r for r in results if r is not None and r.links]
    found.sort(key=lambda r: r.total_strength, reverse=True)
    return found
