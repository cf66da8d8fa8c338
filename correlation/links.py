"""
Pairwise link detection between two analysis records.

Five independent passes, each adding typed, scored links:

    entity       shared key entity (after normalization)          8
    pii          same PII type and value (value case-insensitive) 10
    transaction  a shared counterparty between two transactions   7
    flight       same aircraft id                                 6
    semantic     >= 3 shared summary words                        4 + n, max 12

All matching is exact after normalization.
"""

import re
from typing import Optional

from models import AnalysisOutput, AnalysisRecord, CorrelationLink, DiscoveryResult, LinkType
from .normalize import name_of, normalize

ENTITY_STRENGTH = 8
PII_STRENGTH = 10
TRANSACTION_STRENGTH = 7
FLIGHT_STRENGTH = 6
SEMANTIC_BASE_STRENGTH = 4
SEMANTIC_MAX_STRENGTH = 12
SEMANTIC_MIN_SHARED = 3
SEMANTIC_MAX_LISTED = 4
SEMANTIC_MIN_WORD_LENGTH = 5

MAX_LINKS = 15
MAX_TOTAL_STRENGTH = 100

UNKNOWN_AIRCRAFT = "Unknown"

# Fixed bilingual list; words of four letters or fewer are already dropped
STOP_WORDS = frozenset({
    # French
    "alors", "ainsi", "après", "apres", "aucun", "aucune", "autre", "autres",
    "avant", "avaient", "avait", "avoir", "cette", "celle", "celles", "celui", "certains",
    "chaque", "comme", "concernant", "contre", "depuis", "dernier", "dernière", "derniers",
    "elles", "encore", "entre", "étaient", "etaient", "était", "etait", "être",
    "faire", "leurs", "lorsque", "notamment", "notre", "parce", "pendant",
    "plusieurs", "pourquoi", "quand", "quelle", "quelles", "quelque", "quelques",
    "selon", "serait", "seraient", "toutes", "votre", "document",
    "documents", "analyse", "informations", "information", "personne", "personnes",
    # English
    "about", "above", "after", "again", "against", "among", "because",
    "before", "being", "below", "between", "could", "during", "either", "every",
    "first", "other", "others", "should", "their", "there", "these", "those",
    "through", "under", "until", "where", "which", "while", "within", "without",
    "would", "according", "including", "regarding", "however", "therefore",
})

_WORD_SPLIT = re.compile(r"[\W_]+")


def _link(type_: LinkType, label: str, description: str, strength: int, **related) -> CorrelationLink:
    return CorrelationLink(
        type=type_,
        label=label,
        description=description,
        strength=strength,
        related_data=related,
    )


def _entity_keys(output: AnalysisOutput) -> dict[str, str]:
    """normalized key -> first original spelling, in list order."""
    keys: dict[str, str] = {}
    for entity in output.key_entities:
        name = name_of(entity)
        key = normalize(name)
        if key and key not in keys:
            keys[key] = name
    return keys


def _entity_links(a: AnalysisOutput, b: AnalysisOutput) -> list[CorrelationLink]:
    b_keys = _entity_keys(b)
    return [
        _link(LinkType.ENTITY, "Shared entity", f"{name} appears in both investigations",
              ENTITY_STRENGTH, entity=name)
        for key, name in _entity_keys(a).items()
        if key in b_keys
    ]


def _pii_links(a: AnalysisOutput, b: AnalysisOutput) -> list[CorrelationLink]:
    links = []
    for pa in a.personal_data:
        if not pa.value:
            continue
        for pb in b.personal_data:
            if pa.type == pb.type and pa.value.lower() == pb.value.lower():
                links.append(_link(
                    LinkType.PII,
                    f"Shared {pa.type or 'identifier'}",
                    f"{pa.value} linked to {pa.owner or 'unknown'} and {pb.owner or 'unknown'}",
                    PII_STRENGTH,
                    pii_type=pa.type,
                    value=pa.value,
                ))
    return links


def _shared_counterparty(ta, tb) -> Optional[str]:
    """Original-cased name of the first matching side, checked src-src, dst-dst, src-dst, dst-src."""
    a_src, a_dst = normalize(ta.source), normalize(ta.destination)
    b_src, b_dst = normalize(tb.source), normalize(tb.destination)

    if a_src and a_src == b_src:
        return ta.source
    if a_dst and a_dst == b_dst:
        return ta.destination
    if a_src and a_src == b_dst:
        return ta.source
    if a_dst and a_dst == b_src:
        return ta.destination
    return None


def _transaction_links(a: AnalysisOutput, b: AnalysisOutput) -> list[CorrelationLink]:
    links = []
    for ta in a.financial_transactions:
        for tb in b.financial_transactions:
            shared = _shared_counterparty(ta, tb)
            if shared is None:
                continue
            links.append(_link(
                LinkType.TRANSACTION,
                "Shared counterparty",
                f"{shared} is party to transactions in both investigations",
                TRANSACTION_STRENGTH,
                entity=shared,
            ))
    return links


def _flight_links(a: AnalysisOutput, b: AnalysisOutput) -> list[CorrelationLink]:
    links = []
    for fa in a.flight_logs:
        aircraft = fa.aircraft_id
        if not aircraft or aircraft == UNKNOWN_AIRCRAFT:
            continue
        for fb in b.flight_logs:
            if fb.aircraft_id == aircraft:
                links.append(_link(
                    LinkType.FLIGHT,
                    "Shared aircraft",
                    f"Aircraft {aircraft} appears in both flight logs",
                    FLIGHT_STRENGTH,
                    aircraft_id=aircraft,
                ))
    return links


def theme_words(text: str) -> list[str]:
    """Distinct significant words of a summary, in order of first appearance."""
    seen: dict[str, None] = {}
    for word in _WORD_SPLIT.split((text or "").lower()):
        if len(word) >= SEMANTIC_MIN_WORD_LENGTH and word not in STOP_WORDS:
            seen.setdefault(word, None)
    return list(seen)


def _semantic_links(a: AnalysisOutput, b: AnalysisOutput) -> list[CorrelationLink]:
    b_words = set(theme_words(b.context_summary))
    shared = [w for w in theme_words(a.context_summary) if w in b_words]
    if len(shared) < SEMANTIC_MIN_SHARED:
        return []

    listed = shared[:SEMANTIC_MAX_LISTED]
    return [_link(
        LinkType.SEMANTIC,
        "Thematic overlap",
        f"Shared themes: {', '.join(listed)}",
        min(SEMANTIC_MAX_STRENGTH, SEMANTIC_BASE_STRENGTH + len(shared)),
        themes=listed,
    )]


DETECTORS = (_entity_links, _pii_links, _transaction_links, _flight_links, _semantic_links)


def detect_links(record_a: AnalysisRecord, record_b: AnalysisRecord) -> DiscoveryResult:
    """
    Compare two records and score every bridge between them.

    Returns at most MAX_LINKS links, strongest first (ties keep detection
    order). total_strength sums every detected link, capped at 100.
    A record without output yields an empty result.
    """
    result = DiscoveryResult(source_id=record_a.id, target_id=record_b.id)
    if record_a.output is None or record_b.output is None:
        return result

    links: list[CorrelationLink] = []
    for detector in DETECTORS:
        links.extend(detector(record_a.output, record_b.output))

    links.sort(key=lambda link: link.strength, reverse=True)
    result.links = links[:MAX_LINKS]
    result.total_strength = min(MAX_TOTAL_STRENGTH, sum(link.strength for link in links))
    return result
