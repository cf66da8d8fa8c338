"""
Main actors rollup - entity details merged across records.
"""

from typing import Iterable, Optional

from models import ActorProfile, AnalysisRecord
from .normalize import name_of, normalize

MENTIONED_ROLE = "Mentioned party"
MENTIONED_RISK = 5
MENTIONED_INFLUENCE = 3


def aggregate_actors(records: Iterable[AnalysisRecord]) -> list[ActorProfile]:
    """
    Merge entity details by normalized name.

    Repeated details raise risk/influence to their max and keep the longest
    role. Names only listed as key entities get a neutral profile.
    """
    actors: dict[str, ActorProfile] = {}

    for record in records:
        if not record.is_correlatable:
            continue
        seen_at = record.input.timestamp

        for detail in record.output.entity_details:
            key = normalize(detail.name)
            if not key:
                continue
            actor = actors.get(key)
            if actor is None:
                actors[key] = ActorProfile(
                    name=detail.name,
                    role=detail.role,
                    risk_level=detail.risk_level,
                    influence=detail.influence,
                    mentions=1,
                    sources=[record.id],
                    last_seen=seen_at,
                )
                continue

            actor.mentions += 1
            if record.id not in actor.sources:
                actor.sources.append(record.id)
            actor.risk_level = max(actor.risk_level, detail.risk_level)
            actor.influence = max(actor.influence, detail.influence)
            if len(actor.role) < len(detail.role):
                actor.role = detail.role
            actor.last_seen = max(actor.last_seen, seen_at)

        for entity in record.output.key_entities:
            name = name_of(entity)
            key = normalize(name)
            if key and key not in actors:
                actors[key] = ActorProfile(
                    name=name,
                    role=MENTIONED_ROLE,
                    risk_level=MENTIONED_RISK,
                    influence=MENTIONED_INFLUENCE,
                    mentions=1,
                    sources=[record.id],
                    last_seen=seen_at,
                )

    return sorted(actors.values(), key=lambda a: a.weight, reverse=True)


def filter_actors(
    actors: Iterable[ActorProfile],
    query: str = "",
    role: Optional[str] = None,
    min_risk: float = 0,
    only_recurring: bool = False,
) -> list[ActorProfile]:
    """Apply the actors view filters, keeping the incoming order."""
    query = query.lower()
    role = role.lower() if role and role != "all" else None
    return [
        a for a in actors
        if query in a.name.lower()
        and (role is None or role in a.role.lower())
        and a.risk_level >= min_risk
        and (not only_recurring or a.mentions > 1)
    ]
