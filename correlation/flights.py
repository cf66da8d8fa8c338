"""
Passenger frequency across flight logs.
"""

from collections import Counter
from typing import Iterable

from models import AnalysisRecord, PassengerCount
from .normalize import name_of

UNKNOWN_PASSENGER = "Unknown"


def passenger_stats(records: Iterable[AnalysisRecord], limit: int = 15) -> list[PassengerCount]:
    """Most frequent passenger names, highest count first."""
    counts: Counter = Counter()
    for record in records:
        if not record.is_correlatable:
            continue
        for flight in record.output.flight_logs:
            for passenger in flight.passengers:
                counts[name_of(passenger) or UNKNOWN_PASSENGER] += 1

    return [PassengerCount(name=name, flights=n) for name, n in counts.most_common(limit)]
