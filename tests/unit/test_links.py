"""Unit tests for pairwise link detection."""

from correlation.links import (
    ENTITY_STRENGTH,
    FLIGHT_STRENGTH,
    MAX_LINKS,
    PII_STRENGTH,
    TRANSACTION_STRENGTH,
    detect_links,
    theme_words,
)
from models import LinkType


def _of_type(result, link_type):
    return [link for link in result.links if link.type == link_type]


def _signature(result, types):
    return sorted(
        (link.type.value, link.strength, tuple(sorted(map(str, link.related_data.values()))))
        for link in result.links if link.type in types
    )


class TestEmptySafety:
    """Records without output never link."""

    def test_output_null(self, make_record):
        a = make_record("A", keyEntities=["Jeffrey Epstein"])
        b = make_record("B", status="error", output=None)

        result = detect_links(a, b)

        assert result.links == []
        assert result.total_strength == 0
        assert result.source_id == "A"
        assert result.target_id == "B"

    def test_empty_outputs(self, make_record):
        result = detect_links(make_record("A"), make_record("B"))
        assert result.links == []
        assert result.total_strength == 0


class TestEntityLinks:
    """Shared key entities."""

    def test_entity_bridge_across_spellings(self, make_record):
        a = make_record("A", keyEntities=["Jeffrey Epstein"])
        b = make_record("B", keyEntities=["EPSTEIN Jeffrey"])

        result = detect_links(a, b)

        entity_links = _of_type(result, LinkType.ENTITY)
        assert len(result.links) == 1
        assert len(entity_links) == 1
        assert entity_links[0].strength == ENTITY_STRENGTH
        assert entity_links[0].related_data["entity"] == "Jeffrey Epstein"

    def test_name_like_objects(self, make_record):
        a = make_record("A", keyEntities=[{"name": "Ghislaine Maxwell"}])
        b = make_record("B", keyEntities=[{"nom": "Maxwell, Ghislaine"}])
        assert len(_of_type(detect_links(a, b), LinkType.ENTITY)) == 1

    def test_duplicate_spellings_link_once(self, make_record):
        a = make_record("A", keyEntities=["Jeffrey Epstein", "Epstein Jeffrey"])
        b = make_record("B", keyEntities=["JEFFREY EPSTEIN"])
        assert len(detect_links(a, b).links) == 1

    def test_empty_names_never_match(self, make_record):
        a = make_record("A", keyEntities=["", "A.B."])
        b = make_record("B", keyEntities=["", "X"])
        assert detect_links(a, b).links == []


class TestPiiLinks:
    """Shared personal data."""

    def test_pii_bridge_case_insensitive(self, make_record):
        a = make_record("A", personalData=[{"type": "email", "value": "x@y.com", "owner": "John Doe"}])
        b = make_record("B", personalData=[{"type": "email", "value": "X@Y.COM", "owner": "Jane Roe"}])

        result = detect_links(a, b)

        assert len(result.links) == 1
        assert result.links[0].type == LinkType.PII
        assert result.links[0].strength == PII_STRENGTH
        assert result.links[0].related_data == {"pii_type": "email", "value": "x@y.com"}

    def test_type_must_match_exactly(self, make_record):
        a = make_record("A", personalData=[{"type": "email", "value": "x@y.com"}])
        b = make_record("B", personalData=[{"type": "Email", "value": "x@y.com"}])
        assert detect_links(a, b).links == []


class TestTransactionLinks:
    """Shared counterparties."""

    def test_destination_matches_source(self, make_record):
        a = make_record("A", financialTransactions=[
            {"source": "Alpha Bank", "destination": "Offshore Corp", "amount": 10},
        ])
        b = make_record("B", financialTransactions=[
            {"source": "OFFSHORE CORP", "destination": "Someone Else", "amount": 5},
        ])

        links = _of_type(detect_links(a, b), LinkType.TRANSACTION)

        assert len(links) == 1
        assert links[0].strength == TRANSACTION_STRENGTH
        assert links[0].related_data["entity"] == "Offshore Corp"

    def test_source_source_checked_first(self, make_record):
        a = make_record("A", financialTransactions=[{"source": "Alpha Bank", "destination": "Beta Trust"}])
        b = make_record("B", financialTransactions=[{"source": "Alpha Bank", "destination": "Beta Trust"}])

        links = _of_type(detect_links(a, b), LinkType.TRANSACTION)

        assert len(links) == 1
        assert links[0].related_data["entity"] == "Alpha Bank"

    def test_no_shared_counterparty(self, make_record):
        a = make_record("A", financialTransactions=[{"source": "Alpha Bank", "destination": "Beta Trust"}])
        b = make_record("B", financialTransactions=[{"source": "Gamma Fund", "destination": "Delta Holdings"}])
        assert detect_links(a, b).links == []


class TestFlightLinks:
    """Shared aircraft."""

    def test_same_aircraft(self, make_record):
        a = make_record("A", flightLogs=[{"aircraftId": "N908JE", "departure": "TEB"}])
        b = make_record("B", flightLogs=[{"aircraftId": "N908JE", "departure": "PBI"}])

        links = _of_type(detect_links(a, b), LinkType.FLIGHT)

        assert len(links) == 1
        assert links[0].strength == FLIGHT_STRENGTH
        assert links[0].related_data["aircraft_id"] == "N908JE"

    def test_unknown_aircraft_ignored(self, make_record):
        a = make_record("A", flightLogs=[{"aircraftId": "Unknown"}, {"aircraftId": ""}])
        b = make_record("B", flightLogs=[{"aircraftId": "Unknown"}, {"aircraftId": ""}])
        assert detect_links(a, b).links == []


class TestSemanticLinks:
    """Thematic overlap between summaries."""

    def test_two_shared_words_is_not_enough(self, make_record):
        a = make_record("A", contextSummary="Island property purchased through trusts")
        b = make_record("B", contextSummary="The island property was seized")
        assert _of_type(detect_links(a, b), LinkType.SEMANTIC) == []

    def test_three_shared_words(self, make_record):
        a = make_record("A", contextSummary="Island property purchased through shell trusts")
        b = make_record("B", contextSummary="Shell trusts held the island property")

        links = _of_type(detect_links(a, b), LinkType.SEMANTIC)

        # island, property, shell, trusts
        assert len(links) == 1
        assert links[0].strength == 8
        assert links[0].related_data["themes"] == ["island", "property", "shell", "trusts"]

    def test_strength_capped_and_themes_listed_up_to_four(self, make_record):
        words = "alpha bravo charlie delta echos foxtrot gamma hotel india juliet"
        a = make_record("A", contextSummary=words)
        b = make_record("B", contextSummary=words.upper())

        links = _of_type(detect_links(a, b), LinkType.SEMANTIC)

        assert links[0].strength == 12
        assert len(links[0].related_data["themes"]) == 4

    def test_stop_words_and_short_words_dropped(self):
        assert theme_words("Which documents about the flights there were") == ["flights"]


class TestRanking:
    """Ordering, cap and total strength."""

    def _many_links(self, make_record, n_entities):
        names = [f"Person Number{i:03d}" for i in range(n_entities)]
        pii = [{"type": "email", "value": "shared@example.com"}]
        a = make_record("A", keyEntities=names, personalData=pii)
        b = make_record("B", keyEntities=list(reversed(names)), personalData=pii)
        return a, b

    def test_sorted_by_strength_descending(self, make_record):
        a, b = self._many_links(make_record, 3)
        strengths = [link.strength for link in detect_links(a, b).links]
        assert strengths == sorted(strengths, reverse=True)
        assert strengths[0] == PII_STRENGTH

    def test_capped_at_fifteen_links(self, make_record):
        a, b = self._many_links(make_record, 20)

        result = detect_links(a, b)

        assert len(result.links) == MAX_LINKS
        assert result.links[0].type == LinkType.PII
        # Ties keep detection order (record A's entity order)
        entities = [link.related_data["entity"] for link in result.links[1:]]
        assert entities == [f"Person Number{i:03d}" for i in range(14)]

    def test_total_counts_all_links_but_clamps_at_100(self, make_record):
        a, b = self._many_links(make_record, 5)
        assert detect_links(a, b).total_strength == 5 * ENTITY_STRENGTH + PII_STRENGTH

        a, b = self._many_links(make_record, 20)
        assert detect_links(a, b).total_strength == 100


class TestSymmetry:
    """Entity, PII and flight links don't depend on argument order."""

    def test_symmetric_sets(self, make_record):
        a = make_record(
            "A",
            keyEntities=["Jeffrey Epstein", "Lesley Groff"],
            personalData=[{"type": "phone", "value": "555-0100"}],
            flightLogs=[{"aircraftId": "N212JE"}],
        )
        b = make_record(
            "B",
            keyEntities=["Groff, Lesley", "Jeffrey Epstein"],
            personalData=[{"type": "phone", "value": "555-0100"}],
            flightLogs=[{"aircraftId": "N212JE"}, {"aircraftId": "N908JE"}],
        )
        types = {LinkType.PII, LinkType.FLIGHT}

        ab, ba = detect_links(a, b), detect_links(b, a)

        assert _signature(ab, types) == _signature(ba, types)
        assert len(_of_type(ab, LinkType.ENTITY)) == len(_of_type(ba, LinkType.ENTITY)) == 2
        assert ab.total_strength == ba.total_strength
