"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O
- integration/ Component boundaries, real I/O to temp locations

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests -v                # Everything
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from models import AnalysisRecord


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")
    config.addinivalue_line("markers", "slow: Tests that take > 1s")


@pytest.fixture
def make_record():
    """
    Build a record from output fields.

    Usage:
        a = make_record("A", keyEntities=["John Doe"])
        b = make_record("B", status="error", output=None)
    """
    counter = {"ts": 1_700_000_000_000}

    def build(record_id: str, status: str = "completed", output="__fields__", **fields):
        counter["ts"] += 1000
        data = {
            "id": record_id,
            "status": status,
            "input": {"query": f"Query {record_id}", "targetUrl": "OSINT SCAN", "timestamp": counter["ts"]},
            "output": fields if output == "__fields__" else output,
        }
        return AnalysisRecord.model_validate(data)

    return build


@pytest.fixture
def french_output():
    """Raw analysis output as the French investigation prompt returns it."""
    return {
        "context_general": "Analyse des vols privés et transferts offshore.",
        "entites_cles": ["Jean Dupont", {"nom": "Société Écran"}],
        "entites_details": [
            {"nom": "Jean Dupont", "role": "Pilote", "risk_level": "7", "influence": 4},
        ],
        "donnees_personnelles": [
            {"type": "phone", "value": "+33 6 12 34 56 78", "owner": "Jean Dupont", "context": "carnet"},
        ],
        "transactions_financieres": [
            {"source": "Jean Dupont", "destination": "Société Écran", "montant": "250 000",
             "devise": "EUR", "date": "2003-05-01", "description": "Virement vers compte écran"},
        ],
        "journaux_de_vol": [
            {"source": "N908JE", "depart": "Teterboro", "destination": "Palm Beach",
             "date": "2002-02-09", "passagers": ["Jean Dupont", {"nom": "Invité"}]},
        ],
        "contexte_juridique": "Procédure en cours",
    }


@pytest.fixture
def sample_entities():
    """Standard test entities."""
    return ["Jeffrey Epstein", "Ghislaine Maxwell", "Offshore Corp"]
