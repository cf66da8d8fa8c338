"""
Analysis output - the structured extraction an LLM returns for one query.

Field aliases accept the camelCase names of the dashboard schema and the
French keys the investigation prompt asks for.
"""

from typing import Any, Union

from pydantic import AliasChoices, Field, field_validator

from .base import LooseModel, coerce_list, coerce_number, coerce_score, coerce_text


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class NamedRef(LooseModel):
    """An object standing in for a name (passenger or entity given as a dict)."""
    name: str = Field(default="", validation_alias=_alias("name", "nom"))

    @field_validator("name", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)


# A name given either as a plain string or as {name} / {nom}
NameLike = Union[str, NamedRef]


class DocumentDetail(LooseModel):
    """One source document summarized by the analysis."""
    title: str = ""
    type: str = ""
    description: str = ""
    date: str = ""
    key_facts: list[str] = Field(
        default_factory=list, validation_alias=_alias("key_facts", "keyFacts")
    )
    legal_implications: str = Field(
        default="", validation_alias=_alias("legal_implications", "legalImplications")
    )

    @field_validator("title", "type", "description", "date", "legal_implications", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("key_facts", mode="before")
    @classmethod
    def _facts(cls, v):
        return [coerce_text(f) for f in coerce_list(v)]


class EntityDetail(LooseModel):
    """Role and risk assessment for a named entity."""
    name: str = Field(default="", validation_alias=_alias("name", "nom"))
    role: str = ""
    risk_level: float = Field(default=0.0, validation_alias=_alias("risk_level", "riskLevel"))
    influence: float = 0.0

    @field_validator("name", "role", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("risk_level", "influence", mode="before")
    @classmethod
    def _score(cls, v):
        return coerce_score(v)


class PersonalData(LooseModel):
    """A personally identifying data point (email, phone, address, ...)."""
    type: str = ""
    value: str = Field(default="", validation_alias=_alias("value", "valeur"))
    owner: str = Field(default="", validation_alias=_alias("owner", "proprietaire"))
    context: str = ""

    @field_validator("type", "value", "owner", "context", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)


class FinancialTransaction(LooseModel):
    """A money movement between two counterparties."""
    source: str = ""
    destination: str = ""
    amount: float = Field(default=0.0, validation_alias=_alias("amount", "montant"))
    currency: str = Field(default="", validation_alias=_alias("currency", "devise"))
    date: str = ""
    description: str = ""

    @field_validator("source", "destination", "currency", "date", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v):
        return coerce_number(v)


class FlightLog(LooseModel):
    """A flight manifest entry."""
    aircraft_id: str = Field(
        default="", validation_alias=_alias("aircraft_id", "aircraftId", "source")
    )
    departure: str = Field(default="", validation_alias=_alias("departure", "depart"))
    arrival: str = Field(default="", validation_alias=_alias("arrival", "destination"))
    date: str = ""
    passengers: list[NameLike] = Field(
        default_factory=list, validation_alias=_alias("passengers", "passagers")
    )
    description: str = ""

    @field_validator("aircraft_id", "departure", "arrival", "date", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("passengers", mode="before")
    @classmethod
    def _passengers(cls, v):
        return [p if isinstance(p, (str, dict, NamedRef)) else coerce_text(p) for p in coerce_list(v)]


class AnalysisOutput(LooseModel):
    """
    Semi-structured extraction result.

    Every field is optional; missing collections are empty.
    """
    context_summary: str = Field(
        default="",
        validation_alias=_alias("context_summary", "contextSummary", "context_general"),
    )
    documents: list[DocumentDetail] = Field(default_factory=list)
    key_entities: list[NameLike] = Field(
        default_factory=list,
        validation_alias=_alias("key_entities", "keyEntities", "entites_cles"),
    )
    entity_details: list[EntityDetail] = Field(
        default_factory=list,
        validation_alias=_alias("entity_details", "entityDetails", "entites_details"),
    )
    personal_data: list[PersonalData] = Field(
        default_factory=list,
        validation_alias=_alias("personal_data", "personalData", "donnees_personnelles"),
    )
    financial_transactions: list[FinancialTransaction] = Field(
        default_factory=list,
        validation_alias=_alias(
            "financial_transactions", "financialTransactions", "transactions_financieres"
        ),
    )
    flight_logs: list[FlightLog] = Field(
        default_factory=list,
        validation_alias=_alias("flight_logs", "flightLogs", "journaux_de_vol"),
    )
    legal_context: str = Field(
        default="",
        validation_alias=_alias("legal_context", "legalContext", "contexte_juridique"),
    )

    @field_validator("context_summary", "legal_context", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator(
        "documents",
        "entity_details",
        "personal_data",
        "financial_transactions",
        "flight_logs",
        mode="before",
    )
    @classmethod
    def _collections(cls, v):
        return [item for item in coerce_list(v) if isinstance(item, (dict, LooseModel))]

    @field_validator("key_entities", mode="before")
    @classmethod
    def _entities(cls, v: Any):
        return [e for e in coerce_list(v) if isinstance(e, (str, dict, NamedRef))]
