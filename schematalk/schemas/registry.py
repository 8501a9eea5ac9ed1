"""
schematalk/schemas/registry.py
Domain schemas with model-level metadata, a registry over them, and the ISO date codec

Each registered model carries an id, title, description and examples in its
JSON Schema; the registry reads them back so prompts, validators and UIs use
one definition.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

logger = logging.getLogger(__name__)


# ============================================================
# Ski weather
# ============================================================
class SkiWeatherQuery(BaseModel):
    """What we ask the model to evaluate"""
    model_config = ConfigDict(
        title="Ski Weather Query",
        json_schema_extra={
            "$id": "ski_weather.query",
            "description": (
                "Parameters for evaluating whether conditions are good for skiing "
                "on a given date and location."
            ),
            "examples": [
                {
                    "location": "Zermatt",
                    "dateISO": "2025-12-20",
                    "minSnowDepthCm": 20,
                    "maxWindSpeedKmh": 50,
                    "preferColdBelowC": -2,
                }
            ],
        },
    )

    location: str = Field(min_length=2)
    # wire format stays a string; ISO_DATE decodes it for business logic
    dateISO: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}", description="Target day (YYYY-MM-DD)")
    minSnowDepthCm: int = Field(0, ge=0, le=1000)
    maxWindSpeedKmh: int = Field(60, ge=0, le=200)
    preferColdBelowC: float = Field(0, ge=-50, le=10)


class SkiAnswerConditions(BaseModel):
    snowDepthCm: float = Field(ge=0, le=2000)
    windSpeedKmh: float = Field(ge=0, le=300)
    temperatureC: float = Field(ge=-60, le=60)


Recommendation = Literal["Go", "Consider", "Avoid"]


class SkiWeatherAnswer(BaseModel):
    model_config = ConfigDict(
        title="Ski Weather Answer",
        json_schema_extra={
            "$id": "ski_weather.answer",
            "description": (
                "Structured assessment including conditions and a recommendation "
                "for skiing on the requested date."
            ),
            "examples": [
                {
                    "good": True,
                    "reason": "Fresh snow, low wind, and sub-zero temps for good snow quality.",
                    "conditions": {"snowDepthCm": 45, "windSpeedKmh": 20, "temperatureC": -4},
                    "recommendation": "Go",
                }
            ],
        },
    )

    good: bool = Field(description="Whether conditions are good for skiing")
    reason: str = Field(min_length=5)
    conditions: SkiAnswerConditions
    recommendation: Recommendation = Field(description="Actionable recommendation based on thresholds")


class BareSkiConditions(BaseModel):
    snowDepthCm: float
    windSpeedKmh: float
    temperatureC: float


class BareSkiWeatherAnswer(BaseModel):
    good: bool
    reason: str
    conditions: BareSkiConditions
    recommendation: Recommendation


# ============================================================
# Prescription
# ============================================================
class PrescriptionRequest(BaseModel):
    model_config = ConfigDict(
        title="Prescription Request",
        json_schema_extra={
            "$id": "prescription.request",
            "description": (
                "Normalized request including patient ID, medication, dosage mg, "
                "frequency per day, allergies, and age."
            ),
            "examples": [
                {
                    "patientId": "P-12345",
                    "medication": "Amoxicillin",
                    "dosageMg": 500,
                    "frequencyPerDay": 3,
                    "allergies": ["Penicillin"],
                    "ageYears": 35,
                }
            ],
        },
    )

    patientId: str = Field(min_length=3)
    medication: str = Field(min_length=2)
    dosageMg: int = Field(ge=1, le=1000)
    frequencyPerDay: int = Field(ge=1, le=6)
    allergies: List[str] = Field(default_factory=list)
    ageYears: int = Field(ge=0, le=120)


Route = Literal["oral", "iv", "topical"]


class PrescriptionDraft(BaseModel):
    """Draft only; a clinician validates before use"""
    model_config = ConfigDict(
        title="Prescription Output (Draft)",
        json_schema_extra={
            "$id": "prescription.output",
            "description": (
                "Draft prescription details returned by AI for review. Must be validated "
                "by clinical rules and a licensed practitioner."
            ),
            "examples": [
                {
                    "medication": "Amoxicillin",
                    "dosageMg": 500,
                    "units": "mg",
                    "route": "oral",
                    "frequencyPerDay": 3,
                    "instructions": "Take after meals; complete full course.",
                    "contraindications": ["Allergy: Penicillin"],
                }
            ],
        },
    )

    medication: str
    dosageMg: int = Field(ge=1, le=1000)
    units: Literal["mg"]
    route: Route
    frequencyPerDay: int = Field(ge=1, le=6)
    instructions: str = Field(min_length=5)
    contraindications: List[str] = Field(default_factory=list)


class BarePrescriptionDraft(BaseModel):
    medication: str
    dosageMg: float
    units: Literal["mg"]
    route: Route
    frequencyPerDay: float
    instructions: str
    contraindications: Optional[List[str]] = None


# ============================================================
# Registry
# ============================================================
@dataclass(frozen=True)
class SchemaMeta:
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    examples: List[Any] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "examples": list(self.examples),
        }


def read_meta(model: Type[BaseModel]) -> Optional[SchemaMeta]:
    """Metadata as published in the model's JSON Schema (None without an id)"""
    schema = model.model_json_schema()
    schema_id = schema.get("$id")
    if not schema_id:
        return None
    return SchemaMeta(
        id=schema_id,
        title=schema.get("title"),
        description=schema.get("description"),
        examples=schema.get("examples", []),
    )


class DomainRegistry:
    """
    Central table of domain schemas and their metadata.

    Lookup by model class or by schema id.
    """

    def __init__(self):
        self._by_id: Dict[str, Type[BaseModel]] = {}
        self._meta: Dict[Type[BaseModel], SchemaMeta] = {}

    def add(self, model: Type[BaseModel], meta: Optional[SchemaMeta] = None) -> "DomainRegistry":
        """
        Raises:
            ValueError: the model has no id, or the id is taken by another model
        """
        meta = meta or read_meta(model)
        if meta is None:
            raise ValueError(f"{model.__name__} has no schema id; cannot register it")
        existing = self._by_id.get(meta.id)
        if existing is not None and existing is not model:
            raise ValueError(f"Schema id '{meta.id}' already registered for {existing.__name__}")

        self._by_id[meta.id] = model
        self._meta[model] = meta
        logger.debug(f"[registry] added {meta.id} -> {model.__name__}")
        return self

    def get(self, schema_id: str) -> Type[BaseModel]:
        """
        Raises:
            KeyError: unknown schema id
        """
        return self._by_id[schema_id]

    def meta(self, key: Union[str, Type[BaseModel]]) -> SchemaMeta:
        model = self.get(key) if isinstance(key, str) else key
        return self._meta[model]

    def has(self, key: Union[str, Type[BaseModel]]) -> bool:
        if isinstance(key, str):
            return key in self._by_id
        return key in self._meta

    def ids(self) -> List[str]:
        return list(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)


def build_domain_registry() -> DomainRegistry:
    registry = DomainRegistry()
    for model in (SkiWeatherQuery, SkiWeatherAnswer, PrescriptionRequest, PrescriptionDraft):
        registry.add(model)
    return registry


domain_registry = build_domain_registry()


# ============================================================
# Codec: ISO string (wire) <-> datetime (app)
# ============================================================
class IsoDateCodec:
    """Bidirectional transform between the model's ISO strings and aware datetimes"""

    def __init__(self):
        self._adapter = TypeAdapter(datetime)

    def decode(self, value: str) -> datetime:
        """
        Raises:
            pydantic.ValidationError: not an ISO date-time
        """
        decoded = self._adapter.validate_python(value)
        if decoded.tzinfo is None:
            decoded = decoded.replace(tzinfo=timezone.utc)
        return decoded

    def encode(self, value: datetime) -> str:
        """UTC, millisecond precision, "Z" suffix"""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


ISO_DATE = IsoDateCodec()
