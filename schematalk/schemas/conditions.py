"""
schematalk/schemas/conditions.py
Schema quality ladder for two domains (ski conditions, prescriptions)

Four configurations, from worst to best:
  1) plain object       - JSON shape only, no validation, no metadata
  2) basic model        - pydantic validation, no metadata
  3) manual metadata    - hand-written units/choices, no validation
  4) model + metadata   - pydantic validation AND units/choices in the JSON Schema
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from schematalk.schemas.enums import Domain, SchemaKind

logger = logging.getLogger(__name__)

ACTION_NAMES = {
    Domain.SKI: "assessSkiWeather",
    Domain.MEDICINE: "draftPrescription",
}
STRUCTURE_SCHEMA_URI = "https://json-structure.org/meta/extended/v0/#"


# ============================================================
# Ski conditions
# ============================================================
class Location(BaseModel):
    resort: str
    elevation: float


class SkiConditions(BaseModel):
    """Validation only"""
    temperature: float
    snowDepth: float
    windSpeed: float
    visibility: str
    location: Location


class LocationWithMetadata(BaseModel):
    resort: str = Field(description="Resort name", max_length=100)
    elevation: float = Field(description="Elevation (meters)", json_schema_extra={"unit": "m"})


class SkiConditionsWithMetadata(BaseModel):
    """Validation + units on every numeric field"""
    model_config = ConfigDict(
        title="Ski Conditions Schema (Units-Explicit)",
        json_schema_extra={
            "description": "Numeric properties carry units; avoids C vs F, cm vs in, km/h vs mph ambiguity.",
            "version": "2.0.0",
        },
    )

    temperature: float = Field(
        description="Ambient temperature (Celsius)",
        examples=[-10, -5, 0, 5],
        json_schema_extra={"unit": "°C"},
    )
    snowDepth: float = Field(
        description="Snow depth (centimeters)",
        examples=[20, 45, 80, 120],
        json_schema_extra={"unit": "cm"},
    )
    windSpeed: float = Field(
        description="Wind speed (km/h)",
        examples=[0, 12, 25, 40],
        json_schema_extra={"unit": "km/h"},
    )
    visibility: str = Field(
        description="Visibility",
        max_length=20,
        examples=["excellent", "good", "fair", "poor", "zero"],
    )
    location: LocationWithMetadata


# ============================================================
# Prescription
# ============================================================
class Prescription(BaseModel):
    """Validation only"""
    medication: str
    dose: float
    frequency: float
    amount: Optional[float] = None
    instructions: str


class PrescriptionWithMetadata(BaseModel):
    """Validation + explicit unit choices and time base"""
    model_config = ConfigDict(
        title="Prescription Schema (Units-Explicit, Context-Aware)",
        json_schema_extra={
            "description": "Dose/frequency/amount require explicit unit; context improves safety.",
            "version": "2.0.0",
        },
    )

    medication: str = Field(
        description="Drug name; some require weight-based dosing (mg/kg).",
        examples=["Amoxicillin", "Gentamicin"],
    )
    dose: float = Field(
        description="Dose value; explicit unit required downstream.",
        examples=[4, 250, 500],
        json_schema_extra={"unitChoices": ["mcg", "mg", "g"], "recommendedUnit": "mg"},
    )
    frequency: float = Field(
        description="Frequency value; explicit time base required.",
        examples=[2, 3, 4],
        json_schema_extra={
            "frequencyUnitChoices": ["per_hour", "per_day", "per_week"],
            "recommendedUnit": "per_day",
        },
    )
    amount: Optional[float] = Field(
        None,
        description="Packaging amount; explicit unit required.",
        json_schema_extra={"amountUnitChoices": ["tablet", "capsule", "ml", "pack", "strip"]},
    )
    instructions: str = Field(description="Clear instructions: timing, duration.")


# ============================================================
# Sample data
# ============================================================
SAMPLE_SKI_CONDITIONS: Dict[str, Any] = {
    "temperature": -5,
    "snowDepth": 45,
    "windSpeed": 12,
    "visibility": "excellent",
    "location": {"resort": "Alpine Peaks Resort", "elevation": 2400},
}

SAMPLE_PRESCRIPTION: Dict[str, Any] = {
    "medication": "Gentamicin",
    "dose": 4,
    "frequency": 3,
    "amount": 1,
    "instructions": "Infuse over 30 minutes; monitor levels.",
}


def sample_data(domain: Domain) -> Dict[str, Any]:
    source = SAMPLE_SKI_CONDITIONS if Domain(domain) == Domain.SKI else SAMPLE_PRESCRIPTION
    return copy.deepcopy(source)


# ============================================================
# Plain object schemas (+ manual metadata)
# ============================================================
def plain_object_schema(domain: Domain) -> Dict[str, Any]:
    domain = Domain(domain)
    if domain == Domain.SKI:
        properties = {
            "temperature": {"type": "number"},
            "snowDepth": {"type": "number"},
            "windSpeed": {"type": "number"},
            "visibility": {"type": "string"},
            "location": {
                "type": "object",
                "properties": {
                    "resort": {"type": "string"},
                    "elevation": {"type": "number"},
                },
            },
        }
    else:
        properties = {
            "medication": {"type": "string"},
            "dose": {"type": "number"},
            "frequency": {"type": "number"},
            "amount": {"type": "number"},
            "instructions": {"type": "string"},
        }
    return {
        "name": ACTION_NAMES[domain],
        "$id": f"#/action/{ACTION_NAMES[domain]}",
        "type": "object",
        "properties": properties,
    }


def enhance_with_manual_metadata(base: Dict[str, Any], domain: Domain) -> Dict[str, Any]:
    """Hand-written units and choices on top of a plain schema"""
    schema = copy.deepcopy(base)
    schema["$schema"] = STRUCTURE_SCHEMA_URI
    schema["$uses"] = ["JSONStructureUnits"]
    props = schema["properties"]

    if Domain(domain) == Domain.SKI:
        schema["title"] = "Basic Ski Conditions with Manual Metadata"
        props["temperature"] = {"type": "number", "unit": "°C", "description": "Temperature (Celsius)"}
        props["snowDepth"] = {"type": "number", "unit": "cm", "description": "Snow depth (cm)"}
        props["windSpeed"] = {"type": "number", "unit": "km/h", "description": "Wind speed (km/h)"}
        props["visibility"] = {"type": "string", "description": "Visibility"}
        props["location"]["properties"]["elevation"] = {
            "type": "number",
            "unit": "m",
            "description": "Elevation (m)",
        }
        return schema

    schema["title"] = "Basic Prescription with Manual Metadata"
    schema["$defs"] = {
        "Dose": {"type": "number", "description": "Dose value; unit required (mcg/mg/g)."},
    }
    props["dose"] = {
        "$ref": "#/$defs/Dose",
        "unitChoices": ["mcg", "mg", "g"],
        "recommendedUnit": "mg",
    }
    props["frequency"] = {
        "type": "number",
        "description": "Frequency value; time base required (per_hour/day/week).",
        "frequencyUnitChoices": ["per_hour", "per_day", "per_week"],
        "recommendedUnit": "per_day",
    }
    props["amount"] = {
        "type": "number",
        "description": "Packaging amount; unit required (tablet/capsule/ml/pack/strip).",
        "amountUnitChoices": ["tablet", "capsule", "ml", "pack", "strip"],
    }
    props["instructions"] = {"type": "string", "description": "Clear instructions: timing, duration."}
    return schema


# ============================================================
# Configuration → schema
# ============================================================
class SchemaGenerationOptions(BaseModel):
    """Which rung of the ladder to build"""
    use_validation: bool = Field(False, description="Validate data with a pydantic model")
    use_metadata: bool = Field(False, description="Attach units/choices/descriptions")
    domain: Domain = Domain.SKI


@dataclass
class SchemaResult:
    kind: SchemaKind
    schema: Dict[str, Any]
    model: Optional[Type[BaseModel]]
    has_validation: bool
    has_metadata: bool
    domain: Domain


@dataclass
class ValidationResult:
    success: bool
    data: Any = None
    error: Optional[ValidationError] = None


def _named(domain: Domain, json_schema: Dict[str, Any]) -> Dict[str, Any]:
    action = ACTION_NAMES[domain]
    return {"name": action, "$id": f"#/action/{action}", **json_schema}


def generate_schema_for_configuration(options: SchemaGenerationOptions) -> SchemaResult:
    domain = options.domain
    is_ski = domain == Domain.SKI

    if not options.use_validation and not options.use_metadata:
        return SchemaResult(SchemaKind.PLAIN_OBJECT, plain_object_schema(domain), None, False, False, domain)

    if options.use_validation and not options.use_metadata:
        model = SkiConditions if is_ski else Prescription
        return SchemaResult(
            SchemaKind.BASIC_MODEL, _named(domain, model.model_json_schema()), model, True, False, domain
        )

    if not options.use_validation and options.use_metadata:
        schema = enhance_with_manual_metadata(plain_object_schema(domain), domain)
        return SchemaResult(SchemaKind.MANUAL_METADATA, schema, None, False, True, domain)

    model = SkiConditionsWithMetadata if is_ski else PrescriptionWithMetadata
    json_schema = model.model_json_schema()
    json_schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    return SchemaResult(
        SchemaKind.MODEL_WITH_METADATA, _named(domain, json_schema), model, True, True, domain
    )


def validate_data_with_schema(data: Any, result: SchemaResult) -> ValidationResult:
    """Without a model every payload "passes" - which is exactly the problem"""
    if not result.has_validation or result.model is None:
        return ValidationResult(success=True, data=data)
    try:
        parsed = result.model.model_validate(data)
    except ValidationError as e:
        logger.debug(f"[validate] {result.kind.value}: {e.error_count()} error(s)")
        return ValidationResult(success=False, error=e)
    return ValidationResult(success=True, data=parsed.model_dump())


_DESCRIPTIONS = {
    SchemaKind.PLAIN_OBJECT: "Plain Objects (no validation, no metadata)",
    SchemaKind.BASIC_MODEL: "Model Validation (type-safe, no metadata)",
    SchemaKind.MANUAL_METADATA: "Manual Metadata (no validation, basic metadata)",
    SchemaKind.MODEL_WITH_METADATA: "Full Implementation (model validation + JSON Structure metadata)",
}


def _kind_for(use_validation: bool, use_metadata: bool) -> SchemaKind:
    if use_validation and use_metadata:
        return SchemaKind.MODEL_WITH_METADATA
    if use_validation:
        return SchemaKind.BASIC_MODEL
    if use_metadata:
        return SchemaKind.MANUAL_METADATA
    return SchemaKind.PLAIN_OBJECT


def get_configuration_description(source: Union[SchemaGenerationOptions, SchemaResult]) -> str:
    """Accepts either the options or the generated result"""
    if isinstance(source, SchemaResult):
        kind = source.kind
    else:
        kind = _kind_for(source.use_validation, source.use_metadata)
    return f"{_DESCRIPTIONS[kind]} | domain: {Domain(source.domain).value}"


def get_safety_level(options: SchemaGenerationOptions) -> str:
    kind = _kind_for(options.use_validation, options.use_metadata)
    return {
        SchemaKind.PLAIN_OBJECT: "🔴 DANGEROUS",
        SchemaKind.BASIC_MODEL: "🟡 RISKY",
        SchemaKind.MANUAL_METADATA: "🟡 INCOMPLETE",
        SchemaKind.MODEL_WITH_METADATA: "🟢 SAFE",
    }[kind]


# ============================================================
# Preview helpers
# ============================================================
_PREVIEW_KEYS = ("unit", "unitChoices", "recommendedUnit", "frequencyUnitChoices", "amountUnitChoices", "description", "$ref")


def resolve_property(schema: Dict[str, Any], *path: str) -> Dict[str, Any]:
    """Walk properties by name, following local $ref into $defs"""
    node: Dict[str, Any] = schema
    for name in path:
        node = node.get("properties", {}).get(name, {})
        ref = node.get("$ref")
        if ref and ref.startswith("#/$defs/"):
            target = schema.get("$defs", {}).get(ref.split("/")[-1], {})
            node = {**target, **{k: v for k, v in node.items() if k != "$ref"}}
    return node


def params_from(prop: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not prop:
        return {"type": "unknown"}
    preview: Dict[str, Any] = {"type": prop.get("type", "string" if "enum" in prop else "object")}
    for key in _PREVIEW_KEYS:
        if key in prop:
            preview[key] = prop[key]
    return preview


def get_schema_preview(schema: Dict[str, Any], domain: Domain) -> Dict[str, Any]:
    """Action-oriented preview (name, $id, parameters) instead of raw properties"""
    domain = Domain(domain)
    props = schema.get("properties", {})
    names: List[str] = list(props)
    description = (
        "Assess ski weather conditions" if domain == Domain.SKI else "Draft a prescription with explicit units"
    )
    return {
        "action": {
            "name": schema.get("name", ACTION_NAMES[domain]),
            "$id": schema.get("$id", f"#/action/{ACTION_NAMES[domain]}"),
            "description": description,
            "parameters": {name: params_from(props.get(name)) for name in names},
        }
    }
