"""
schematalk/schemas/ski.py
Ski weather schemas with profile-specific unit metadata

The same question ("is it good to ski?") is unanswerable without units:
30 could be °F (≈ -1 °C, fine) or °C (summer). Metadata on each field
carries unit, choices and default so the model does not have to guess.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Type

from pydantic import BaseModel, ConfigDict, Field, create_model

from schematalk.schemas.enums import Profile, SkiVerdict, Visibility

TEMPERATURE_UNITS = ["°C", "°F", "K"]
WIND_UNITS = ["km/h", "mph"]
VISIBILITY_CHOICES = [v.value for v in Visibility]


@dataclass(frozen=True)
class DecisionKeys:
    """Field names and labels of the normalized decision data"""
    temp_key: str
    wind_key: str
    temp_unit_label: str
    wind_unit_label: str


@dataclass(frozen=True)
class SkiSchemas:
    data_arguments: Type[BaseModel]
    decision: Type[BaseModel]
    decision_keys: DecisionKeys


def decision_keys_for(profile: Profile) -> DecisionKeys:
    if Profile(profile) == Profile.USA:
        return DecisionKeys("temperatureF", "windMph", "°F", "mph")
    return DecisionKeys("temperatureC", "windKmh", "°C", "km/h")


def build_ski_schemas(profile: Profile = Profile.INTL) -> SkiSchemas:
    """Build the MCP argument schema and the decision schema for a unit profile"""
    profile = Profile(profile)
    keys = decision_keys_for(profile)

    SkiDataArguments = create_model(
        "SkiDataArguments",
        __config__=ConfigDict(title="SkiDataArguments"),
        temperature=(float, Field(
            description="Ambient temperature.",
            json_schema_extra={
                "unit": keys.temp_unit_label,
                "choices": TEMPERATURE_UNITS,
                "default": keys.temp_unit_label,
            },
        )),
        wind=(float, Field(
            description="Average wind speed.",
            json_schema_extra={
                "unit": keys.wind_unit_label,
                "choices": WIND_UNITS,
                "default": keys.wind_unit_label,
            },
        )),
        visibility=(Visibility, Field(
            description="Visibility on a defined scale.",
            json_schema_extra={"choices": VISIBILITY_CHOICES, "default": "good"},
        )),
    )

    DecisionData = create_model(
        "DecisionData",
        visibility=(Visibility, ...),
        **{
            keys.temp_key: (float, Field(description=f"Normalized {keys.temp_unit_label}")),
            keys.wind_key: (float, Field(description=f"Normalized {keys.wind_unit_label}")),
        },
    )

    SkiDecision = create_model(
        "SkiDecision",
        decision=(SkiVerdict, Field(description="Is it good to ski?")),
        reason=(str, Field(min_length=1, description="Short explanation.")),
        data=(DecisionData, ...),
    )

    return SkiSchemas(data_arguments=SkiDataArguments, decision=SkiDecision, decision_keys=keys)


def get_field_metadata(model: Type[BaseModel]) -> Dict[str, Dict[str, Any]]:
    """Per-property metadata as it appears in the JSON Schema"""
    properties = model.model_json_schema().get("properties", {})
    result: Dict[str, Dict[str, Any]] = {}
    for name, prop in properties.items():
        result[name] = {k: v for k, v in prop.items() if k not in ("title",)}
    return result

