"""
schematalk/schemas/shipping.py
Shipping package input / quote output with explicit units
"""
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

from schematalk.schemas.enums import LengthUnit, ServiceLevel, WeightUnit


class Dimensions(BaseModel):
    """Physical dimensions of the package."""
    length: float = Field(gt=0, description="Package length (> 0).")
    width: float = Field(gt=0, description="Package width (> 0).")
    height: float = Field(gt=0, description="Package height (> 0).")
    unit: LengthUnit = Field(description="Unit for dimensions: centimeters (cm) or inches (in).")


class Weight(BaseModel):
    """Actual measured weight."""
    value: float = Field(gt=0, description="Measured weight (> 0).")
    unit: WeightUnit = Field(description="Unit for weight: kilograms (kg) or pounds (lb).")


class PackageInput(BaseModel):
    """Input for calculating a shipping quote."""
    model_config = ConfigDict(
        title="Shipping Package Input",
        json_schema_extra={
            "$id": "PackageInput",
            "description": (
                "Defines a shipping package with dimensions and weight including explicit units, "
                "plus destination and service level."
            ),
        },
    )

    dimensions: Dimensions
    weight: Weight
    destinationCountry: str = Field(
        pattern=r"^[A-Z]{2}$",
        description="Destination ISO-3166 alpha-2 country code.",
    )
    serviceLevel: ServiceLevel = Field(description="Requested service level.")


class BreakdownLine(BaseModel):
    label: str
    amount: float


class ShippingQuote(BaseModel):
    """Resulting shipping quote."""
    model_config = ConfigDict(
        title="Shipping Quote",
        json_schema_extra={
            "$id": "ShippingQuote",
            "description": "Computed quote for shipping the given package.",
        },
    )

    cost: float = Field(ge=0, description="Total quoted cost.")
    currency: Literal["USD"] = Field(description="Currency code.")
    estimatedDays: int = Field(gt=0, description="Estimated transit days.")
    usedBillableWeightKg: float = Field(gt=0, description="Billable weight used (kg).")
    breakdown: List[BreakdownLine] = Field(description="Line-item cost breakdown.")


def package_input_json_schema() -> Dict[str, Any]:
    return PackageInput.model_json_schema()


def quote_json_schema() -> Dict[str, Any]:
    return ShippingQuote.model_json_schema()
