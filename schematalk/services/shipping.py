"""
schematalk/services/shipping.py
Fake external shipping service (SI units only) and two tools in front of it

  - calc_shipping_tool_bad: blind casting, ignores units → wrong price
  - calc_shipping_tool:     validated input, explicit unit conversion, validated output
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict

from schematalk.schemas.enums import LengthUnit, ServiceLevel, WeightUnit
from schematalk.schemas.shipping import PackageInput, ShippingQuote

logger = logging.getLogger(__name__)

CM_PER_INCH = 2.54
KG_PER_LB = 0.45359237
VOLUMETRIC_DIVISOR = 5000
HOME_COUNTRY = "US"


@dataclass(frozen=True)
class ShippingServiceInputSI:
    length_cm: float
    width_cm: float
    height_cm: float
    weight_kg: float
    destination_country: str   # ISO-3166 alpha-2
    service_level: ServiceLevel


def round2(n: float) -> float:
    return round(n * 100) / 100


def round3(n: float) -> float:
    return round(n * 1000) / 1000


async def get_shipping_quote_si(request: ShippingServiceInputSI) -> Dict[str, Any]:
    """Raw service response (camelCase, unvalidated)"""
    volumetric_kg = (request.length_cm * request.width_cm * request.height_cm) / VOLUMETRIC_DIVISOR
    billable_kg = max(request.weight_kg, volumetric_kg)

    express = ServiceLevel(request.service_level) == ServiceLevel.EXPRESS
    base = 20 if express else 10
    per_kg = 4 if express else 2
    intl_surcharge = 15 if request.destination_country != HOME_COUNTRY else 0

    cost = round2(base + per_kg * billable_kg + intl_surcharge)
    logger.debug(f"[shipping] billable={billable_kg:.2f}kg cost={cost}")

    return {
        "cost": cost,
        "currency": "USD",
        "estimatedDays": 2 if express else 5,
        "usedBillableWeightKg": round2(billable_kg),
        "breakdown": [
            {"label": "Base", "amount": base},
            {"label": "Per Kg", "amount": round2(per_kg * billable_kg)},
            {"label": "Intl Surcharge", "amount": intl_surcharge},
        ],
    }


async def calc_shipping_tool_bad(unvalidated: Dict[str, Any]) -> Dict[str, Any]:
    """Takes whatever the structurizer produced at face value"""
    # inches read as cm, pounds read as kg
    request = ShippingServiceInputSI(
        length_cm=float(unvalidated.get("length", 0)),
        width_cm=float(unvalidated.get("width", 0)),
        height_cm=float(unvalidated.get("height", 0)),
        weight_kg=float(unvalidated.get("weight", 0)),
        destination_country=str(unvalidated.get("country") or HOME_COUNTRY),
        service_level=ServiceLevel.EXPRESS if unvalidated.get("service") == "fast" else ServiceLevel.STANDARD,
    )
    return await get_shipping_quote_si(request)


def _to_cm(value: float, unit: LengthUnit) -> float:
    return value if unit == LengthUnit.CM else round2(value * CM_PER_INCH)


def _to_kg(value: float, unit: WeightUnit) -> float:
    return value if unit == WeightUnit.KG else round3(value * KG_PER_LB)


async def calc_shipping_tool(payload: Any) -> ShippingQuote:
    """
    Raises:
        pydantic.ValidationError: invalid input, or a service response that breaks the quote schema
    """
    parsed = PackageInput.model_validate(payload)
    dims = parsed.dimensions

    request = ShippingServiceInputSI(
        length_cm=_to_cm(dims.length, dims.unit),
        width_cm=_to_cm(dims.width, dims.unit),
        height_cm=_to_cm(dims.height, dims.unit),
        weight_kg=_to_kg(parsed.weight.value, parsed.weight.unit),
        destination_country=parsed.destinationCountry,
        service_level=parsed.serviceLevel,
    )
    return ShippingQuote.model_validate(await get_shipping_quote_si(request))
