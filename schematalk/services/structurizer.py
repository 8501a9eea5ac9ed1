"""
schematalk/services/structurizer.py
Fake structured-output model for shipping prompts

Without a schema the "model" returns vague, stringly-typed fields;
with a schema it returns the explicit PackageInput shape.
"""
import logging
import re
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from schematalk.schemas.shipping import PackageInput
from schematalk.services.ai_fake import generate_object

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Please ship a 20x15x10 inch package weighing 5 lb to DE with express service."

_DIMENSIONS = re.compile(r"(\d+)\s*x\s*(\d+)\s*x\s*(\d+)", re.IGNORECASE)
_WEIGHT = re.compile(r"(\d+(\.\d+)?)\s*(lb|pound|kg|kilogram)", re.IGNORECASE)
_COUNTRY = re.compile(r"\b([A-Z]{2})\b")
_EXPRESS = re.compile(r"express|fast", re.IGNORECASE)
_INCHES = re.compile(r"inch|inches|in\b", re.IGNORECASE)
_KILOS = re.compile(r"kg|kilogram", re.IGNORECASE)


def extract_from_prompt(prompt: str) -> Dict[str, Any]:
    """Naive extraction; falls back to 30x20x10, 5 lb, US, standard"""
    dims = _DIMENSIONS.search(prompt)
    weight = _WEIGHT.search(prompt)
    country = _COUNTRY.search(prompt)

    length, width, height = (int(g) for g in dims.groups()) if dims else (30, 20, 10)
    if weight:
        weight_value = float(weight.group(1))
        weight_unit = "kg" if _KILOS.search(weight.group(3)) else "lb"
    else:
        weight_value, weight_unit = 5.0, "lb"

    return {
        "length": length,
        "width": width,
        "height": height,
        "lengthUnit": "in" if _INCHES.search(prompt) else "cm",
        "weight": weight_value,
        "weightUnit": weight_unit,
        "destinationCountry": country.group(1) if country else "US",
        "serviceLevel": "express" if _EXPRESS.search(prompt) else "standard",
    }


def fake_model(prompt: str, schema: Optional[Type[BaseModel]] = None) -> Dict[str, Any]:
    parsed = extract_from_prompt(prompt)

    if schema is None:
        return {
            "length": str(parsed["length"]),
            "width": parsed["width"],
            "height": parsed["height"],
            "unit": "imperial" if parsed["lengthUnit"] == "in" else "metric",
            "weight": str(parsed["weight"]),
            "weightUnit": "pounds" if parsed["weightUnit"] == "lb" else "kilos",
            "country": parsed["destinationCountry"],
            "service": "fast" if parsed["serviceLevel"] == "express" else "normal",
        }

    return {
        "dimensions": {
            "length": parsed["length"],
            "width": parsed["width"],
            "height": parsed["height"],
            "unit": parsed["lengthUnit"],
        },
        "weight": {"value": parsed["weight"], "unit": parsed["weightUnit"]},
        "destinationCountry": parsed["destinationCountry"],
        "serviceLevel": parsed["serviceLevel"],
    }


async def structurize_package_no_schema(prompt: str) -> Dict[str, Any]:
    obj = fake_model(prompt)
    logger.debug(f"[structurizer] no schema → {obj}")
    return obj


async def structurize_package_with_schema(prompt: str) -> PackageInput:
    result = await generate_object(
        PackageInput,
        run=lambda schema, prompt: fake_model(prompt, schema),
        prompt=prompt,
    )
    return result.object
