# schematalk/services/__init__.py

from .mcp_fake import SkiRawConditions, fetch_ski_conditions
from .ai_fake import GenerateObjectResult, generate_object
from .units import (
    convert_to_c,
    convert_to_f,
    decide_ski,
    naive_celsius_opinion,
    normalize_to_profile,
    to_kmh,
    to_mph,
)
from .shipping import calc_shipping_tool, calc_shipping_tool_bad, get_shipping_quote_si
from .structurizer import structurize_package_no_schema, structurize_package_with_schema
from .prompting import build_prompt_for_llm, prompt_for, safe_parse, verification_summary

__all__ = [
    # MCP / AI fakes
    "SkiRawConditions",
    "fetch_ski_conditions",
    "GenerateObjectResult",
    "generate_object",
    # Units
    "convert_to_c",
    "convert_to_f",
    "to_kmh",
    "to_mph",
    "normalize_to_profile",
    "decide_ski",
    "naive_celsius_opinion",
    # Shipping
    "get_shipping_quote_si",
    "calc_shipping_tool_bad",
    "calc_shipping_tool",
    "structurize_package_no_schema",
    "structurize_package_with_schema",
    # Prompting
    "build_prompt_for_llm",
    "prompt_for",
    "safe_parse",
    "verification_summary",
]
