"""
schematalk/services/mcp_fake.py
Fake MCP weather tool - raw ski conditions with (possibly missing) units
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkiRawConditions:
    temperature: float
    temp_unit: Optional[str]   # "°C" | "°F" | "K" | None
    wind: float
    wind_unit: Optional[str]   # "km/h" | "mph" | None
    visibility: str            # "poor" | "fair" | "good" | "excellent" | anything else


DEFAULT_CONDITIONS = SkiRawConditions(
    temperature=30,
    temp_unit="°F",
    wind=20,
    wind_unit="km/h",
    visibility="good",
)


async def fetch_ski_conditions(overrides: Optional[Dict[str, Any]] = None) -> SkiRawConditions:
    """Example runtime data; only non-None overrides are applied"""
    changes = {k: v for k, v in (overrides or {}).items() if v is not None}
    conditions = replace(DEFAULT_CONDITIONS, **changes)
    logger.debug(f"[MCP] ski conditions: {conditions}")
    return conditions
