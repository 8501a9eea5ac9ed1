"""
schematalk/demos/shipping.py
Shipping quote demo - structurizer + tool, without and with a schema
"""
import logging
from typing import Any, Dict, Optional

from schematalk.demos.ski import to_json
from schematalk.presenter import Presenter, Stage
from schematalk.schemas.enums import StageMode
from schematalk.schemas.shipping import package_input_json_schema, quote_json_schema
from schematalk.services.shipping import calc_shipping_tool, calc_shipping_tool_bad
from schematalk.services.structurizer import (
    DEFAULT_PROMPT,
    structurize_package_no_schema,
    structurize_package_with_schema,
)

logger = logging.getLogger(__name__)

SHIPPING_DECK_OPTIONS: Dict[str, Any] = {
    "title": "Shipping Quote Demo",
    "header": "Structurizer + pydantic + JSON Schema",
    "footer": "Press ←/→ or Space to navigate, q to quit",
}


def cost_delta(bad_cost: Optional[float], good_cost: float) -> str:
    """Relative difference in whole percent, "N/A" when it cannot be computed"""
    if not isinstance(bad_cost, (int, float)) or good_cost <= 0:
        return "N/A"
    return str(round(abs(bad_cost - good_cost) / good_cost * 100))


async def build_shipping_presenter(prompt: str = DEFAULT_PROMPT, **options: Any) -> Presenter:
    bad_struct = await structurize_package_no_schema(prompt)
    bad_quote = await calc_shipping_tool_bad(bad_struct)

    good_struct = await structurize_package_with_schema(prompt)
    good_quote = await calc_shipping_tool(good_struct)

    bad_cost = bad_quote.get("cost")
    good_cost = good_quote.cost
    delta = cost_delta(bad_cost, good_cost)
    logger.info(f"[shipping] bad={bad_cost} good={good_cost} delta={delta}%")

    presenter = Presenter(SHIPPING_DECK_OPTIONS, **options)
    presenter.add_slide(
        title="Overview",
        content=[
            "This demo contrasts two flows:",
            "- Bad: structurizer without schema -> tool without validation",
            "- Good: structurizer with pydantic schema -> validated tool",
            "",
            "Follow the steps to see how schema validation prevents unit confusion.",
        ],
    ).add_slide(
        title="User Prompt",
        content=to_json(prompt),
    ).add_slide(
        title="Bad flow",
        content=[
            "Structurizer (no schema) -> Bad Tool",
            "Base content is always shown; step through to see outputs.",
        ],
        stages=[
            Stage(renderer=lambda ctx: ["Unvalidated structurizer output:", to_json(bad_struct)]),
            Stage(renderer=lambda ctx: [
                "Bad tool quote (likely incorrect due to unit confusion):",
                to_json(bad_quote),
            ]),
        ],
    ).add_slide(
        title="Good flow",
        content=[
            "Structurizer (with pydantic schema) -> Good Tool",
            "Step through to see validated struct and quote.",
        ],
        stages=[
            Stage(renderer=lambda ctx: [
                "Validated structurizer output:",
                to_json(good_struct.model_dump(mode="json")),
            ]),
            Stage(renderer=lambda ctx: [
                "Good tool quote (correct unit handling and validation):",
                to_json(good_quote.model_dump(mode="json")),
            ]),
        ],
    ).add_slide(
        title="Cost comparison",
        content=[f"bad={bad_cost} vs good={good_cost} (delta ~{delta}%)"],
    ).add_slide(
        title="JSON Schemas (from pydantic)",
        content="Two schemas generated from pydantic.",
        stages=[
            Stage(
                renderer=lambda ctx: ["PackageInput JSON Schema:", to_json(package_input_json_schema())],
                mode=StageMode.APPEND,
            ),
            Stage(
                renderer=lambda ctx: ["ShippingQuote JSON Schema:", to_json(quote_json_schema())],
                mode=StageMode.APPEND,
            ),
        ],
    )
    return presenter
