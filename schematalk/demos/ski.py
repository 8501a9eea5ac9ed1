"""
schematalk/demos/ski.py
"Metadata with AI" talk - is it good to ski today?

Live data flows through the deck: the fake MCP feed reports raw values,
they are normalized to the profile's default units, a decision is made in
°C / km/h and returned as a validated SkiDecision.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from schematalk.presenter import Presenter, Stage
from schematalk.schemas.enums import Profile, StageMode
from schematalk.schemas.ski import build_ski_schemas, get_field_metadata
from schematalk.services.ai_fake import generate_object
from schematalk.services.mcp_fake import SkiRawConditions, fetch_ski_conditions
from schematalk.services.units import (
    KMH_PER_MPH,
    decide_ski,
    format_2,
    naive_celsius_opinion,
    normalize_to_profile,
)

logger = logging.getLogger(__name__)

SKI_DECK_OPTIONS: Dict[str, Any] = {
    "title": "Metadata with AI",
    "show_controls": False,
    "footer": "Lightning Talks @ Plauti - Arrows ← →, press q to quit",
}


def to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _unit(unit: Optional[str]) -> str:
    return unit if unit is not None else "(unknown)"


def _naive_remark(mcp: SkiRawConditions) -> Optional[str]:
    """What a model says when it reads a °F value as °C"""
    if mcp.temp_unit != "°F":
        return None
    return f"{mcp.temperature:g} {naive_celsius_opinion(mcp.temperature)} (assuming °C)"


def _metadata_lines(schemas) -> List[str]:
    lines = ["Per property:"]
    for name, meta in get_field_metadata(schemas.data_arguments).items():
        lines.append(f"- {name}: {json.dumps(meta, ensure_ascii=False) if meta else '(no meta)'}")
    return lines


async def build_ski_presenter(
    profile: Profile = Profile.INTL,
    overrides: Optional[Dict[str, Any]] = None,
    **options: Any,
) -> Presenter:
    """
    Build the ski talk with live data.

    Args:
        profile: unit profile for normalization (intl: °C, km/h / usa: °F, mph)
        overrides: raw MCP values to replace (temperature, wind, visibility, ...)
        options: Presenter options / constructor keywords (console, keyboard, ...)
    """
    profile = Profile(profile)
    schemas = build_ski_schemas(profile)
    keys = schemas.decision_keys

    mcp = await fetch_ski_conditions(overrides)
    normalized = normalize_to_profile(mcp, profile)

    # the heuristic always runs in °C and km/h
    if profile == Profile.USA:
        eval_temp_c = (normalized["temperatureF"] - 32) * (5 / 9)
        eval_wind_kmh = normalized["windMph"] * KMH_PER_MPH
    else:
        eval_temp_c = normalized["temperatureC"]
        eval_wind_kmh = normalized["windKmh"]
    decision = decide_ski(eval_temp_c, eval_wind_kmh, normalized["visibility"])

    def run_decision(schema, prompt):
        return {
            **decision,
            "data": {
                "visibility": normalized["visibility"],
                keys.temp_key: round(normalized[keys.temp_key], 2),
                keys.wind_key: round(normalized[keys.wind_key], 2),
            },
        }

    ai = await generate_object(
        schemas.decision,
        run=run_decision,
        prompt=(
            f"Normalize MCP data to default units ({keys.temp_unit_label}, {keys.wind_unit_label}) "
            "and decide if it is good to ski."
        ),
    )
    answer = to_json(ai.object.model_dump(mode="json"))
    logger.info(f"[ski] profile={profile.value} decision={ai.object.decision.value}")

    mcp_line = (
        f"🖥️ MCP: temperature={mcp.temperature:g} {_unit(mcp.temp_unit)}, "
        f"wind={mcp.wind:g} {_unit(mcp.wind_unit)}"
    )
    remark = _naive_remark(mcp)

    dialog_before = "\n".join([
        "👤 User: Is it good to ski today?",
        "🤖 AI: Fetching ski conditions from MCP…",
        f"🖥️ MCP: temperature={mcp.temperature:g}, wind={mcp.wind:g}",
        f'    visibility="{mcp.visibility}"',
        "🤖 AI (without schema): Sounds fine? Units unclear → risk of wrong conclusion.",
    ])
    dialog_after = "\n".join([
        "👤 User: Is it good to ski today?",
        "🤖 AI: Fetching ski conditions from MCP…",
        mcp_line,
        f'    visibility="{mcp.visibility}"',
        f"🤖 AI: Normalized to defaults ({keys.temp_unit_label}, {keys.wind_unit_label}).",
        f"🤖 AI (SkiDecision): {answer}",
    ])

    visibility = normalized["visibility"].value
    presenter = Presenter(SKI_DECK_OPTIONS, **options)

    presenter.add_slide(
        title="Introduction",
        content="\n".join([
            "Using pydantic metadata and JSON Schema to guide AI I/O",
            "",
            "Contents:",
            "- Problem: ambiguity (Ski example)",
            "- Solution: Schema + metadata + pydantic",
            "- Demo: dialogs + runtime code (MCP data, normalization)",
            "- Implementation: 3 quick steps + quality ladder",
        ]),
    ).add_slide(
        title="Problem - Ambiguity",
        stages=[
            Stage(content="👤 User: Is it good to ski today?"),
            Stage(content="🤖 AI: Fetching ski conditions from MCP…"),
            Stage(content=f'{mcp_line}, visibility="{mcp.visibility}"'),
            Stage(
                content=(
                    f'🤖 AI: {remark}. Wind unit and "good" scale remain unclear.\n'
                    "Issue: implicit assumptions → inconsistent answers."
                    if remark
                    else "🤖 AI: Units and scales are unspecified → inconsistent answers."
                )
            ),
        ],
    ).add_slide(
        title="Why it matters - units flip meaning (example)",
        content=[
            "- 30°F ≈ -1°C → potentially OK",
            "- 30°C → Summer → likely not great",
            "- Wind: 20 km/h vs 20 mph → different conditions",
            '- "good" must be on a defined scale',
        ],
    ).add_slide(
        title="Solution - make intent explicit",
        content=[
            "Stop guessing by defining:",
            "- Structure + constraints → JSON Schema",
            "- Guidance → metadata (unit, choices, default)",
            "- Single source → Define in pydantic → to JSON Schema → prompt + validate",
        ],
    ).add_slide(
        title="Metadata (live from schema)",
        content=_metadata_lines(schemas),
    ).add_slide(
        title="JSON Schema (generated)",
        stages=[
            Stage(
                renderer=lambda ctx: to_json(schemas.data_arguments.model_json_schema()),
                mode=StageMode.APPEND,
            ),
        ],
    ).add_slide(
        title="Dialog - before vs after",
        stages=[
            Stage(content=dialog_before, mode=StageMode.REPLACE),
            Stage(content=dialog_after, mode=StageMode.REPLACE),
        ],
    ).add_slide(
        title="Normalization (computed)",
        content=[
            f"Input:      {mcp.temperature:g} {_unit(mcp.temp_unit)} | "
            f"{mcp.wind:g} {_unit(mcp.wind_unit)} | {visibility}",
            f"Normalized: {format_2(normalized[keys.temp_key])} {keys.temp_unit_label} | "
            f"{format_2(normalized[keys.wind_key])} {keys.wind_unit_label} | {visibility}",
        ],
    ).add_slide(
        title="Structured answer (validated)",
        content=answer,
    ).add_slide(
        title="Output quality ladder",
        content=[
            "Worst → Good (& Best):",
            "- Free text",
            "- Validation only",
            "- JSON Schema (shape)",
            "- JSON Schema + metadata (unit, choices, default, examples)",
            "- (With structured output & validation on AI result)",
        ],
    ).add_slide(
        title="Implementation - Steps 1-3",
        content="Three quick steps to production:",
        stages=[
            Stage(content=[
                "- Step 1 (Define in pydantic)",
                "  - Use Field(description=..., json_schema_extra=...) per property",
                "  - Add unit/choices/default to remove ambiguity",
                "  - Provide 1-2 examples for tricky fields",
            ]),
            Stage(content=[
                "- Step 2 (Generate + prompt)",
                "  - Generate JSON Schema from the model (with metadata for guidance)",
                "  - Provide schema + descriptions in tool/system prompt",
                "  - AI fetches runtime data from MCP (🖥️) and uses metadata to interpret/normalize",
            ]),
            Stage(content=[
                "- Step 3 (Validate)",
                "  - Validate structured outputs with pydantic",
                "  - Reject or auto-correct invalid payloads",
            ]),
        ],
    ).add_slide(
        title="Conclusion",
        content=[
            "- Property metadata (units/context) → safety + clarity",
            "- JSON Schema → structure-first prompting + validation",
            "- pydantic + I/O → single source of truth & sanitized I/O",
        ],
    ).add_slide(
        title="End + Q&A",
        content=[
            "Thanks! Use ← → to navigate, q to quit.",
            "",
            "Short, consistent metadata → better AI I/O.",
        ],
    )
    return presenter


async def run_ski_presentation(
    profile: Profile = Profile.INTL,
    overrides: Optional[Dict[str, Any]] = None,
    **options: Any,
) -> None:
    presenter = await build_ski_presenter(profile, overrides, **options)
    await presenter.run()
