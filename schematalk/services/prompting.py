"""
schematalk/services/prompting.py
Schema-guided prompting: build the model prompt from a registered schema,
simulate good/bad model outputs and check them

    prompt = prompt_for(SkiWeatherAnswer)
    result = safe_parse(SkiWeatherAnswer, simulate_ski_answer(good_case=False))
    result.success  # False
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from schematalk.schemas.conditions import ValidationResult
from schematalk.schemas.registry import (
    ISO_DATE,
    DomainRegistry,
    PrescriptionDraft,
    SkiWeatherAnswer,
    domain_registry,
)

logger = logging.getLogger(__name__)

SAMPLE_ISO = "2025-12-20T00:00:00.000Z"

WITHOUT_METADATA = [
    "- JSON Schema lacks ids/titles/descriptions/examples, making prompts less clear.",
    "- No centralized registry risks drift across app, prompts, and validators.",
    "- Harder for humans and models to interpret fields consistently.",
]


def build_prompt_for_llm(
    title: str,
    description: str,
    json_schema: Dict[str, Any],
    examples: Optional[List[Any]] = None,
) -> str:
    lines = [
        f"You are to return ONLY valid JSON for: {title}.",
        f"Description: {description}",
        "Follow this JSON Schema exactly (no extra properties unless allowed):",
        json.dumps(json_schema, indent=2, ensure_ascii=False),
    ]
    if examples:
        lines += ["Here are examples to emulate:", json.dumps(examples, indent=2, ensure_ascii=False)]
    return "\n".join(lines)


def prompt_for(model: Type[BaseModel], registry: DomainRegistry = domain_registry) -> str:
    """
    Raises:
        KeyError: model is not registered
    """
    meta = registry.meta(model)
    return build_prompt_for_llm(
        meta.title or model.__name__,
        meta.description or "",
        model.model_json_schema(),
        meta.examples,
    )


# ============================================================
# Simulated model outputs
# ============================================================
def simulate_ski_answer(good_case: bool = True) -> Dict[str, Any]:
    if good_case:
        return {
            "good": True,
            "reason": "Fresh snow and low wind. Temps below 0°C preserve snow quality.",
            "conditions": {"snowDepthCm": 60, "windSpeedKmh": 18, "temperatureC": -3},
            "recommendation": "Go",
        }
    # wrong type, impossible values, missing reason
    return {
        "good": "maybe",
        "conditions": {"snowDepthCm": -5, "windSpeedKmh": 500, "temperatureC": 120},
        "recommendation": "Go",
    }


def simulate_prescription(good_case: bool = True) -> Dict[str, Any]:
    if good_case:
        return {
            "medication": "Amoxicillin",
            "dosageMg": 500,
            "units": "mg",
            "route": "oral",
            "frequencyPerDay": 3,
            "instructions": "Take after meals; complete full course.",
            "contraindications": ["Allergy: Penicillin"],
        }
    # unsafe dose, wrong unit, missing instructions
    return {
        "medication": "Amoxicillin",
        "dosageMg": -100,
        "units": "grams",
        "route": "iv",
        "frequencyPerDay": 12,
    }


# ============================================================
# Checks
# ============================================================
def safe_parse(model: Type[BaseModel], data: Any) -> ValidationResult:
    """Validate without raising"""
    try:
        parsed = model.model_validate(data)
    except ValidationError as e:
        logger.debug(f"[prompting] {model.__name__}: {e.error_count()} issue(s)")
        return ValidationResult(success=False, error=e)
    return ValidationResult(success=True, data=parsed.model_dump())


def issue_lines(result: ValidationResult) -> List[str]:
    if result.error is None:
        return []
    lines = []
    for error in result.error.errors():
        location = ".".join(str(part) for part in error["loc"])
        lines.append(f"- {location}: {error['msg']}")
    return lines


def describe_result(label: str, result: ValidationResult) -> List[str]:
    lines = [f"Validating {label}...", f"Result: {'✅ OK' if result.success else '❌ rejected'}"]
    return lines + issue_lines(result)


def codec_round_trip(iso: str = SAMPLE_ISO) -> Dict[str, str]:
    decoded = ISO_DATE.decode(iso)
    return {"iso": iso, "decoded": decoded.isoformat(), "encoded": ISO_DATE.encode(decoded)}


@dataclass
class ValidationRun:
    """Good and bad outputs for both domains"""
    ski_good: ValidationResult
    ski_bad: ValidationResult
    rx_good: ValidationResult
    rx_bad: ValidationResult


def run_validations() -> ValidationRun:
    return ValidationRun(
        ski_good=safe_parse(SkiWeatherAnswer, simulate_ski_answer(True)),
        ski_bad=safe_parse(SkiWeatherAnswer, simulate_ski_answer(False)),
        rx_good=safe_parse(PrescriptionDraft, simulate_prescription(True)),
        rx_bad=safe_parse(PrescriptionDraft, simulate_prescription(False)),
    )


def _mark(ok: bool) -> str:
    return "✅" if ok else "❌"


def verification_summary(registry: DomainRegistry = domain_registry) -> List[str]:
    """Each line is checked against the actual schemas, registry, validators and codec"""
    schemas_ok = all(
        "properties" in model.model_json_schema() for model in (SkiWeatherAnswer, PrescriptionDraft)
    )
    metas = [registry.meta(schema_id) for schema_id in registry.ids()]
    meta_ok = bool(metas) and all(m.title and m.description and m.examples for m in metas)

    run = run_validations()
    validation_ok = run.ski_good.success and run.rx_good.success and not (run.ski_bad.success or run.rx_bad.success)

    trip = codec_round_trip()
    codec_ok = trip["encoded"] == trip["iso"]

    return [
        f"{_mark(schemas_ok)} JSON Schema generated for both domains.",
        f"{_mark(meta_ok)} Metadata present: ids, titles, descriptions, examples used in prompts.",
        f"{_mark(validation_ok)} Validation caught intentionally bad outputs (units, ranges, types).",
        f"{_mark(codec_ok)} Codec round-tripped ISO date <-> datetime.",
    ]
