"""
schematalk/demos/comparison.py
Schema quality ladder - the same payload under all four configurations

One slide per configuration; its stages reveal the action preview, what
validation catches, and how the (simulated) model answers.
"""
import logging
from typing import Any, Dict, List

from schematalk.demos.ski import to_json
from schematalk.presenter import Presenter, Stage
from schematalk.schemas.conditions import (
    SchemaGenerationOptions,
    SchemaResult,
    generate_schema_for_configuration,
    get_configuration_description,
    get_safety_level,
    get_schema_preview,
    sample_data,
    validate_data_with_schema,
)
from schematalk.schemas.enums import Domain
from schematalk.services.advisor import ai_answer, simulate_decision

logger = logging.getLogger(__name__)

CONFIGURATIONS = [
    ("Plain Objects", SchemaGenerationOptions(use_validation=False, use_metadata=False)),
    ("Validation Only", SchemaGenerationOptions(use_validation=True, use_metadata=False)),
    ("Metadata Only", SchemaGenerationOptions(use_validation=False, use_metadata=True)),
    ("Complete Solution", SchemaGenerationOptions(use_validation=True, use_metadata=True)),
]

USER_QUESTIONS = {
    Domain.SKI: "Is it good weather to ski today?",
    Domain.MEDICINE: "Please draft an antibiotic prescription for an adult with sinus infection.",
}

# A wire payload with the unit glued into the number
MALFORMED_FIELDS = {
    Domain.SKI: ("temperature", "30°F"),
    Domain.MEDICINE: ("dose", "4 mg"),
}


def _validation_lines(result: SchemaResult, data: Dict[str, Any]) -> List[str]:
    if not result.has_validation:
        return [
            "Validation: disabled",
            "   Any payload passes, including malformed ones.",
        ]
    field, bad_value = MALFORMED_FIELDS[result.domain]
    sample = validate_data_with_schema(data, result)
    malformed = validate_data_with_schema({**data, field: bad_value}, result)
    lines = [
        "Validation: enabled",
        f"   Sample payload: {'✅ PASSED' if sample.success else '❌ FAILED'}",
        f"   {field}={bad_value!r}: {'✅ PASSED' if malformed.success else '❌ FAILED'}",
    ]
    if malformed.error is not None:
        for error in malformed.error.errors():
            location = ".".join(str(part) for part in error["loc"])
            lines.append(f"     - {location}: {error['msg']}")
    return lines


def build_comparison_presenter(domain: Domain = Domain.SKI, **options: Any) -> Presenter:
    domain = Domain(domain)
    data = sample_data(domain)
    question = USER_QUESTIONS[domain]

    presenter = Presenter(
        {
            "title": f"Schema quality ladder ({domain.value})",
            "footer": "Press ←/→ or Space to navigate, q to quit",
        },
        **options,
    )

    overview = [f"Sample payload ({domain.value}):", to_json(data), "", "Configurations:"]
    for index, (name, config) in enumerate(CONFIGURATIONS, start=1):
        overview.append(f"{index}. {name} - {get_safety_level(config)}")
    presenter.add_slide(title="Comparing all configurations", content=overview)

    for index, (name, config) in enumerate(CONFIGURATIONS, start=1):
        result = generate_schema_for_configuration(config.model_copy(update={"domain": domain}))
        logger.debug(f"[compare] {name}: {result.kind.value}")

        # bind per-iteration values; renderers run later
        def preview(ctx, result=result):
            return ["Action preview:", to_json(get_schema_preview(result.schema, result.domain))]

        def validation(ctx, result=result):
            return _validation_lines(result, data)

        def answer(ctx, result=result):
            return [
                f'User: "{question}"',
                simulate_decision(domain, data, result.schema, result.has_metadata),
                ai_answer(domain, data, result.schema, result.has_metadata),
            ]

        presenter.add_slide(
            title=f"{index}. {name.upper()}",
            content=[
                f"Approach: {get_configuration_description(result)}",
                f"Safety:   {get_safety_level(config)}",
                "",
            ],
            stages=[Stage(renderer=preview), Stage(renderer=validation), Stage(renderer=answer)],
        )

    if domain == Domain.SKI:
        implications = [
            "Without metadata, a model cannot tell:",
            "   • Temperature units (°C vs °F vs K)",
            "   • Distance units (cm vs inches vs feet)",
            "   • Speed units (km/h vs mph vs m/s)",
            "",
            "   Example: -5°F = -20.6°C (dangerous hypothermia risk!)",
            "   Example: -5°C = 23°F (perfect skiing temperature!)",
        ]
    else:
        implications = [
            "Without metadata, a model cannot tell:",
            "   • Dose units (mcg vs mg vs g)",
            "   • Frequency base (per hour vs per day vs per week)",
            "   • Packaging (tablet vs ml vs pack)",
        ]
    presenter.add_slide(
        title="Safety implications",
        content=implications + ["", "Validation + metadata → accurate, safe decision-making."],
    )
    return presenter
