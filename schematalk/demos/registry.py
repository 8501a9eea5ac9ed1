"""
schematalk/demos/registry.py
Metadata, registries and JSON Schema guiding AI I/O (ski weather + prescription)

Walks the whole loop: metadata read back from the registry, JSON Schema with
and without metadata, the prompt built from it, validation of good and bad
model outputs, the ISO date codec and a checked summary.
"""
import logging
from typing import Any

from schematalk.demos.ski import to_json
from schematalk.presenter import Presenter, Stage
from schematalk.schemas.enums import StageMode
from schematalk.schemas.registry import (
    BarePrescriptionDraft,
    BareSkiWeatherAnswer,
    PrescriptionDraft,
    SkiWeatherAnswer,
    domain_registry,
)
from schematalk.services.prompting import (
    WITHOUT_METADATA,
    codec_round_trip,
    describe_result,
    prompt_for,
    run_validations,
    verification_summary,
)

logger = logging.getLogger(__name__)

REGISTRY_DECK_OPTIONS = {
    "title": "Metadata, registries and JSON Schema",
    "footer": "Press ←/→ or Space to navigate, q to quit",
}


def _schema_stage(label: str, model) -> Stage:
    return Stage(
        renderer=lambda ctx: [f"{label}:", to_json(model.model_json_schema())],
        mode=StageMode.REPLACE,
    )


def build_registry_presenter(**options: Any) -> Presenter:
    registry = domain_registry
    runs = run_validations()
    logger.info(f"[registry] {len(registry)} schemas registered")

    presenter = Presenter(REGISTRY_DECK_OPTIONS, **options)
    presenter.add_slide(
        title="Registry - metadata read back",
        content=[
            "Registered schemas:",
            *[f"- {schema_id}" for schema_id in registry.ids()],
            "",
            "Ski Weather Answer metadata:",
            to_json(registry.meta(SkiWeatherAnswer).as_dict()),
        ],
    ).add_slide(
        title="JSON Schema - with vs without metadata",
        stages=[
            _schema_stage("Ski Answer JSON Schema (with metadata)", SkiWeatherAnswer),
            _schema_stage("Ski Answer JSON Schema (bare)", BareSkiWeatherAnswer),
            _schema_stage("Prescription JSON Schema (with metadata)", PrescriptionDraft),
            _schema_stage("Prescription JSON Schema (bare)", BarePrescriptionDraft),
        ],
    ).add_slide(
        title="Prompt to guide AI",
        stages=[
            Stage(renderer=lambda ctx: prompt_for(SkiWeatherAnswer), mode=StageMode.REPLACE),
            Stage(renderer=lambda ctx: prompt_for(PrescriptionDraft), mode=StageMode.REPLACE),
        ],
    ).add_slide(
        title="Validating model outputs",
        stages=[
            Stage(content=describe_result("Ski (good)", runs.ski_good)),
            Stage(content=describe_result("Ski (bad)", runs.ski_bad)),
            Stage(content=describe_result("Prescription (good)", runs.rx_good)),
            Stage(content=describe_result("Prescription (bad)", runs.rx_bad)),
        ],
    ).add_slide(
        title="Codec - ISO string <-> datetime",
        content=["Wire format decoded for the app, encoded back for the model:", to_json(codec_round_trip())],
    ).add_slide(
        title="Verification summary",
        stages=[
            Stage(content=verification_summary(registry)),
            Stage(content=["", "Without metadata/registries:", *WITHOUT_METADATA]),
        ],
    )
    return presenter
