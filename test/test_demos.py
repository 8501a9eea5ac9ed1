"""
test/test_demos.py
Demo talks played in batch mode against a captured console
"""
import asyncio

import pytest

from schematalk.demos.comparison import CONFIGURATIONS, build_comparison_presenter
from schematalk.demos.registry import build_registry_presenter
from schematalk.demos.shipping import build_shipping_presenter, cost_delta
from schematalk.demos.ski import build_ski_presenter
from schematalk.schemas.enums import Domain, Profile


def indicators(text: str) -> list:
    return [line for line in text.splitlines() if line.startswith("[Slide ")]


def play(presenter) -> None:
    asyncio.run(presenter.run())


# ============================================================
# Ski talk
# ============================================================
class TestSkiTalk:
    def build(self, console, keyboard, **kwargs):
        return asyncio.run(build_ski_presenter(
            console=console, keyboard=keyboard, clear_on_render=False, **kwargs
        ))

    def test_slides(self, console, batch_keyboard):
        presenter = self.build(console, batch_keyboard)
        titles = [s.title for s in presenter.slides]
        assert len(titles) == 13
        assert titles[0] == "Introduction"
        assert titles[-1] == "End + Q&A"

    def test_batch_all_stages(self, console, batch_keyboard, read_output):
        presenter = self.build(console, batch_keyboard)
        play(presenter)
        out = read_output(console)

        # 9 single-frame slides + 4 + 1 + 2 + 3 stages
        assert len(indicators(out)) == 19
        assert out.splitlines()[0] == "Metadata with AI"
        assert "Normalized: -1.11 °C | 20.00 km/h | good" in out
        assert '"decision": "yes"' in out
        assert "30 sounds warm (assuming °C)" in out
        assert "Controls:" not in out

    def test_batch_final_stage_only(self, console, batch_keyboard, read_output):
        presenter = self.build(console, batch_keyboard, non_interactive_stages="final")
        play(presenter)
        assert len(indicators(read_output(console))) == 13

    def test_usa_profile(self, console, batch_keyboard, read_output):
        play(self.build(console, batch_keyboard, profile=Profile.USA))
        out = read_output(console)
        assert "Normalized: 30.00 °F | 12.43 mph | good" in out
        assert '"temperatureF": 30' in out

    def test_overrides_change_decision(self, console, batch_keyboard, read_output):
        play(self.build(console, batch_keyboard, overrides={"visibility": "poor", "temperature": -5, "temp_unit": "°C"}))
        out = read_output(console)
        assert '"decision": "no"' in out
        assert "Visibility is poor." in out
        # no °F reading, no naive remark
        assert "(assuming °C)" not in out


# ============================================================
# Shipping demo
# ============================================================
class TestShippingDemo:
    def test_batch(self, console, batch_keyboard, read_output):
        presenter = asyncio.run(build_shipping_presenter(
            console=console, keyboard=batch_keyboard, clear_on_render=False
        ))
        play(presenter)
        out = read_output(console)

        assert len(indicators(out)) == 9
        assert "bad=55.0 vs good=74.33 (delta ~26%)" in out
        assert "Structurizer + pydantic + JSON Schema" in out
        assert '"title": "Shipping Package Input"' in out

    @pytest.mark.parametrize("bad, good, expected", [
        (55.0, 74.33, "26"),
        (None, 74.33, "N/A"),
        (10, 0, "N/A"),
        (10, 10, "0"),
    ])
    def test_cost_delta(self, bad, good, expected):
        assert cost_delta(bad, good) == expected


# ============================================================
# Schema ladder
# ============================================================
class TestComparisonDemo:
    @pytest.mark.parametrize("domain", list(Domain))
    def test_structure(self, domain, console, batch_keyboard):
        presenter = build_comparison_presenter(domain, console=console, keyboard=batch_keyboard)
        titles = [s.title for s in presenter.slides]
        assert titles[0] == "Comparing all configurations"
        assert titles[-1] == "Safety implications"
        assert len(titles) == len(CONFIGURATIONS) + 2
        assert all(s.stage_count == 3 for s in presenter.slides[1:-1])

    def test_ski_batch(self, console, batch_keyboard, read_output):
        presenter = build_comparison_presenter(
            Domain.SKI, console=console, keyboard=batch_keyboard, clear_on_render=False
        )
        play(presenter)
        out = read_output(console)

        assert len(indicators(out)) == 1 + 3 * len(CONFIGURATIONS) + 1
        assert "1. Plain Objects - 🔴 DANGEROUS" in out
        assert "Validation: disabled" in out
        assert "temperature='30°F': ❌ FAILED" in out
        assert "AI: Yes. (temp<=0°C, snow>=30cm, wind<=35km/h)" in out

    def test_medicine_batch(self, console, batch_keyboard, read_output):
        presenter = build_comparison_presenter(
            Domain.MEDICINE, console=console, keyboard=batch_keyboard,
            clear_on_render=False, non_interactive_stages="final",
        )
        play(presenter)
        out = read_output(console)

        assert len(indicators(out)) == len(CONFIGURATIONS) + 2
        assert "AI: OK. 4 mg, 3 per_day, 1 tablet." in out
        assert "Dose units (mcg vs mg vs g)" in out


# ============================================================
# Registry walk-through
# ============================================================
class TestRegistryDemo:
    def build(self, console, keyboard, **options):
        return build_registry_presenter(console=console, keyboard=keyboard, clear_on_render=False, **options)

    def test_batch_all_stages(self, console, batch_keyboard, read_output):
        play(self.build(console, batch_keyboard))
        out = read_output(console)

        # 1 + 4 schemas + 2 prompts + 4 checks + 1 + 2
        assert len(indicators(out)) == 14
        assert "- ski_weather.answer" in out
        assert "Ski Answer JSON Schema (bare)" in out
        assert "You are to return ONLY valid JSON for: Ski Weather Answer." in out
        assert "You are to return ONLY valid JSON for: Prescription Output (Draft)." in out
        assert '"encoded": "2025-12-20T00:00:00.000Z"' in out
        assert "Without metadata/registries:" in out

    def test_final_stage_shows_all_checks(self, console, batch_keyboard, read_output):
        play(self.build(console, batch_keyboard, non_interactive_stages="final"))
        out = read_output(console)

        assert len(indicators(out)) == 6
        assert out.count("Result: ✅ OK") == 2
        assert out.count("Result: ❌ rejected") == 2
        assert "- dosageMg: " in out
        assert "✅ Validation caught intentionally bad outputs (units, ranges, types)." in out
        assert "❌" not in out.split("Verification summary", 1)[1]
