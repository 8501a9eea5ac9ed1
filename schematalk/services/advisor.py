"""
schematalk/services/advisor.py
Simulated AI answers - the same data read with and without schema metadata

Without metadata the "model" has to guess units; with metadata it reads them
from the JSON Schema (units, recommended units, unit choices).
"""
from typing import Any, Dict

from schematalk.schemas.conditions import resolve_property
from schematalk.schemas.enums import Domain


# ============================================================
# Ski
# ============================================================
def simulate_decision_without_metadata_ski(data: Dict[str, Any]) -> str:
    return "\n".join([
        "🤖 AI (No Context | Ski):",
        f"- Temp: {data['temperature']} (unit unknown)",
        f"- Snow: {data['snowDepth']} (unit unknown)",
        f"- Wind: {data['windSpeed']} (unit unknown)",
        "",
        "⚠️ Ambiguous units block safe decision-making.",
    ])


def simulate_decision_with_metadata_ski(data: Dict[str, Any], schema: Dict[str, Any]) -> str:
    unit_t = resolve_property(schema, "temperature").get("unit", "?")
    unit_s = resolve_property(schema, "snowDepth").get("unit", "?")
    unit_w = resolve_property(schema, "windSpeed").get("unit", "?")
    unit_e = resolve_property(schema, "location", "elevation").get("unit", "?")
    return "\n".join([
        "🤖 AI (With Metadata | Ski):",
        f"- Temp: {data['temperature']}{unit_t}",
        f"- Snow: {data['snowDepth']}{unit_s}",
        f"- Wind: {data['windSpeed']}{unit_w}",
        f"- Elev: {data['location']['elevation']}{unit_e}",
        "",
        "✅ Units explicit → safer judgment.",
    ])


def ai_answer_ski_no_metadata(data: Dict[str, Any]) -> str:
    """Guesses °F for anything ≥ 25 - sometimes right, often not"""
    temperature = data["temperature"]
    assumed_fahrenheit = temperature >= 25
    assumed_c = (temperature - 32) * (5 / 9) if assumed_fahrenheit else temperature
    good = assumed_c <= 0 and data["snowDepth"] >= 30 and data["windSpeed"] <= 35
    verdict = "Yes" if good else "No"
    note = "(assumed °F; could be wrong)" if assumed_fahrenheit else "(unknown unit)"
    return f"AI: {verdict}. {note}"


def ai_answer_ski_with_metadata(data: Dict[str, Any], schema: Dict[str, Any]) -> str:
    unit_t = resolve_property(schema, "temperature").get("unit", "°C")
    unit_s = resolve_property(schema, "snowDepth").get("unit", "cm")
    unit_w = resolve_property(schema, "windSpeed").get("unit", "km/h")
    good = data["temperature"] <= 0 and data["snowDepth"] >= 30 and data["windSpeed"] <= 35
    verdict = "Yes" if good else "No"
    return f"AI: {verdict}. (temp<=0{unit_t}, snow>=30{unit_s}, wind<=35{unit_w})"


# ============================================================
# Medicine
# ============================================================
def simulate_decision_without_metadata_medicine(data: Dict[str, Any]) -> str:
    amount = data.get("amount")
    return "\n".join([
        "🤖 AI (No Context | Medicine):",
        f"- Dose: {data['dose']} (mcg/mg/g?)",
        f"- Freq: {data['frequency']} (per_?)",
        f"- Amount: {amount if amount is not None else '(unspecified)'} (unit?)",
        "- Note: Missing units/context → unsafe.",
    ])


def _first(choices: Any, fallback: str) -> str:
    return choices[0] if isinstance(choices, list) and choices else fallback


def simulate_decision_with_metadata_medicine(data: Dict[str, Any], schema: Dict[str, Any]) -> str:
    dose = resolve_property(schema, "dose")
    frequency = resolve_property(schema, "frequency")
    amount_prop = resolve_property(schema, "amount")

    dose_unit = dose.get("recommendedUnit") or dose.get("unit") or "(unit?)"
    freq_unit = frequency.get("recommendedUnit") or _first(frequency.get("frequencyUnitChoices"), "(per_?)")
    amount_unit = _first(amount_prop.get("amountUnitChoices"), "(unit?)")

    amount = data.get("amount")
    amount_text = amount if amount is not None else "(unspecified)"
    amount_line = f"- Amount: {amount_text} {amount_unit if amount else ''}".rstrip()
    return "\n".join([
        "🤖 AI (With Metadata | Medicine):",
        f"- Dose: {data['dose']} {dose_unit}",
        f"- Freq: {data['frequency']} {freq_unit}",
        amount_line,
        "",
        "✅ Explicit units/context → safer output.",
    ])


def ai_answer_med_no_metadata(data: Dict[str, Any]) -> str:
    return "AI: Approved. (assumed mg and per_day - ambiguous!)"


def ai_answer_med_with_metadata(data: Dict[str, Any], schema: Dict[str, Any]) -> str:
    dose_unit = resolve_property(schema, "dose").get("recommendedUnit", "mg")
    freq_unit = resolve_property(schema, "frequency").get("recommendedUnit", "per_day")
    amount_unit = _first(resolve_property(schema, "amount").get("amountUnitChoices"), "tablet")
    amount = data.get("amount")
    return (
        f"AI: OK. {data['dose']} {dose_unit}, {data['frequency']} {freq_unit}, "
        f"{amount if amount is not None else 1} {amount_unit}."
    )


# ============================================================
# Dispatch by domain
# ============================================================
def simulate_decision(domain: Domain, data: Dict[str, Any], schema: Dict[str, Any], has_metadata: bool) -> str:
    if Domain(domain) == Domain.SKI:
        if has_metadata:
            return simulate_decision_with_metadata_ski(data, schema)
        return simulate_decision_without_metadata_ski(data)
    if has_metadata:
        return simulate_decision_with_metadata_medicine(data, schema)
    return simulate_decision_without_metadata_medicine(data)


def ai_answer(domain: Domain, data: Dict[str, Any], schema: Dict[str, Any], has_metadata: bool) -> str:
    if Domain(domain) == Domain.SKI:
        if has_metadata:
            return ai_answer_ski_with_metadata(data, schema)
        return ai_answer_ski_no_metadata(data)
    if has_metadata:
        return ai_answer_med_with_metadata(data, schema)
    return ai_answer_med_no_metadata(data)
