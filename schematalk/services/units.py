"""
schematalk/services/units.py
Unit conversion, normalization and the ski heuristic
"""
from typing import Any, Dict, Optional

from schematalk.schemas.enums import Profile, SkiVerdict, Visibility
from schematalk.services.mcp_fake import SkiRawConditions

KMH_PER_MPH = 1.609344


def convert_to_c(temperature: float, unit: Optional[str]) -> float:
    if unit == "°F":
        return (temperature - 32) * (5 / 9)
    if unit == "K":
        return temperature - 273.15
    return temperature


def convert_to_f(temperature: float, unit: Optional[str]) -> float:
    if unit == "°C" or unit is None:
        return temperature * 9 / 5 + 32
    if unit == "K":
        return (temperature - 273.15) * 9 / 5 + 32
    return temperature


def to_kmh(wind: float, unit: Optional[str]) -> float:
    return wind * KMH_PER_MPH if unit == "mph" else wind


def to_mph(wind: float, unit: Optional[str]) -> float:
    return wind / KMH_PER_MPH if unit in ("km/h", None) else wind


def format_2(value: float) -> str:
    return f"{value:.2f}"


def normalize_visibility(value: str) -> Visibility:
    """Unknown labels fall back to "fair" """
    try:
        return Visibility(value)
    except ValueError:
        return Visibility.FAIR


def normalize_to_profile(raw: SkiRawConditions, profile: Profile) -> Dict[str, Any]:
    """Convert raw MCP values into the profile's default units"""
    visibility = normalize_visibility(raw.visibility)
    if Profile(profile) == Profile.USA:
        return {
            "temperatureF": convert_to_f(raw.temperature, raw.temp_unit),
            "windMph": to_mph(raw.wind, raw.wind_unit),
            "visibility": visibility,
        }
    return {
        "temperatureC": convert_to_c(raw.temperature, raw.temp_unit),
        "windKmh": to_kmh(raw.wind, raw.wind_unit),
        "visibility": visibility,
    }


def naive_celsius_opinion(value: float) -> str:
    """What a model says when it silently assumes °C"""
    if value >= 40:
        return "sounds extremely hot"
    if value >= 15:
        return "sounds warm"
    if value >= 0:
        return "sounds good"
    return "sounds cold"


def decide_ski(temperature_c: float, wind_kmh: float, visibility: Visibility) -> Dict[str, Any]:
    """Heuristic always evaluated in °C and km/h"""
    if visibility == Visibility.POOR:
        return {"decision": SkiVerdict.NO, "reason": "Visibility is poor."}
    if temperature_c < -20:
        return {"decision": SkiVerdict.NO, "reason": "Too cold."}
    if temperature_c > 10:
        return {"decision": SkiVerdict.NO, "reason": "Too warm."}
    if wind_kmh > 50:
        return {"decision": SkiVerdict.MAYBE, "reason": "High wind."}
    if temperature_c < -10 and wind_kmh > 30:
        return {"decision": SkiVerdict.MAYBE, "reason": "Cold and windy."}
    return {"decision": SkiVerdict.YES, "reason": "Conditions look acceptable."}
