"""
schematalk/schemas/enums.py
All enum definitions in one place
"""
from enum import Enum


class StageMode(str, Enum):
    """How a stage is printed relative to base content and earlier stages"""
    REPLACE = "replace"        # base + current stage only
    APPEND = "append"          # base + current stage only (same output as replace)
    ACCUMULATE = "accumulate"  # base + stages 0..current


class StageExpansion(str, Enum):
    """Batch playback granularity for multi-stage slides"""
    ALL = "all"
    FINAL = "final"


class Profile(str, Enum):
    """Default unit profile for ski schemas"""
    INTL = "intl"  # °C, km/h
    USA = "usa"    # °F, mph


class Domain(str, Enum):
    """Demo domains"""
    SKI = "ski"
    MEDICINE = "medicine"


class SchemaKind(str, Enum):
    """Rungs of the schema quality ladder"""
    PLAIN_OBJECT = "plain-object"
    BASIC_MODEL = "model-basic"
    MANUAL_METADATA = "manual-metadata"
    MODEL_WITH_METADATA = "model-with-metadata"


class Visibility(str, Enum):
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class SkiVerdict(str, Enum):
    YES = "yes"
    NO = "no"
    MAYBE = "maybe"


class LengthUnit(str, Enum):
    CM = "cm"
    IN = "in"


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"


class ServiceLevel(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"
