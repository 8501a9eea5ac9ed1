# schematalk/schemas/__init__.py

from .enums import (
    Domain,
    LengthUnit,
    Profile,
    SchemaKind,
    ServiceLevel,
    SkiVerdict,
    StageExpansion,
    StageMode,
    Visibility,
    WeightUnit,
)
from .presenter import PresenterOptions, Theme

__all__ = [
    # Enums
    "StageMode",
    "StageExpansion",
    "Profile",
    "Domain",
    "SchemaKind",
    "Visibility",
    "SkiVerdict",
    "LengthUnit",
    "WeightUnit",
    "ServiceLevel",
    # Presenter
    "PresenterOptions",
    "Theme",
]
