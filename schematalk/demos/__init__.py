# schematalk/demos/__init__.py

from .ski import build_ski_presenter, run_ski_presentation
from .shipping import build_shipping_presenter
from .comparison import build_comparison_presenter
from .registry import build_registry_presenter

__all__ = [
    "build_ski_presenter",
    "run_ski_presentation",
    "build_shipping_presenter",
    "build_comparison_presenter",
    "build_registry_presenter",
]
