# schematalk/presenter/__init__.py

from .errors import DeckLoadError, EmptyDeckError, PresenterError, SlideDefinitionError
from .slide import (
    DeferredContent,
    LinesContent,
    RenderContext,
    Slide,
    Stage,
    TextContent,
)
from .keyboard import KeyboardInput
from .deck import Presenter

__all__ = [
    # Errors
    "PresenterError",
    "SlideDefinitionError",
    "EmptyDeckError",
    "DeckLoadError",
    # Slides
    "Slide",
    "Stage",
    "RenderContext",
    "TextContent",
    "LinesContent",
    "DeferredContent",
    # Deck
    "Presenter",
    "KeyboardInput",
]
