"""
schematalk/presenter/errors.py
Presenter exception hierarchy
"""


class PresenterError(Exception):
    """Base error for slide/deck problems"""


class SlideDefinitionError(PresenterError, ValueError):
    """Slide or stage built from invalid arguments (e.g. missing title)"""


class EmptyDeckError(PresenterError, RuntimeError):
    """run() called before any slide was added"""


class DeckLoadError(PresenterError):
    """Deck file exists but is not valid YAML or not a deck"""
