"""
test/conftest.py
Shared fixtures - console capture, scripted keyboard, slide/presenter factories
"""
import io
from contextlib import contextmanager
from typing import List, Optional

import pytest
from rich.console import Console

from schematalk.presenter import Presenter, Slide, Stage


# ============================================================
# Output capture
# ============================================================
def make_console() -> Console:
    """Plain-text console: no colors, no terminal control sequences"""
    return Console(
        file=io.StringIO(),
        force_terminal=False,
        color_system=None,
        width=200,
        highlight=False,
    )


def output_of(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def console() -> Console:
    return make_console()


# ============================================================
# Scripted keyboard
# ============================================================
class FakeKeyboard:
    """
    Stand-in for KeyboardInput.

    Keys are handed out in order; once exhausted read_key() returns ""
    (end of input).
    """

    def __init__(self, keys: Optional[List[str]] = None, interactive: bool = True):
        self.keys = list(keys or [])
        self.interactive = interactive
        self.raw_acquired = 0
        self.raw_released = 0
        self.reads = 0

    def is_interactive(self) -> bool:
        return self.interactive

    @contextmanager
    def raw_mode(self):
        self.raw_acquired += 1
        try:
            yield
        finally:
            self.raw_released += 1

    def read_key(self) -> str:
        self.reads += 1
        if not self.keys:
            return ""
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key


@pytest.fixture
def batch_keyboard() -> FakeKeyboard:
    return FakeKeyboard(interactive=False)


# ============================================================
# Presenter / slide factories
# ============================================================
def make_presenter(keyboard=None, console=None, **options) -> Presenter:
    options.setdefault("clear_on_render", False)
    return Presenter(
        console=console or make_console(),
        keyboard=keyboard or FakeKeyboard(interactive=False),
        **options,
    )


def three_stage_slide(title: str = "Staged", mode: str = "accumulate", content=None) -> Slide:
    return Slide(
        title,
        content=content,
        stages=[Stage(content=text, mode=mode) for text in ("A", "B", "C")],
    )


@pytest.fixture
def presenter_factory():
    return make_presenter


@pytest.fixture
def staged_deck(console, batch_keyboard) -> Presenter:
    """One, Two (3 stages), Three"""
    presenter = make_presenter(keyboard=batch_keyboard, console=console)
    presenter.add_slide(title="One", content="first")
    presenter.add_slide(three_stage_slide("Two"))
    presenter.add_slide(title="Three", content="third")
    return presenter


@pytest.fixture
def keyboard_factory():
    return FakeKeyboard


@pytest.fixture
def slide_factory():
    return three_stage_slide


@pytest.fixture
def read_output():
    return output_of
