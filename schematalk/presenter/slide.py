"""
schematalk/presenter/slide.py
Slide / Stage - a titled unit of content with progressive reveal steps

A slide without stages renders its base content (or its own renderer) as-is.
With stages, the base content is ALWAYS shown, followed by:
  - replace:    the selected stage only
  - append:     the selected stage only (identical output to replace)
  - accumulate: every stage from 0 up to and including the selected one

Slides know nothing about terminals; they only produce text.
"""
from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from schematalk.presenter.errors import SlideDefinitionError
from schematalk.schemas.enums import StageMode

logger = logging.getLogger(__name__)

RenderResult = Union[str, Sequence[str], None]

_LINE_BREAK = re.compile(r"\r?\n")


# ============================================================
# Renderer context
# ============================================================
@dataclass(frozen=True)
class RenderContext:
    """Snapshot handed to a stage renderer"""
    stage_index: int   # currently selected stage of the slide (not the stage being realized)
    total_stages: int
    slide: "Slide"


StageRenderer = Callable[[RenderContext], Union[RenderResult, Awaitable[RenderResult]]]
SlideRenderer = Callable[[], Union[RenderResult, Awaitable[RenderResult]]]


# ============================================================
# Stage content: static text, static lines, or a deferred renderer
# ============================================================
@dataclass(frozen=True)
class TextContent:
    text: str


@dataclass(frozen=True)
class LinesContent:
    lines: tuple


@dataclass(frozen=True)
class DeferredContent:
    renderer: StageRenderer


StageContent = Union[TextContent, LinesContent, DeferredContent]


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text)


def to_lines(value: RenderResult) -> List[str]:
    """Flatten a string or a list of strings into lines (an empty string gives no lines)"""
    if not value:
        return []
    if isinstance(value, str):
        return split_lines(value)
    lines: List[str] = []
    for item in value:
        lines.extend(split_lines(str(item)))
    return lines


def as_static_content(value: Any) -> Optional[StageContent]:
    """str → TextContent, list/tuple of str → LinesContent, None → None"""
    if value is None:
        return None
    if isinstance(value, (TextContent, LinesContent)):
        return value
    if isinstance(value, str):
        return TextContent(value)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(line, str) for line in value):
            raise SlideDefinitionError("Content lists may only contain strings.")
        return LinesContent(tuple(value))
    raise SlideDefinitionError(f"Unsupported content type: {type(value).__name__}")


def as_stage_content(content: Any = None, renderer: Optional[StageRenderer] = None) -> Optional[StageContent]:
    """Renderer takes precedence over static content"""
    if renderer is not None:
        if not callable(renderer):
            raise SlideDefinitionError("Stage renderer must be callable.")
        return DeferredContent(renderer)
    if isinstance(content, DeferredContent):
        return content
    return as_static_content(content)


def _coerce_mode(mode: Any) -> StageMode:
    if mode is None:
        return StageMode.ACCUMULATE
    try:
        return StageMode(mode)
    except ValueError:
        choices = ", ".join(m.value for m in StageMode)
        raise SlideDefinitionError(f"Unknown stage mode {mode!r} (expected one of: {choices})") from None


def static_lines(content: Optional[StageContent]) -> List[str]:
    if isinstance(content, TextContent):
        return to_lines(content.text)
    if isinstance(content, LinesContent):
        return to_lines(content.lines)
    return []


async def _resolve(result: Any) -> RenderResult:
    if inspect.isawaitable(result):
        result = await result
    return result


# ============================================================
# Stage
# ============================================================
@dataclass(frozen=True)
class Stage:
    """One reveal step of a slide"""
    content: Any = None
    renderer: Optional[StageRenderer] = None
    mode: StageMode = StageMode.ACCUMULATE
    body: Optional[StageContent] = field(init=False, default=None, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "mode", _coerce_mode(self.mode))
        object.__setattr__(self, "body", as_stage_content(self.content, self.renderer))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stage":
        """Build from an options payload: {content, render|renderer, mode}"""
        if not isinstance(data, dict):
            raise SlideDefinitionError(f"Stage payload must be a mapping, got {type(data).__name__}")
        unknown = set(data) - {"content", "render", "renderer", "mode"}
        if unknown:
            raise SlideDefinitionError(f"Unknown stage option(s): {', '.join(sorted(unknown))}")
        return cls(
            content=data.get("content"),
            renderer=data.get("renderer", data.get("render")),
            mode=data.get("mode"),
        )

    async def realize(self, context: RenderContext) -> List[str]:
        body = self.body
        if isinstance(body, DeferredContent):
            return to_lines(await _resolve(body.renderer(context)))
        return static_lines(body)


# ============================================================
# Slide
# ============================================================
class Slide:
    """
    Immutable slide: title, optional header/footer, base content, stages.

    Args:
        title: required, non-empty
        header / footer: override the deck defaults for this slide only
        content: base content (str or list of str)
        stages: Stage objects or stage dicts
        renderer: full custom body for a slide WITHOUT stages (ignored otherwise)
    """

    _SLIDE_KEYS = {"title", "header", "footer", "content", "stages", "render", "renderer"}

    def __init__(
        self,
        title: str,
        *,
        header: Optional[str] = None,
        footer: Optional[str] = None,
        content: Union[str, Sequence[str], None] = None,
        stages: Optional[Sequence[Union[Stage, Dict[str, Any]]]] = None,
        renderer: Optional[SlideRenderer] = None,
    ):
        if not title or not isinstance(title, str):
            raise SlideDefinitionError("Slide requires a title.")
        if renderer is not None and not callable(renderer):
            raise SlideDefinitionError("Slide renderer must be callable.")

        self._title = title
        self._header = header
        self._footer = footer
        self._content = as_static_content(content)
        self._stages = tuple(self._coerce_stage(s) for s in (stages or ()))

        if self._stages and renderer is not None:
            logger.debug(f"[Slide] '{title}': renderer ignored because stages are set")
        self._renderer = renderer if not self._stages else None

    @staticmethod
    def _coerce_stage(stage: Any) -> Stage:
        if isinstance(stage, Stage):
            return stage
        if isinstance(stage, dict):
            return Stage.from_dict(stage)
        raise SlideDefinitionError(f"Invalid stage: {stage!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slide":
        """Build from an options payload (the form used by deck files and add_slide)"""
        if not isinstance(data, dict):
            raise SlideDefinitionError(f"Slide payload must be a mapping, got {type(data).__name__}")
        unknown = set(data) - cls._SLIDE_KEYS
        if unknown:
            raise SlideDefinitionError(f"Unknown slide option(s): {', '.join(sorted(unknown))}")
        return cls(
            data.get("title"),
            header=data.get("header"),
            footer=data.get("footer"),
            content=data.get("content"),
            stages=data.get("stages"),
            renderer=data.get("renderer", data.get("render")),
        )

    # --- read-only view ---
    @property
    def title(self) -> str:
        return self._title

    @property
    def header(self) -> Optional[str]:
        return self._header

    @property
    def footer(self) -> Optional[str]:
        return self._footer

    @property
    def content(self) -> Optional[StageContent]:
        return self._content

    @property
    def stages(self) -> tuple:
        return self._stages

    @property
    def stage_count(self) -> int:
        """A slide without stages behaves as one implicit stage"""
        return max(1, len(self._stages))

    def has_stages(self) -> bool:
        return len(self._stages) > 0

    def default_render(self) -> str:
        content = self._content
        if isinstance(content, TextContent):
            return content.text
        if isinstance(content, LinesContent):
            return "\n".join(content.lines)
        return ""

    async def render_stage(self, stage_index: int) -> str:
        """
        Body text for the requested stage.

        Out-of-range indexes are clamped; slides without stages ignore the index.
        """
        if not self._stages:
            if self._renderer is None:
                return self.default_render()
            body = await _resolve(self._renderer())
            if isinstance(body, str):
                return body
            return "\n".join(to_lines(body))

        selected = max(0, min(stage_index, len(self._stages) - 1))
        current = self._stages[selected]
        context = RenderContext(stage_index=selected, total_stages=len(self._stages), slide=self)

        lines = static_lines(self._content)

        if current.mode in (StageMode.REPLACE, StageMode.APPEND):
            lines.extend(await current.realize(context))
        else:
            for stage in self._stages[: selected + 1]:
                lines.extend(await stage.realize(context))

        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Slide(title={self._title!r}, stages={len(self._stages)})"
