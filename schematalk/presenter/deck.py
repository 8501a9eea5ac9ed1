"""
schematalk/presenter/deck.py
Presenter - deck controller for terminal slide shows

Owns the slide sequence and a stage cursor per slide, moves through
(slide, stage) pairs with next()/prev(), and writes frames to a rich Console.

Two run modes:
  - batch:       stdin is not a TTY (or keyboard navigation is off) →
                 every frame is printed in order, nothing is read
  - interactive: raw keystrokes drive navigation until q / Ctrl+C
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from rich.console import Console
from rich.text import Text

from schematalk.presenter.errors import EmptyDeckError
from schematalk.presenter.keyboard import NEXT_KEYS, PREV_KEYS, QUIT_KEYS, KeyboardInput
from schematalk.presenter.slide import Slide
from schematalk.schemas.enums import StageExpansion
from schematalk.schemas.presenter import PresenterOptions

logger = logging.getLogger(__name__)

CONTROLS_LEGEND = "Controls: ← Back | → Next | Space Next | q Quit"
LAST_SLIDE_NOTICE = "(Last slide)"
FIRST_SLIDE_NOTICE = "(First slide)"
EXIT_NOTICE = "Exiting presentation."
# Full terminal reset (RIS), written on every stream
CLEAR_SCREEN = "\x1bc"


class Presenter:
    """
    Staged slide presenter.

    Args:
        options: PresenterOptions (or a dict of them); keyword overrides win
        console: output console (stdout by default)
        keyboard: keystroke source (stdin by default)
    """

    def __init__(
        self,
        options: Union[PresenterOptions, Dict[str, Any], None] = None,
        *,
        console: Optional[Console] = None,
        keyboard: Optional[KeyboardInput] = None,
        **overrides: Any,
    ):
        if isinstance(options, PresenterOptions):
            merged = options.model_dump()
        else:
            merged = dict(options or {})
        merged.update(overrides)
        self.options = PresenterOptions(**merged)

        self.console = console if console is not None else Console(highlight=False)
        self.keyboard = keyboard if keyboard is not None else KeyboardInput()

        self._slides: List[Slide] = []
        self._stage_per_slide: List[int] = []
        self._index = 0
        self._running = False

    # ============================================================
    # Setup
    # ============================================================
    def add_slide(self, slide: Union[Slide, Dict[str, Any], None] = None, **kwargs: Any) -> "Presenter":
        """Append a Slide, a slide options dict, or Slide keyword arguments"""
        if self._running:
            logger.warning("[Presenter] add_slide called while running")
        if isinstance(slide, Slide):
            new_slide = slide
        elif isinstance(slide, dict):
            new_slide = Slide.from_dict({**slide, **kwargs})
        else:
            new_slide = Slide.from_dict(kwargs)

        self._slides.append(new_slide)
        self._stage_per_slide.append(0)
        return self

    def __len__(self) -> int:
        return len(self._slides)

    @property
    def slides(self) -> tuple:
        return tuple(self._slides)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def current_slide_index(self) -> int:
        return self._index

    @property
    def current_stage_index(self) -> int:
        return self._stage_per_slide[self._index] if self._slides else 0

    def stage_index_for(self, slide_index: int) -> int:
        """Remembered stage cursor of a slide"""
        return self._stage_per_slide[slide_index]

    # ============================================================
    # Navigation (no rendering, no exceptions at the boundaries)
    # ============================================================
    def next(self) -> bool:
        """Advance one stage, else one slide. False at the last stage of the last slide."""
        if not self._slides:
            return False
        slide = self._slides[self._index]
        stage = self._stage_per_slide[self._index]

        if stage < slide.stage_count - 1:
            self._stage_per_slide[self._index] = stage + 1
            return True

        if self._index < len(self._slides) - 1:
            # keep whatever stage the next slide was left at (0 on first visit)
            self._index += 1
            return True

        return False

    def prev(self) -> bool:
        """Go back one stage, else one slide. False at the first stage of the first slide."""
        if not self._slides:
            return False
        stage = self._stage_per_slide[self._index]

        if stage > 0:
            self._stage_per_slide[self._index] = stage - 1
            return True

        if self._index > 0:
            self._index -= 1
            return True

        return False

    # ============================================================
    # Run
    # ============================================================
    async def run(self) -> None:
        """
        Play the deck.

        Raises:
            EmptyDeckError: no slides were added
            Exception: anything a stage renderer raises
        """
        if self._running:
            logger.debug("[Presenter] run() ignored: already running")
            return
        if not self._slides:
            raise EmptyDeckError("Presenter has no slides. Add slides before run().")

        if not (self.options.keyboard_navigation and self.keyboard.is_interactive()):
            await self._run_batch()
            return

        # running covers the attached key loop only
        self._running = True
        try:
            await self._run_interactive()
        finally:
            self._running = False

    async def _run_batch(self) -> None:
        expansion = self.options.non_interactive_stages
        logger.info(f"[Presenter] batch mode: {len(self._slides)} slides, stages={expansion.value}")

        for i, slide in enumerate(self._slides):
            self._index = i
            if slide.has_stages() and expansion == StageExpansion.ALL:
                for stage in range(slide.stage_count):
                    self._stage_per_slide[i] = stage
                    await self.render_current()
            else:
                self._stage_per_slide[i] = slide.stage_count - 1
                await self.render_current()

    async def _run_interactive(self) -> None:
        logger.info(f"[Presenter] interactive mode: {len(self._slides)} slides")

        with self.keyboard.raw_mode():
            try:
                await self.render_current()
                while True:
                    key = await asyncio.to_thread(self.keyboard.read_key)
                    if not await self.handle_key(key):
                        break
            except KeyboardInterrupt:
                logger.info("[Presenter] interrupted")

        self.console.print(Text(EXIT_NOTICE, style=self.options.theme.footer))

    async def handle_key(self, key: str) -> bool:
        """
        Dispatch one keystroke.

        Returns:
            False when the presentation should end, True otherwise
        """
        if not key or key in QUIT_KEYS:
            return False

        if key in NEXT_KEYS:
            if self.next():
                await self.render_current()
            elif self.options.exit_on_last_slide:
                logger.debug("[Presenter] past the last slide, exiting")
                return False
            else:
                logger.debug("[Presenter] boundary: last slide")
                await self.render_current(LAST_SLIDE_NOTICE)
            return True

        if key in PREV_KEYS:
            if self.prev():
                await self.render_current()
            else:
                logger.debug("[Presenter] boundary: first slide")
                await self.render_current(FIRST_SLIDE_NOTICE)
            return True

        logger.debug(f"[Presenter] ignored key: {key!r}")
        return True

    # ============================================================
    # Output
    # ============================================================
    def clear(self) -> None:
        # Console.clear() is a no-op off a terminal
        self.console.file.write(CLEAR_SCREEN)
        self.console.file.flush()

    def _line(self, text: str = "", style: str = "") -> None:
        self.console.print(Text(text, style=style), soft_wrap=True)

    async def render_current(self, notice: Optional[str] = None) -> None:
        """Write the frame for the current slide and stage"""
        slide = self._slides[self._index]
        stage = self._stage_per_slide[self._index]
        opts = self.options
        theme = opts.theme

        # body first: nothing is written if a renderer fails
        body = await slide.render_stage(stage)

        if opts.clear_on_render:
            self.clear()

        if opts.title:
            self._line(opts.title, theme.header)
            if not opts.show_slide_indicator:
                self._line()

        if opts.show_slide_indicator:
            indicator = f"[Slide {self._index + 1}/{len(self._slides)}]"
            if opts.show_stage_indicator and slide.stage_count > 1:
                indicator += f" • [Step {stage + 1}/{slide.stage_count}]"
            self._line(indicator, theme.slide_indicator)
            self._line()

        header = slide.header if slide.header is not None else opts.header
        if header:
            self._line(header, theme.header)
            self._line()

        self._line(slide.title, theme.title)
        self._line()

        if body:
            self._line(body, theme.body)

        footer = slide.footer if slide.footer is not None else opts.footer
        if footer:
            self._line()
            self._line(footer, theme.footer)

        if notice:
            self._line()
            self._line(notice, theme.notice)

        if opts.show_controls:
            self._line()
            self._line(CONTROLS_LEGEND, theme.controls)

        logger.debug(f"[Presenter] frame: slide={self._index + 1} stage={stage + 1}")
