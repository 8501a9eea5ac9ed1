"""
test/test_slide.py
Slide / Stage rendering

  - slides without stages ignore the index
  - stage index clamping
  - accumulate vs replace/append
  - renderer context and async renderers
  - construction failures
"""
import asyncio

import pytest

from schematalk.presenter import (
    DeferredContent,
    LinesContent,
    RenderContext,
    Slide,
    SlideDefinitionError,
    Stage,
    TextContent,
)
from schematalk.schemas.enums import StageMode


def render(slide: Slide, index: int) -> str:
    return asyncio.run(slide.render_stage(index))


# ============================================================
# Construction
# ============================================================
class TestConstruction:
    @pytest.mark.parametrize("title", [None, "", 42])
    def test_title_required(self, title):
        with pytest.raises(SlideDefinitionError):
            Slide(title)

    def test_definition_error_is_value_error(self):
        with pytest.raises(ValueError):
            Slide("")

    def test_from_dict_missing_title(self):
        with pytest.raises(SlideDefinitionError, match="title"):
            Slide.from_dict({"content": "body"})

    def test_from_dict_unknown_option(self):
        with pytest.raises(SlideDefinitionError, match="colour"):
            Slide.from_dict({"title": "T", "colour": "red"})

    def test_unknown_stage_mode(self):
        with pytest.raises(SlideDefinitionError, match="sideways"):
            Stage(content="x", mode="sideways")

    def test_stage_dict_unknown_key(self):
        with pytest.raises(SlideDefinitionError):
            Slide("T", stages=[{"content": "x", "delay": 3}])

    def test_non_callable_renderer(self):
        with pytest.raises(SlideDefinitionError):
            Stage(renderer="not a function")

    def test_content_list_must_hold_strings(self):
        with pytest.raises(SlideDefinitionError):
            Slide("T", content=["ok", 3])

    def test_stage_count_floor(self):
        assert Slide("T").stage_count == 1
        assert Slide("T", stages=[{"content": "a"}, {"content": "b"}]).stage_count == 2

    def test_mode_accepts_string_and_enum(self):
        assert Stage(content="x", mode="replace").mode == StageMode.REPLACE
        assert Stage(content="x", mode=StageMode.APPEND).mode == StageMode.APPEND
        assert Stage(content="x").mode == StageMode.ACCUMULATE


class TestStageContent:
    def test_text(self):
        assert Stage(content="hello").body == TextContent("hello")

    def test_lines(self):
        assert Stage(content=["a", "b"]).body == LinesContent(("a", "b"))

    def test_renderer_wins_over_content(self):
        def renderer(ctx):
            return "rendered"

        stage = Stage(content="static", renderer=renderer)
        assert isinstance(stage.body, DeferredContent)
        assert stage.body.renderer is renderer

    def test_from_dict_render_alias(self):
        stage = Stage.from_dict({"render": lambda ctx: "r", "mode": "append"})
        assert isinstance(stage.body, DeferredContent)
        assert stage.mode == StageMode.APPEND

    def test_empty(self):
        assert Stage().body is None


# ============================================================
# Slides without stages
# ============================================================
class TestNoStages:
    def test_text_content(self):
        slide = Slide("T", content="line 1\nline 2")
        assert render(slide, 0) == "line 1\nline 2"

    def test_list_content_joined(self):
        slide = Slide("T", content=["a", "b", "c"])
        assert render(slide, 0) == "a\nb\nc"

    def test_no_content(self):
        assert render(Slide("T"), 0) == ""

    @pytest.mark.parametrize("index", [-5, 0, 1, 99])
    def test_index_ignored(self, index):
        slide = Slide("T", content="same")
        assert render(slide, index) == "same"

    def test_custom_renderer(self):
        slide = Slide("T", content="ignored", renderer=lambda: "custom")
        assert render(slide, 3) == "custom"

    def test_async_renderer_list(self):
        async def renderer():
            await asyncio.sleep(0)
            return ["x", "y"]

        assert render(Slide("T", renderer=renderer), 0) == "x\ny"

    def test_renderer_ignored_with_stages(self):
        slide = Slide("T", stages=[{"content": "stage"}], renderer=lambda: "custom")
        assert render(slide, 0) == "stage"


# ============================================================
# Reveal modes
# ============================================================
class TestAccumulate:
    def test_first_stage(self, slide_factory):
        assert render(slide_factory(content="base"), 0) == "base\nA"

    def test_all_stages_in_order(self, slide_factory):
        assert render(slide_factory(content="base"), 2) == "base\nA\nB\nC"

    def test_without_base(self, slide_factory):
        assert render(slide_factory(), 1) == "A\nB"

    def test_base_lines_flattened(self, slide_factory):
        slide = slide_factory(content=["b1", "b2\nb3"])
        assert render(slide, 0) == "b1\nb2\nb3\nA"


class TestReplaceAndAppend:
    @pytest.mark.parametrize("mode", ["replace", "append"])
    def test_only_current_stage(self, slide_factory, mode):
        slide = slide_factory(mode=mode, content="base")
        assert render(slide, 1) == "base\nB"

    def test_append_matches_replace(self, slide_factory):
        for index in range(3):
            assert render(slide_factory(mode="append"), index) == render(slide_factory(mode="replace"), index)

    def test_current_stage_mode_decides(self):
        slide = Slide("T", stages=[
            Stage(content="A"),
            Stage(content="B"),
            Stage(content="C", mode="replace"),
        ])
        assert render(slide, 1) == "A\nB"
        assert render(slide, 2) == "C"


class TestClamping:
    @pytest.mark.parametrize("index", [3, 4, 100])
    def test_above_range(self, slide_factory, index):
        slide = slide_factory(content="base")
        assert render(slide, index) == render(slide, 2)

    @pytest.mark.parametrize("index", [-1, -10])
    def test_below_range(self, slide_factory, index):
        slide = slide_factory(content="base")
        assert render(slide, index) == render(slide, 0)


# ============================================================
# Renderers
# ============================================================
class TestStageRenderers:
    def test_context_carries_selected_index(self):
        seen = []

        def renderer(ctx: RenderContext):
            seen.append(ctx.stage_index)
            return f"seen {ctx.stage_index}/{ctx.total_stages}"

        slide = Slide("T", stages=[Stage(renderer=renderer) for _ in range(3)])
        body = render(slide, 2)

        # earlier stages are realized with the selected index too
        assert seen == [2, 2, 2]
        assert body == "seen 2/3\nseen 2/3\nseen 2/3"

    def test_context_references_slide(self):
        captured = {}

        def renderer(ctx):
            captured["slide"] = ctx.slide
            return ctx.slide.title

        slide = Slide("Owner", stages=[Stage(renderer=renderer)])
        assert render(slide, 0) == "Owner"
        assert captured["slide"] is slide

    def test_async_stage_renderer(self):
        async def renderer(ctx):
            await asyncio.sleep(0)
            return "later"

        slide = Slide("T", content="base", stages=[Stage(renderer=renderer, mode="replace")])
        assert render(slide, 0) == "base\nlater"

    def test_none_renders_nothing(self):
        slide = Slide("T", content="base", stages=[Stage(renderer=lambda ctx: None)])
        assert render(slide, 0) == "base"

    def test_renderer_error_propagates(self):
        def renderer(ctx):
            raise RuntimeError("boom")

        slide = Slide("T", stages=[Stage(renderer=renderer)])
        with pytest.raises(RuntimeError, match="boom"):
            render(slide, 0)

    def test_windows_line_breaks(self):
        slide = Slide("T", stages=[Stage(renderer=lambda ctx: "a\r\nb")])
        assert render(slide, 0) == "a\nb"
