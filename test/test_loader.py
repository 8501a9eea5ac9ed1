"""
test/test_loader.py
DeckLoader - bundled decks, explicit paths, invalid files
"""
import asyncio
from pathlib import Path

import pytest

from schematalk.loader import DeckDefinition, DeckLoader, load_presenter
from schematalk.presenter import DeckLoadError, SlideDefinitionError

DECKS_DIR = Path(__file__).parent.parent / "decks"


@pytest.fixture
def loader() -> DeckLoader:
    return DeckLoader(base_path=DECKS_DIR)


@pytest.fixture
def deck_dir(tmp_path) -> Path:
    (tmp_path / "tiny.yaml").write_text(
        "options:\n"
        "  title: Tiny\n"
        "  non_interactive_stages: final\n"
        "slides:\n"
        "  - title: First\n"
        "    content: hello\n"
        "  - title: Second\n"
        "    content: [base]\n"
        "    stages:\n"
        "      - content: one\n"
        "      - content: two\n",
        encoding="utf-8",
    )
    return tmp_path


class TestBundledDecks:
    def test_list(self, loader):
        assert "why_metadata" in loader.list_decks()

    def test_exists(self, loader):
        assert loader.exists("why_metadata")
        assert not loader.exists("nope")

    def test_load(self, loader):
        deck = loader.load("why_metadata")
        assert isinstance(deck, DeckDefinition)
        assert deck.deck_id == "why_metadata"
        assert deck.options["title"] == "Why metadata"
        assert deck.get_slide_titles()[0] == "Introduction"

    def test_every_slide_builds(self, loader):
        deck = loader.load("why_metadata")
        presenter = deck.build_presenter(clear_on_render=False)
        assert len(presenter) == len(deck.slides)


class TestLoad:
    def test_by_id(self, deck_dir):
        deck = DeckLoader(deck_dir).load("tiny")
        assert deck.deck_id == "tiny"
        assert deck.source == deck_dir / "tiny.yaml"
        assert len(deck.slides) == 2

    def test_by_path(self, deck_dir):
        deck = DeckLoader("/nonexistent").load(deck_dir / "tiny.yaml")
        assert deck.get_slide_titles() == ["First", "Second"]

    def test_missing(self, deck_dir):
        with pytest.raises(FileNotFoundError):
            DeckLoader(deck_dir).load("missing")

    def test_list_empty_dir(self, tmp_path):
        assert DeckLoader(tmp_path / "absent").list_decks() == []

    def test_yml_suffix(self, tmp_path):
        (tmp_path / "short.yml").write_text("slides:\n  - title: Only\n", encoding="utf-8")
        loader = DeckLoader(tmp_path)
        assert loader.list_decks() == ["short"]
        assert loader.load("short").get_slide_titles() == ["Only"]

    @pytest.mark.parametrize("body", [
        "slides: [unclosed\n",
        "- just\n- a list\n",
        "options: {}\n",
        "slides: []\n",
        "options: [1, 2]\nslides:\n  - title: A\n",
        "slides:\n  - plain string\n",
    ])
    def test_invalid_deck(self, tmp_path, body):
        (tmp_path / "bad.yaml").write_text(body, encoding="utf-8")
        with pytest.raises(DeckLoadError):
            DeckLoader(tmp_path).load("bad")


class TestLoadPresenter:
    def test_options_and_overrides(self, deck_dir):
        presenter = load_presenter("tiny", base_path=deck_dir, title="Override")
        assert presenter.options.title == "Override"
        assert presenter.options.non_interactive_stages.value == "final"
        assert len(presenter) == 2

    def test_plays_in_batch(self, deck_dir, keyboard_factory, console, read_output):
        presenter = load_presenter(
            "tiny",
            base_path=deck_dir,
            console=console,
            keyboard=keyboard_factory(interactive=False),
            clear_on_render=False,
        )
        asyncio.run(presenter.run())
        text = read_output(console)
        assert "[Slide 2/2] • [Step 2/2]" in text
        assert "base\none\ntwo" in text

    def test_slide_without_title(self, tmp_path):
        (tmp_path / "untitled.yaml").write_text("slides:\n  - content: x\n", encoding="utf-8")
        with pytest.raises(SlideDefinitionError):
            load_presenter("untitled", base_path=tmp_path)
