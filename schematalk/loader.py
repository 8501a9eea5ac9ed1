"""
schematalk/loader.py
YAML deck loader and DeckDefinition dataclass

A deck file holds presenter options and slide payloads:

    options:
      title: Why metadata
      footer: Press q to quit
    slides:
      - title: Introduction
        content: |
          ...
        stages:
          - content: first step
            mode: accumulate

Renderers cannot be expressed in YAML; decks are static text.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from schematalk import config
from schematalk.presenter import DeckLoadError, Presenter

logger = logging.getLogger(__name__)

DECK_SUFFIXES = (".yaml", ".yml")


# ============================================================
# DeckDefinition: one parsed deck file
# ============================================================
@dataclass
class DeckDefinition:
    deck_id: str
    options: Dict[str, Any] = field(default_factory=dict)
    slides: List[Dict[str, Any]] = field(default_factory=list)
    source: Optional[Path] = None

    def get_slide_titles(self) -> List[str]:
        return [slide.get("title", "") for slide in self.slides]

    def build_presenter(self, **overrides: Any) -> Presenter:
        """Presenter with deck options (keyword overrides win) and all slides added"""
        presenter = Presenter(self.options, **overrides)
        for slide in self.slides:
            presenter.add_slide(slide)
        return presenter


# ============================================================
# DeckLoader: finds and parses deck files
# ============================================================
class DeckLoader:
    """Loads deck files from a directory (or from an explicit path)"""

    def __init__(self, base_path: Union[str, Path, None] = None):
        """
        Args:
            base_path: directory holding <deck_id>.yaml files
        """
        self.base_path = Path(base_path) if base_path is not None else config.DECKS_BASE_PATH

    def _get_deck_path(self, deck: Union[str, Path]) -> Path:
        """Explicit file path if it exists, otherwise <base_path>/<deck_id>.yaml|.yml"""
        candidate = Path(deck)
        if candidate.suffix in DECK_SUFFIXES and candidate.is_file():
            return candidate
        for suffix in DECK_SUFFIXES:
            path = self.base_path / f"{deck}{suffix}"
            if path.is_file():
                return path
        return self.base_path / f"{deck}{DECK_SUFFIXES[0]}"

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise DeckLoadError(f"Invalid YAML in {file_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DeckLoadError(f"Deck file {file_path} must contain a mapping, got {type(data).__name__}")
        return data

    def load(self, deck: Union[str, Path]) -> DeckDefinition:
        """
        Load a deck by id or path.

        Raises:
            FileNotFoundError: no such deck
            DeckLoadError: invalid YAML or deck structure
        """
        path = self._get_deck_path(deck)
        if not path.is_file():
            raise FileNotFoundError(f"Deck not found: {path}")

        logger.info(f"Loading deck from: {path}")
        data = self._load_yaml_file(path)

        options = data.get("options") or {}
        slides = data.get("slides")
        if not isinstance(options, dict):
            raise DeckLoadError(f"'options' in {path} must be a mapping")
        if not isinstance(slides, list) or not slides:
            raise DeckLoadError(f"'slides' in {path} must be a non-empty list")
        for index, slide in enumerate(slides, start=1):
            if not isinstance(slide, dict):
                raise DeckLoadError(f"Slide {index} in {path} must be a mapping")

        definition = DeckDefinition(
            deck_id=data.get("deck_id", path.stem),
            options=options,
            slides=slides,
            source=path,
        )
        logger.info(f"Loaded deck '{definition.deck_id}': {len(slides)} slides")
        return definition

    def exists(self, deck_id: str) -> bool:
        return self._get_deck_path(deck_id).is_file()

    def list_decks(self) -> List[str]:
        """Ids of all deck files under base_path"""
        if not self.base_path.exists():
            return []
        return sorted(
            path.stem for path in self.base_path.iterdir()
            if path.is_file() and path.suffix in DECK_SUFFIXES
        )


def load_presenter(
    deck: Union[str, Path],
    *,
    base_path: Union[str, Path, None] = None,
    **overrides: Any,
) -> Presenter:
    """Load a deck file and return a ready-to-run Presenter"""
    return DeckLoader(base_path).load(deck).build_presenter(**overrides)
