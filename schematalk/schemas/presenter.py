"""
schematalk/schemas/presenter.py
Presenter configuration schemas (fixed at construction)
"""
from pydantic import BaseModel, ConfigDict, Field

from schematalk.schemas.enums import StageExpansion


class Theme(BaseModel):
    """rich style string per frame part"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    header: str = Field("dim green", description="Presentation title and slide header")
    title: str = Field("bold cyan", description="Slide title")
    footer: str = Field("dim bright_black", description="Footer and exit notice")
    controls: str = Field("dim bright_black", description="Controls legend")
    slide_indicator: str = Field("yellow", description="[Slide i/N] • [Step j/M]")
    body: str = Field("white", description="Stage body text")
    notice: str = Field("magenta", description="Boundary notices")


class PresenterOptions(BaseModel):
    """Deck-level presenter configuration"""
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        json_schema_extra={
            "example": {
                "title": "Metadata with AI",
                "footer": "Arrows ← →, press q to quit",
                "show_controls": False,
                "non_interactive_stages": "all",
            }
        },
    )

    title: str = Field("", description="Presentation title, printed on every frame")
    header: str = Field("", description="Default header (slide.header overrides)")
    footer: str = Field("", description="Default footer (slide.footer overrides)")
    clear_on_render: bool = Field(True, description="Clear the screen before each frame")
    show_controls: bool = Field(True, description="Print the navigation legend")
    show_slide_indicator: bool = Field(True, description="Print [Slide i/N]")
    show_stage_indicator: bool = Field(True, description="Append [Step j/M] for multi-stage slides")
    keyboard_navigation: bool = Field(True, description="Interactive mode when stdin is a TTY")
    exit_on_last_slide: bool = Field(False, description="Advancing past the final stage exits")
    non_interactive_stages: StageExpansion = Field(
        StageExpansion.ALL,
        description="Batch playback: every stage of a slide, or only its final stage",
    )
    theme: Theme = Field(default_factory=Theme)
