"""Configuration management using Pydantic Settings."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Viewer settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LINKMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Layout Parameters
    layout_dx: float = Field(
        default=160.0,
        description="Horizontal step between depth levels"
    )
    layout_dy: float = Field(
        default=70.0,
        description="Row height allotted to one unit of leaf weight"
    )
    layout_margin_left: float = 60.0

    # Zoom Parameters
    zoom_min: float = Field(
        default=0.4,
        ge=0.4,
        le=3.0,
        description="Smallest scale; may only narrow the 0.4-3 range"
    )
    zoom_max: float = Field(
        default=3.0,
        ge=0.4,
        le=3.0,
        description="Largest scale; may only narrow the 0.4-3 range"
    )
    zoom_button_factor: float = 1.2
    zoom_wheel_factor: float = 1.15

    # Pinch Parameters
    pinch_factor_min: float = Field(
        default=0.7,
        description="Lower clamp for a single pinch update"
    )
    pinch_factor_max: float = Field(
        default=1.4,
        description="Upper clamp for a single pinch update"
    )

    # Backlink Defaults
    backlink_style: str = "dashed"
    backlink_color: str = "#7cb8ff"
    backlink_bend: float = 40.0
    backlink_pad: float = 10.0
    backlink_arrow_length: float = 6.0
    backlink_hit_width: float = Field(
        default=14.0,
        description="Stroke width of the invisible hover path"
    )
    hover_samples: int = Field(
        default=32,
        description="Segments used to approximate a curve for hit-testing"
    )

    # Node Defaults
    node_stroke: str = "#0b122d"

    # Retrieval
    data_location: str = "data/latest.json"
    http_timeout: float = 30.0

    # Viewport
    viewport_width: float = 1200.0
    viewport_height: float = 800.0
    mobile_breakpoint: float = 768.0

    @model_validator(mode="after")
    def _check_zoom_range(self) -> "Settings":
        if self.zoom_min > self.zoom_max:
            raise ValueError("zoom_min must not exceed zoom_max")
        return self


def get_test_settings() -> Settings:
    """Get test environment settings."""
    return Settings(
        data_location="tests/fixtures/graph.json",
        viewport_width=1000.0,
        viewport_height=600.0,
    )


# Global settings instance
settings = Settings()
