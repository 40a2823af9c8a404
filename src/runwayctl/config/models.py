"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, runwayctl.toml only contains
overrides.  Pixel values are CSS pixels of the rendered timeline.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from runwayctl.domain.types import Granularity

# --- runwayctl.toml sections ---


class TimelineConfig(BaseModel):
    """[timeline] section."""

    model_config = {"frozen": True}

    quarterly_month_width: int = Field(default=100, gt=0)
    yearly_month_width: int = Field(default=30, gt=0)
    default_granularity: Granularity = Granularity.QUARTERLY
    initial_start_offset: int = -12
    initial_end_offset: int = 24
    scroll_buffer: int = Field(default=12, gt=0)  # months added per expansion
    scroll_threshold: int = 200  # px from an edge that triggers expansion
    debounce_ms: int = Field(default=100, ge=0)
    initial_scroll_padding: int = 100
    bar_padding: int = 4
    row_height: int = Field(default=40, gt=0)
    header_height: int = 32

    def month_width(self, granularity: Granularity) -> int:
        if granularity == Granularity.YEARLY:
            return self.yearly_month_width
        return self.quarterly_month_width


class DragConfig(BaseModel):
    """[drag] section."""

    model_config = {"frozen": True}

    pointer_distance: float = 10.0
    touch_delay_ms: int = 250
    touch_tolerance: float = 5.0


class RunwayConfig(BaseModel):
    """[runway] section."""

    model_config = {"frozen": True}

    max_months: int = Field(default=120, gt=0)
    quarterly_label_threshold: int = 24
    min_year: int = 2000
    max_year: int = 2100


class ScenarioConfig(BaseModel):
    """[scenario] section."""

    model_config = {"frozen": True}

    file: str = "scenario.yaml"

