"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, stategraph.toml only contains
overrides. An empty file (or no file at all) yields a working configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from stategraph.domain.models import CANVAS_MARGIN, LayoutOptions


class HierarchicalConfig(BaseModel):
    """[hierarchical] section."""

    model_config = {"frozen": True}

    width: float = Field(default=1000, gt=2 * CANVAS_MARGIN, allow_inf_nan=False)
    height: float = Field(default=600, gt=2 * CANVAS_MARGIN, allow_inf_nan=False)
    node_spacing: float = Field(default=100, ge=0, allow_inf_nan=False)
    level_spacing: float = Field(default=150, ge=0, allow_inf_nan=False)

    def to_options(self) -> LayoutOptions:
        return LayoutOptions(**self.model_dump())


class ForceConfig(BaseModel):
    """[force] section."""

    model_config = {"frozen": True}

    width: float = Field(default=1000, gt=2 * CANVAS_MARGIN, allow_inf_nan=False)
    height: float = Field(default=600, gt=2 * CANVAS_MARGIN, allow_inf_nan=False)
    iterations: int = Field(default=100, ge=0)
    seed: int | None = None

    def to_options(self) -> LayoutOptions:
        return LayoutOptions(width=self.width, height=self.height, seed=self.seed)


class SnapshotConfig(BaseModel):
    """[snapshot] section."""

    model_config = {"frozen": True}

    path: str = "stategraph.json"
    indent: int | None = 2

