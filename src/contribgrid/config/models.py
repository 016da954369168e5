"""Pydantic models describing contribgrid configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SourceConfig(BaseModel):
    """Remote contribution source."""

    model_config = ConfigDict(extra="allow")

    base_url: str = "https://github-contributions-api.jogruber.de/v4"
    timeout_seconds: float = Field(default=15, ge=1)
    headers: Dict[str, str] = Field(default_factory=dict)


class CacheConfig(BaseModel):
    """Backing store selection for the contribution cache."""

    model_config = ConfigDict(extra="allow")

    backend: Literal["file", "memory"] = "file"
    directory: Path = Path("~/.cache/contribgrid")


class RuntimeConfig(BaseModel):
    """Execution-time switches."""

    model_config = ConfigDict(extra="allow")

    hide_future_days: bool = True
    log_path: Optional[Path] = None


class PaletteConfig(BaseModel):
    """Heatmap colours, level 0 first."""

    model_config = ConfigDict(extra="allow")

    colors: List[str] = Field(
        default_factory=lambda: ["#161b22", "#0e4429", "#006d32", "#26a641", "#39d353"]
    )

    @model_validator(mode="after")
    def _validate_levels(self) -> "PaletteConfig":
        """Require one colour per contribution level."""

        if len(self.colors) != 5:
            raise ValueError("palette.colors must list exactly five colours (levels 0-4).")
        return self


class ContribGridConfig(BaseModel):
    """Root configuration object."""

    model_config = ConfigDict(extra="allow")

    source: SourceConfig = Field(default_factory=SourceConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    palette: PaletteConfig = Field(default_factory=PaletteConfig)


__all__ = [
    "CacheConfig",
    "ContribGridConfig",
    "PaletteConfig",
    "RuntimeConfig",
    "SourceConfig",
]
