"""Level to colour mapping for heatmap cells."""

from __future__ import annotations

from collections.abc import Sequence

# Background shade first, then four increasingly saturated greens.
LEVEL_COLORS: tuple[str, ...] = ("#161b22", "#0e4429", "#006d32", "#26a641", "#39d353")


def level_color(level: int, colors: Sequence[str] = LEVEL_COLORS) -> str:
    """Return the colour for ``level``; out-of-range levels use the level-0 shade."""
    if 0 <= level < len(colors):
        return colors[level]
    return colors[0]


__all__ = ["LEVEL_COLORS", "level_color"]
