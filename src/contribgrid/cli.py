"""Command-line entry points for contribgrid."""

from __future__ import annotations

import asyncio
import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from contribgrid.config import ContribGridConfig, dump_example_config, load_config
from contribgrid.grid import DAYS_PER_WEEK
from contribgrid.io.cache import ContributionCache
from contribgrid.io.fetcher import ContributionFetcher
from contribgrid.io.store import build_store
from contribgrid.util.logging import configure_logging
from contribgrid.view import HeatmapView, load_view

app = typer.Typer(add_completion=False, help="Contribution heatmap CLI")

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
LEVEL_GLYPHS = "·░▒▓█"


def build_fetcher(cfg: ContribGridConfig) -> ContributionFetcher:
    cache = ContributionCache(build_store(cfg.cache))
    return ContributionFetcher(
        cache,
        base_url=cfg.source.base_url,
        timeout_seconds=cfg.source.timeout_seconds,
        headers=cfg.source.headers,
    )


def render_text(view: HeatmapView) -> str:
    """Render a 7-row text heatmap, one column per week."""

    lines = [f"{view.total} contributions in {view.year} ({view.entity})"]
    for slot in range(DAYS_PER_WEEK):
        row = []
        for week in view.weeks:
            day = week[slot]
            if day.is_padding:
                row.append(" ")
            elif 0 <= day.level < len(LEVEL_GLYPHS):
                row.append(LEVEL_GLYPHS[day.level])
            else:
                row.append(LEVEL_GLYPHS[0])
        label = WEEKDAY_LABELS[slot] if slot % 2 == 1 else ""
        lines.append(f"{label:<4}{''.join(row)}")
    return "\n".join(lines)


@app.command()
def show(
    entity: str = typer.Argument(..., help="Account name to query"),
    year: Optional[int] = typer.Option(None, help="Calendar year (default: current year)"),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to a config file"),
) -> None:
    """Load a year of contributions and print the week grid."""

    if output_format not in {"text", "json"}:
        raise typer.BadParameter("must be 'text' or 'json'", param_hint="--format")

    cfg = load_config(config_path)
    logger = configure_logging(log_path=cfg.runtime.log_path)
    target_year = year or date.today().year

    fetcher = build_fetcher(cfg)
    view = asyncio.run(
        load_view(fetcher, entity, target_year, hide_future_days=cfg.runtime.hide_future_days)
    )

    if not view.ok:
        typer.echo(view.error, err=True)
        raise typer.Exit(code=1)

    logger.info("Built %s weeks for %s/%s", len(view.weeks), entity, target_year)
    if output_format == "json":
        typer.echo(json.dumps(view.to_dict(cfg.palette.colors), indent=2))
    else:
        typer.echo(render_text(view))


@app.command()
def dump_config(
    dest: Path = typer.Argument(..., help="Destination file (.yaml or .json)"),
) -> None:
    """Write the default configuration to DEST."""

    dump_example_config(dest)
    typer.echo(f"Wrote {dest}")


def main() -> None:
    app()


__all__ = ["app", "build_fetcher", "main", "render_text"]
