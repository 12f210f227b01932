"""statboard collect — fetch metrics and print them."""

from __future__ import annotations

import json

import click

from statboard.core.config import Config
from statboard.core.exceptions import StatboardError
from statboard.models import Metric


@click.command()
@click.argument("collector_name", metavar="COLLECTOR")
@click.argument("metric_name", metavar="METRIC")
@click.option(
    "--days",
    "days_back",
    type=click.IntRange(min=0),
    default=7,
    show_default=True,
    help="Days before yesterday to include.",
)
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table", show_default=True)
@click.pass_obj
def collect(config: Config, collector_name: str, metric_name: str, days_back: int, fmt: str) -> None:
    """Collect METRIC from COLLECTOR for the window ending yesterday."""
    from statboard.collector.registry import default_registry

    registry = default_registry()
    if registry.get(collector_name) is None:
        raise click.UsageError(f"Unknown collector '{collector_name}'. Available: {', '.join(registry.list_names())}")

    try:
        collector = registry.create(collector_name, **config.get_section(collector_name))
        metrics = collector.collect(metric_name, days_back)
    except StatboardError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    click.echo(_render(metrics, fmt))


@click.command()
def collectors() -> None:
    """List available collectors."""
    from statboard.collector.registry import default_registry

    for name in default_registry().list_names():
        click.echo(name)


def _render(metrics: list[Metric], fmt: str) -> str:
    if fmt == "json":
        return json.dumps([m.to_dict() for m in metrics], indent=2)
    if not metrics:
        return "No metrics."
    width = max(len(m.name) for m in metrics)
    return "\n".join(f"{m.date.isoformat()}  {m.name:<{width}}  {_format_value(m.value)}" for m in metrics)


def _format_value(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}"
