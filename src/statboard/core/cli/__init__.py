"""Statboard CLI — entry point for the collect and collectors commands."""

import click

from statboard import __version__

from .common import CONFIG_PATH


@click.group()
@click.version_option(version=__version__, package_name="statboard")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=str(CONFIG_PATH),
    show_default=True,
    help="YAML or JSON config file.",
)
@click.option("--log-level", default=None, help="Override log.level (DEBUG, INFO, WARNING, ERROR).")
@click.pass_context
def main(ctx: click.Context, config_path: str, log_level: str | None) -> None:
    """Statboard — collect daily fitness metrics for your dashboard."""
    from .common import configure_logging, load_config

    config = load_config(config_path)
    configure_logging(config, log_level)
    ctx.obj = config


# Register subcommands
from .collect_cmd import collect, collectors

main.add_command(collect)
main.add_command(collectors)
