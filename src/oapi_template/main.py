"""Command line entry point for oapi-template."""

import logging
import sys
from typing import Optional

import click

from .config import Config
from .errors import TemplatingError
from .renderer import TemplateRenderer

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure root logging for a CLI run."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


@click.group()
def cli() -> None:
    """oapi-template merges OpenAPI source files into one document."""


@cli.command()
@click.argument("template", type=click.Path(dir_okay=False))
@click.argument("out", type=click.Path(dir_okay=False))
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Override the configured logging level",
)
def template(
    template: str, out: str, config: Optional[str], log_level: Optional[str]
) -> None:
    """Render TEMPLATE and write the assembled document to OUT.

    TEMPLATE is a Jinja2 template calling includeVerbatim, includeYQ,
    includeOAPISchemas, includeOAPIPaths or includeOAPIParameters. Glob
    patterns are resolved relative to the working directory. OUT is
    overwritten, and only written when rendering succeeds.
    """
    try:
        settings = Config.load(config) if config else Config()
    except (OSError, ValueError) as e:
        setup_logging(log_level or "INFO")
        logger.critical(f"failed to load configuration {config!r}: {e}")
        sys.exit(1)

    setup_logging(log_level or settings.log_level)

    renderer = TemplateRenderer(settings)
    try:
        renderer.render_to_file(template, out)
    except TemplatingError as e:
        logger.critical(str(e))
        sys.exit(1)


def main() -> None:
    """Run the CLI."""
    cli()


if __name__ == "__main__":
    main()
