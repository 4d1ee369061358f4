"""Command line entry point: ``python -m reactive_typeahead``."""

from pathlib import Path
from typing import Optional

import typer

from reactive_typeahead.config import load_settings
from reactive_typeahead.demo import TypeaheadDemoApp
from reactive_typeahead.logger import get_logger, setup_logger_from

cli = typer.Typer(
    name="reactive-typeahead-demo",
    help="Interactive demo of typeahead inputs bound to reactive form controls",
    epilog="""
    Examples:
    $ reactive-typeahead-demo --debounce-ms 150 --debug
    """,
    add_completion=False,
)


@cli.command()
def main(
    debounce_ms: Optional[int] = typer.Option(None, "--debounce-ms", min=0, help="Override TYPEAHEAD_DEBOUNCE_MS"),
    latency: float = typer.Option(0.2, "--latency", min=0.0, help="Simulated latency of the suggestions backend (s)"),
    debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level"),
    env_file: Optional[Path] = typer.Option(None, "--env-file", exists=True, dir_okay=False, help="Load settings from this .env file"),
):
    """Run the country/city picker demo."""
    settings = load_settings(env_file)
    if debounce_ms is not None:
        settings = settings.model_copy(update={"debounce_ms": debounce_ms})

    log_path = setup_logger_from(settings, log_level="DEBUG" if debug else None)
    logger = get_logger("main")
    logger.info(f"Logging to {log_path}")
    logger.info(f"Starting demo (debounce={settings.debounce_ms}ms, latency={latency}s)")

    TypeaheadDemoApp(settings=settings, latency=latency).run()


if __name__ == "__main__":
    cli()
