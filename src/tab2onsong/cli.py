import logging
import sys
from pathlib import Path

import click

from .adapters.base import SiteAdapter
from .adapters.ultimate_guitar import UltimateGuitarAdapter
from .adapters.worshipchords import WorshipChordsAdapter
from .exceptions import ExtractionError, FetchError, UnsupportedSiteError
from .pipeline import to_onsong
from .registry import get_adapter

SUPPORTED_SITES = "tabs.ultimate-guitar.com, worshipchords.com"


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr so stdout carries only the sheet."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _convert(adapter: SiteAdapter, url: str, output_path: str | None) -> None:
    """Scrape *url*, render it, and print or write the sheet; exit 1 on failure."""
    try:
        sheet = adapter.scrape(url)
        onsong_text = to_onsong(sheet)
    except FetchError as exc:
        msg = f"Error: Could not fetch {exc.url}"
        if exc.status_code:
            msg += f" (HTTP {exc.status_code})"
        click.echo(msg, err=True)
        sys.exit(1)
    except ExtractionError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output_path is None:
        click.echo(onsong_text, nl=False)
        return

    dest = Path(output_path)
    dest.write_text(onsong_text, encoding="utf-8")
    click.echo(f"Written to {dest}", err=True)


_output_option = click.option(
    "-o", "--output", "output_path", default=None, metavar="PATH",
    help="Write the sheet to PATH instead of stdout.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Convert chord sheets from chord websites to OnSong format.

    \b
    Supported sites:
      - tabs.ultimate-guitar.com
      - worshipchords.com
    """
    setup_logging(verbose)


@main.command()
@click.option("--id", "tab_id", default=None, help="Ultimate Guitar tab id.")
@click.option("--url", default=None, help="Ultimate Guitar tab URL.")
@_output_option
def onsong(tab_id: str | None, url: str | None, output_path: str | None) -> None:
    """Fetch a tab from ultimate-guitar.com by id or URL and format it for OnSong."""
    if not tab_id and not url:
        raise click.UsageError("Either --id or --url is required.")
    adapter = UltimateGuitarAdapter()
    _convert(adapter, adapter.url_for(url or tab_id), output_path)


@main.command()
@click.option("--url", required=True, help="URL of the song on worshipchords.com.")
@_output_option
def worshipchords(url: str, output_path: str | None) -> None:
    """Fetch a song from worshipchords.com and format it for OnSong."""
    _convert(WorshipChordsAdapter(), url, output_path)


@main.command()
@click.argument("url")
@_output_option
def convert(url: str, output_path: str | None) -> None:
    """Convert any supported chord page URL to OnSong format."""
    try:
        adapter = get_adapter(url)
    except UnsupportedSiteError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo(f"Supported sites: {SUPPORTED_SITES}", err=True)
        sys.exit(1)
    _convert(adapter, url, output_path)


@main.command()
@click.option("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Port (default: $PORT or 3000).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP conversion and Drive submission proxy."""
    import uvicorn

    from .config import Settings
    from .server import create_app

    settings = Settings.from_env()
    logging.getLogger().setLevel(settings.log_level.upper())
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
    )


main.add_command(onsong, name="o")
main.add_command(worshipchords, name="wc")
