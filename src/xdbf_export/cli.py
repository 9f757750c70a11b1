"""XDBF export - container to parquet tables."""
from __future__ import annotations

import logging
from pathlib import Path

import click

from xdbf_core.protocol import Locale
from xdbf_export.tables import export_container

LOCALE_NAMES = [loc.name.lower() for loc in Locale if loc is not Locale.UNKNOWN]


@click.command()
@click.argument("container", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(file_okay=False, path_type=Path))
@click.option("--locale", type=click.Choice(LOCALE_NAMES), default=None,
              help="String table to join achievements against (default: the title's default locale)")
@click.option("--verbose", "-v", is_flag=True, help="Log decoder warnings to stderr")
def main(container: Path, out: Path, locale: str | None, verbose: bool) -> None:
    """Export an XDBF container's directory, achievements and icon."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        summary = export_container(
            container.read_bytes(),
            out,
            locale=Locale[locale.upper()] if locale else None,
        )
    except Exception as e:
        # Fail closed with a single-line reason.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)

    click.echo(f"PASS: Exported {container} to {out}")
    click.echo(f"  Title: {summary['title']}")
    click.echo(f"  Entries: {summary['entries']}")
    click.echo(f"  Achievements: {summary['achievements']}")


if __name__ == "__main__":
    main()
