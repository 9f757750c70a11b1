import json
import logging
from pathlib import Path
import click
from .logic import describe_container, verify_container

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log decoder warnings to stderr")
def main(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.ERROR, format="%(levelname)s %(name)s: %(message)s")

@main.command("verify")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def verify_cmd(path: Path):
    result = verify_container(path.read_bytes())
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))
    if result["status"] != "PASS":
        raise SystemExit(1)

@main.command("describe")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def describe_cmd(path: Path):
    click.echo(json.dumps(describe_container(path.read_bytes()), **CANONICAL_JSON_KW))

if __name__ == "__main__":
    main()
