"""Command-line interface for quad-reader."""

import json
import sys
from pathlib import Path
from typing import Any

import click

from quad_reader.reader import Option, QuadReader
from quad_reader.sources import fetch, load_hdt, parse
from quad_reader.terms import BlankNode, Literal, NamedNode, Quad


def _load(source: str, format: str, base: str | None) -> QuadReader:
    """Read quads from a URL, an HDT file, or a serialized RDF file."""
    if source.startswith(("http://", "https://")):
        click.echo(f"Fetching: {source}", err=True)
        return QuadReader(fetch(source, format=format))

    path = Path(source)
    if path.suffix == ".hdt":
        click.echo(f"Reading HDT file: {path}", err=True)
        return QuadReader(load_hdt(str(path), progress_fn=lambda msg: click.echo(msg, err=True)))

    click.echo(f"Parsing {format} file: {path}", err=True)
    return QuadReader(parse(path.read_text(encoding="utf-8"), format=format, base=base or path.resolve().as_uri()))


def _json_default(value: Any) -> Any:
    if isinstance(value, NamedNode | BlankNode):
        return value.id
    if isinstance(value, bytes):
        return value.hex()
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r"})


def _format_term(term: Any) -> str:
    match term:
        case NamedNode():
            return f"<{term.id}>"
        case Literal():
            text = '"' + term.value.translate(_ESCAPES) + '"'
            if term.language:
                return f"{text}@{term.language}"
            if term.datatype:
                return f"{text}^^<{term.datatype}>"
            return text
        case _:
            return term.id


def _format_quad(quad: Quad) -> str:
    terms = [quad.subject, quad.predicate, quad.object]
    if quad.graph.id:
        terms.append(quad.graph)
    return " ".join(_format_term(term) for term in terms) + " ."


source_argument = click.argument("source")
format_option = click.option(
    "-f",
    "--format",
    default="turtle",
    show_default=True,
    help="rdflib parser name for file and URL sources",
)
base_option = click.option(
    "--base",
    default=None,
    help="Base IRI for relative references (defaults to the file URI)",
)


@click.group()
def main() -> None:
    """Filter RDF quads and turn them into nested objects."""


@main.command()
@source_argument
@format_option
@base_option
@click.option("--subject", default=None, help="Only output the subject with this id")
@click.option(
    "--flatten",
    is_flag=True,
    default=False,
    help="Output single values without wrapping them in a list",
)
def pojo(source: str, format: str, base: str | None, subject: str | None, flatten: bool) -> None:
    """Print the quads of SOURCE as JSON objects keyed by subject.

    SOURCE: Path to an RDF or HDT file, or an http(s) URL
    """
    try:
        reader = _load(source, format, base)
        options = [Option.FLATTEN] if flatten else []
        result = reader.pojo(subject, *options)
        # NaN from malformed numeric literals has no JSON form
        click.echo(json.dumps(result, indent=2, default=_json_default, allow_nan=False))

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@source_argument
@format_option
@base_option
@click.option("-s", "--subject", default=None, help="Subject id to match")
@click.option("-p", "--predicate", default=None, help="Predicate id to match")
@click.option("-o", "--object", "object_", default=None, help="Object id to match")
@click.option("-g", "--graph", default=None, help="Graph id to match")
def match(
    source: str,
    format: str,
    base: str | None,
    subject: str | None,
    predicate: str | None,
    object_: str | None,
    graph: str | None,
) -> None:
    """Print the quads of SOURCE matching the given ids.

    SOURCE: Path to an RDF or HDT file, or an http(s) URL
    """
    try:
        reader = _load(source, format, base).filter(subject, predicate, object_, graph)
        count = 0
        for quad in reader:
            click.echo(_format_quad(quad))
            count += 1
        click.echo(f"{count} quads matched", err=True)

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
