"""Load quads from rdflib graphs, serialized documents, URLs and HDT files."""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from rdflib import Dataset, Graph
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID
from rdflib_hdt import HDTDocument

from quad_reader.errors import SourceError
from quad_reader.terms import DEFAULT_GRAPH, Quad, Term, TermFactory

logger = logging.getLogger(__name__)

# Formats whose documents can name graphs
QUAD_FORMATS = frozenset({"nquads", "nq", "trig", "trix"})

# How often load_hdt() reports progress
PROGRESS_INTERVAL = 1_000_000


def _graph_term(context: Any, factory: TermFactory) -> Term:
    """Map an rdflib quad context to a graph term."""
    if context is None:
        return DEFAULT_GRAPH
    identifier = getattr(context, "identifier", context)
    if identifier == DATASET_DEFAULT_GRAPH_ID:
        return DEFAULT_GRAPH
    return factory.from_rdflib(identifier)


def load_graph(graph: Graph, factory: TermFactory | None = None) -> list[Quad]:
    """Convert an rdflib graph or dataset into quads.

    Args:
        graph: Graph, or context-aware store such as a Dataset
        factory: Term factory to intern terms with (a new one by default)

    Returns:
        Quads in the order rdflib yields them
    """
    factory = factory or TermFactory()
    term = factory.from_rdflib

    if graph.context_aware:
        quads = [
            Quad(term(s), term(p), term(o), _graph_term(c, factory))
            for s, p, o, c in graph.quads((None, None, None, None))  # type: ignore[union-attr]
        ]
    else:
        quads = [Quad(term(s), term(p), term(o), DEFAULT_GRAPH) for s, p, o in graph]

    logger.debug("Loaded %d quads (%d distinct terms)", len(quads), len(factory))
    return quads


def parse(data: str, format: str = "turtle", base: str | None = None) -> list[Quad]:
    """Parse a serialized RDF document into quads.

    Args:
        data: Document text
        format: rdflib parser name (default: turtle)
        base: Base IRI for resolving relative references

    Raises:
        SourceError: The document could not be parsed
    """
    graph = Dataset() if format in QUAD_FORMATS else Graph()
    try:
        graph.parse(data=data, format=format, publicID=base)
    except Exception as e:
        raise SourceError(f"cannot parse {format} document: {e}") from e
    return load_graph(graph)


def fetch_text(url: str, timeout: float = 30.0) -> str:
    """Retrieve a document over HTTP.

    Raises:
        SourceError: The request failed or returned an error status
    """
    logger.debug("Fetching %s", url)
    try:
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            response = client.get(url, headers={"Accept": "text/turtle"})
            response.raise_for_status()
    except httpx.HTTPError as e:
        raise SourceError(f"cannot fetch {url}: {e}") from e
    return response.text


def fetch(url: str, format: str = "turtle", timeout: float = 30.0) -> list[Quad]:
    """Retrieve and parse a document, using its URL as base."""
    return parse(fetch_text(url, timeout=timeout), format=format, base=url)


def load_hdt(
    hdt_path: str,
    progress_fn: Callable[[str], None] | None = None,
) -> list[Quad]:
    """Read every triple of an HDT file as default-graph quads.

    Args:
        hdt_path: Path to the HDT file
        progress_fn: Optional callback for progress reporting, receives a message string
    """

    def _log(msg: str) -> None:
        if progress_fn:
            progress_fn(msg)

    document = HDTDocument(hdt_path)
    factory = TermFactory()
    term = factory.from_rdflib

    # search() returns (iterator, cardinality); None means "any"
    triples, count = document.search((None, None, None))
    _log(f"  Triples to read: {count:,}")

    quads: list[Quad] = []
    for i, (s, p, o) in enumerate(triples):
        quads.append(Quad(term(s), term(p), term(o), DEFAULT_GRAPH))
        if i % PROGRESS_INTERVAL == 0 and i > 0:
            _log(f"  {i:,}/{count:,} triples read | terms: {len(factory):,}")

    _log(f"  Done. {len(quads):,} quads, {len(factory):,} distinct terms")
    return quads
