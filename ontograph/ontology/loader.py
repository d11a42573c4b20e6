"""
ontograph Ontology Loader
=========================
Ingestion of obographs JSON ontology releases (hp.json, mondo.json, ...)

Document shape read by JsonGraphParser:
    {"graphs": [{"id": ..., "meta": {...}, "nodes": [...], "edges": [...]}]}

- nodes: CLASS nodes become Terms, PROPERTY nodes become Properties
- edges: {"sub": ..., "pred": ..., "obj": ...}; "is_a" is the hierarchy relation
- meta.basicPropertyValues: ontology-level annotations

A malformed top-level shape raises StructuralError. A malformed node or edge
is reported in the diagnostics list and skipped; parsing continues.

Version: 1.0.0
"""
from __future__ import annotations

import gzip
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.error import URLError
from urllib.request import urlretrieve

from ontograph.config.settings import OntologyConfig, get_ontology_config
from ontograph.core.exceptions import ElementError, MalformedIdentifier, StructuralError
from ontograph.core.types import Result
from ontograph.ontology.builder import build_ontology
from ontograph.ontology.entities import Edge, PredicateValue, Property, Synonym, Term
from ontograph.ontology.hierarchy import OntologyStore
from ontograph.ontology.identifiers import CrossReference, Identifier, XrefOrigin
from ontograph.ontology.vocabulary import EdgeKind, Predicate, PropertyKind

logger = logging.getLogger(__name__)


NO_ERRORS_MESSAGE = "[INFO] No errors encountered in JSON parse"


# =============================================================================
# Parse Output
# =============================================================================
@dataclass
class ParsedOntology:
    """
    Everything read from one JSON graph document

    Attributes:
        ontology_id: graphs[0].id
        terms: CLASS nodes in document order
        edges: document edges plus synthesized is-a inverses
        ontology_values: graphs[0].meta.basicPropertyValues
        properties: PROPERTY nodes
        diagnostics: recoverable problems, in encounter order
    """
    ontology_id: str
    terms: List[Term] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    ontology_values: List[PredicateValue] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.diagnostics


def format_diagnostics(diagnostics: Sequence[str]) -> str:
    """Quality report for a diagnostics list"""
    if not diagnostics:
        return NO_ERRORS_MESSAGE
    return "\n".join(["[ERRORS]:", *diagnostics])


# =============================================================================
# JSON Graph Parser
# =============================================================================
class JsonGraphParser:
    """
    obographs JSON parser

    Each node and edge is turned into a Result; failures and warnings are
    collected into `diagnostics` instead of aborting the parse.
    """

    def __init__(self, config: Optional[OntologyConfig] = None):
        self.config = config or get_ontology_config()
        self.diagnostics: List[str] = []

    # =========================================================================
    # Entry Points
    # =========================================================================
    def parse_file(self, file_path: Union[str, Path]) -> ParsedOntology:
        """
        Parse a JSON graph file

        Args:
            file_path: .json or .json.gz file

        Raises:
            FileNotFoundError: file does not exist
            StructuralError: invalid JSON, undecodable bytes or wrong document shape
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Ontology file not found: {file_path}")

        logger.info(f"Parsing JSON graph file: {file_path}")

        if str(file_path).endswith('.gz'):
            open_func = lambda p: gzip.open(p, 'rt', encoding='utf-8')
        else:
            open_func = lambda p: open(p, 'r', encoding='utf-8')

        with open_func(file_path) as f:
            try:
                document = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError, gzip.BadGzipFile) as e:
                raise StructuralError(f"Invalid JSON in {file_path.name}: {e}") from e

        return self.parse(document)

    def parse_string(self, text: str) -> ParsedOntology:
        """Parse a JSON graph document held in memory"""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise StructuralError(f"Invalid JSON document: {e}") from e
        return self.parse(document)

    def parse(self, document: Any) -> ParsedOntology:
        """
        Parse an already decoded JSON graph document

        Raises:
            StructuralError: graphs / nodes / edges / id / meta missing or mistyped
        """
        self.diagnostics = []
        graph = self._main_graph(document)

        parsed = ParsedOntology(ontology_id=graph["id"], diagnostics=self.diagnostics)
        self._process_nodes(graph["nodes"], parsed)
        self._process_edges(graph["edges"], parsed)
        self._process_metadata(graph["meta"], parsed)

        logger.info(
            f"Parsed {len(parsed.terms)} terms, {len(parsed.edges)} edges, "
            f"{len(parsed.properties)} properties from {parsed.ontology_id} "
            f"({len(self.diagnostics)} diagnostics)"
        )
        if self.config.log_diagnostics:
            for message in self.diagnostics:
                logger.warning(message)

        return parsed

    def quality_report(self) -> str:
        """Diagnostics report of the most recent parse"""
        return format_diagnostics(self.diagnostics)

    # =========================================================================
    # Document Shape
    # =========================================================================
    @staticmethod
    def _main_graph(document: Any) -> Dict[str, Any]:
        if not isinstance(document, dict):
            raise StructuralError("Ontology JSON document is not an object.")
        graphs = document.get("graphs")
        if not isinstance(graphs, list):
            raise StructuralError("Ontology JSON did not contain graphs element array.")
        if not graphs:
            raise StructuralError("Ontology JSON graphs array is empty.")

        graph = graphs[0]
        if not isinstance(graph, dict):
            raise StructuralError("Main graph element is not a JSON object.")

        expected = (("nodes", list), ("edges", list), ("id", str), ("meta", dict))
        for key, kind in expected:
            if key not in graph:
                raise StructuralError(f"Did not find {key} element")
            if not isinstance(graph[key], kind):
                raise StructuralError(f"Top-level {key} element has wrong type")
        return graph

    # =========================================================================
    # Nodes
    # =========================================================================
    def _process_nodes(self, nodes: List[Any], parsed: ParsedOntology) -> None:
        for node in nodes:
            node_type = node.get("type") if isinstance(node, dict) else None

            if node_type == "CLASS":
                outcome = self._term_outcome(node)
            elif node_type == "PROPERTY":
                outcome = self._property_outcome(node)
            else:
                self._record(Result.fail("Node is neither CLASS nor PROPERTY"), node)
                continue

            if self._record(outcome, node):
                if isinstance(outcome.data, Term):
                    parsed.terms.append(outcome.data)
                else:
                    parsed.properties.append(outcome.data)

    def _term_outcome(self, node: Dict[str, Any]) -> Result[Term]:
        try:
            return self._build_term(node)
        except (ElementError, MalformedIdentifier) as e:
            return Result.fail(str(e))

    def _build_term(self, node: Dict[str, Any]) -> Result[Term]:
        raw_id = node.get("id")
        if raw_id is None:
            raise ElementError("Attempt to add malformed node (no id).")
        term_id = Identifier.resolve(raw_id)
        warnings: List[str] = []

        label = node.get("lbl")
        if label is None:
            warnings.append(f"[WARNING] node ({term_id}): no label.")
            label = ""
        elif not isinstance(label, str):
            raise ElementError(f"Malformed node ({term_id}): label is not a string.")

        meta = node.get("meta")
        if meta is None:
            logger.debug(f"Node {term_id} has no meta information")
            return Result.ok(Term(id=term_id, label=label), warnings=warnings)
        if not isinstance(meta, dict):
            raise ElementError(f"Malformed node ({term_id}): meta is not JSON object.")

        definition, definition_xrefs = self._definition(meta, term_id, warnings)
        xrefs = self._term_xrefs(meta, term_id, warnings)
        synonyms = self._synonyms(meta, term_id)

        alternative_ids: List[Identifier] = []
        predicate_values: List[PredicateValue] = []
        obsolete = meta.get("deprecated") is True
        for entry in self._array(meta, "basicPropertyValues", term_id):
            value = self._predicate_value(entry)
            if value.is_alternate_id:
                try:
                    alternative_ids.append(Identifier.resolve(value.value))
                except MalformedIdentifier as e:
                    warnings.append(f"[ERROR] Could not parse alternative id of node ({term_id}): {e}")
                continue
            if value.predicate is Predicate.OWL_DEPRECATED and value.value.lower() == "true":
                obsolete = True
            predicate_values.append(value)

        term = Term(
            id=term_id,
            label=label,
            definition=definition,
            definition_xrefs=tuple(definition_xrefs),
            xrefs=tuple(xrefs),
            synonyms=tuple(synonyms),
            alternative_ids=tuple(alternative_ids),
            predicate_values=tuple(predicate_values),
            obsolete=obsolete,
        )
        return Result.ok(term, warnings=warnings)

    def _definition(self, meta: Dict[str, Any], term_id: Identifier, warnings: List[str]):
        definition = meta.get("definition")
        if definition is None:
            return None, []
        if not isinstance(definition, dict):
            raise ElementError(f"Malformed node ({term_id}): definition is not JSON object.")

        text = definition.get("val")
        if text is not None and not isinstance(text, str):
            raise ElementError(f"Malformed node ({term_id}): definition val is not a string.")

        xrefs = []
        for raw in self._array(definition, "xrefs", term_id):
            try:
                xrefs.append(CrossReference.parse(raw, XrefOrigin.DEFINITION))
            except MalformedIdentifier as e:
                warnings.append(f"[ERROR] Could not parse definition xref of node ({term_id}): {e}")
        return text, xrefs

    def _term_xrefs(self, meta: Dict[str, Any], term_id: Identifier, warnings: List[str]):
        xrefs = []
        for entry in self._array(meta, "xrefs", term_id):
            raw = entry.get("val") if isinstance(entry, dict) else None
            try:
                xrefs.append(CrossReference.parse(raw, XrefOrigin.ANNOTATION))
            except MalformedIdentifier as e:
                warnings.append(f"[ERROR] Could not parse xref of node ({term_id}): {e}")
        return xrefs

    def _synonyms(self, meta: Dict[str, Any], term_id: Identifier) -> List[Synonym]:
        synonyms = []
        for entry in self._array(meta, "synonyms", term_id):
            if not isinstance(entry, dict):
                raise ElementError(f"Synonym is not JSON object (node:{term_id})")
            for key in ("pred", "val"):
                if not isinstance(entry.get(key), str):
                    raise ElementError(f"Synonym required to have {key} object (node:{term_id})")
            synonyms.append(Synonym(predicate=entry["pred"], label=entry["val"]))
        return synonyms

    @staticmethod
    def _array(container: Dict[str, Any], key: str, term_id: Identifier) -> List[Any]:
        value = container.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise ElementError(f"Malformed node ({term_id}): {key} not array")
        return value

    @staticmethod
    def _predicate_value(entry: Any) -> PredicateValue:
        """
        Build a PredicateValue from a {pred, val} object

        The pred IRI is cut to its last path segment before lookup, e.g.
        http://purl.org/dc/elements/1.1/creator -> creator.
        """
        if not isinstance(entry, dict):
            raise ElementError("PropertyValue factory expects object")
        pred = entry.get("pred")
        if not isinstance(pred, str):
            raise ElementError("PropertyValue did not contain 'pred' element")
        value = entry.get("val")
        if not isinstance(value, str):
            raise ElementError("PropertyValue did not contain 'val' element")
        return PredicateValue(Predicate.from_string(pred[pred.rfind("/") + 1:]), value)

    def _property_outcome(self, node: Dict[str, Any]) -> Result[Property]:
        raw_id = node.get("id")
        if not isinstance(raw_id, str) or not raw_id:
            return Result.fail("Could not create Property: malformed node (no id).")
        kind = PropertyKind.from_id(raw_id)
        if kind is PropertyKind.UNKNOWN:
            logger.debug(f"Unrecognised property node: {raw_id}")
        return Result.ok(Property(kind=kind, source_id=raw_id))

    # =========================================================================
    # Edges
    # =========================================================================
    def _process_edges(self, edges: List[Any], parsed: ParsedOntology) -> None:
        synthesize = self.config.synthesize_inverse_edges
        for raw in edges:
            outcome = self._edge_outcome(raw)
            if not self._record(outcome, raw):
                continue
            edge = outcome.data
            parsed.edges.append(edge)
            if synthesize and edge.kind is EdgeKind.IS_A:
                parsed.edges.append(edge.inverse())

    def _edge_outcome(self, raw: Any) -> Result[Edge]:
        if not isinstance(raw, dict):
            return Result.fail("Could not create Edge: not JSON object")
        for key in ("sub", "pred", "obj"):
            if not isinstance(raw.get(key), str):
                return Result.fail(f"Could not create Edge: missing '{key}' element")
        try:
            source = Identifier.resolve(raw["sub"])
            destination = Identifier.resolve(raw["obj"])
        except MalformedIdentifier as e:
            return Result.fail(f"Could not create Edge: {e}")
        return Result.ok(Edge(source, destination, EdgeKind.from_relation(raw["pred"])))

    # =========================================================================
    # Ontology Metadata
    # =========================================================================
    def _process_metadata(self, meta: Dict[str, Any], parsed: ParsedOntology) -> None:
        values = meta.get("basicPropertyValues")
        if values is None:
            return
        if not isinstance(values, list):
            self._record(Result.fail("Ontology property values not array"), values)
            return
        for entry in values:
            try:
                outcome = Result.ok(self._predicate_value(entry))
            except ElementError as e:
                outcome = Result.fail(str(e))
            if self._record(outcome, entry):
                parsed.ontology_values.append(outcome.data)

    # =========================================================================
    # Diagnostics
    # =========================================================================
    def _record(self, outcome: Result, element: Any) -> bool:
        """Append the outcome's messages to diagnostics; True when it succeeded"""
        self.diagnostics.extend(outcome.warnings)
        if not outcome.success:
            self.diagnostics.append(
                f"[ERROR] {outcome.error}; generated by ({self._dump(element)})"
            )
        return outcome.success

    def _dump(self, element: Any) -> str:
        try:
            return json.dumps(element, indent=self.config.json_dump_indent, ensure_ascii=False)
        except (TypeError, ValueError):
            return repr(element)


# =============================================================================
# Ontology Loader
# =============================================================================
class OntologyLoader:
    """
    Ontology loader

    Loads JSON graph files from disk, or downloads known releases into a
    cache directory, and builds OntologyStore instances.
    """

    def __init__(
        self,
        config: Optional[OntologyConfig] = None,
        cache_dir: Optional[Path] = None,
    ):
        """
        Args:
            config: parser / builder settings (process-wide config by default)
            cache_dir: download cache, overrides config.cache_dir
        """
        self.config = config or get_ontology_config()
        self.cache_dir = Path(cache_dir) if cache_dir else self.config.resolved_cache_dir
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self.parser = JsonGraphParser(self.config)
        self._loaded_ontologies: Dict[str, OntologyStore] = {}

    def load(self, path: Union[str, Path]) -> OntologyStore:
        """
        Load and build an ontology file

        Args:
            path: .json or .json.gz JSON graph file

        Returns:
            OntologyStore
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Ontology file not found: {path}")

        if str(path).endswith('.json') or str(path).endswith('.json.gz'):
            parsed = self.parser.parse_file(path)
            return build_ontology(parsed, self.config)
        raise ValueError(f"Unsupported ontology format: {path.suffix}")

    def load_hp(self, force_download: bool = False) -> OntologyStore:
        """Load the Human Phenotype Ontology"""
        return self.load_known("hp", force_download)

    def load_mondo(self, force_download: bool = False) -> OntologyStore:
        """Load the MONDO disease ontology"""
        return self.load_known("mondo", force_download)

    def load_known(self, ontology_name: str, force_download: bool = False) -> OntologyStore:
        """
        Load a known ontology release, downloading it when not cached

        Raises:
            ValueError: name not in config.ontology_urls
            RuntimeError: download failed and no cached copy exists
        """
        # Check memory cache
        if ontology_name in self._loaded_ontologies and not force_download:
            logger.info(f"Using cached {ontology_name} ontology")
            return self._loaded_ontologies[ontology_name]

        url = self.config.ontology_urls.get(ontology_name)
        if not url:
            raise ValueError(f"Unknown ontology: {ontology_name}")

        # Check file cache
        cache_file = self.cache_dir / f"{ontology_name}.json"

        if not cache_file.exists() or force_download:
            logger.info(f"Downloading {ontology_name} ontology from {url}")
            # Only a complete download replaces the cached file
            partial_file = cache_file.with_suffix(".part")
            try:
                urlretrieve(url, partial_file)
                partial_file.replace(cache_file)
                logger.info(f"Downloaded {ontology_name} to {cache_file}")
            except URLError as e:
                partial_file.unlink(missing_ok=True)
                if cache_file.exists():
                    logger.warning(f"Download failed, using cached file: {e}")
                else:
                    raise RuntimeError(f"Failed to download {ontology_name}: {e}") from e

        ontology = self.load(cache_file)
        self._loaded_ontologies[ontology_name] = ontology
        return ontology


# =============================================================================
# Factory Function
# =============================================================================
def create_ontology_loader(
    config: Optional[OntologyConfig] = None,
    cache_dir: Optional[Path] = None,
) -> OntologyLoader:
    """
    Factory: create an ontology loader

    Args:
        config: parser / builder settings
        cache_dir: download cache directory

    Returns:
        OntologyLoader instance
    """
    return OntologyLoader(config, cache_dir)


__all__ = [
    "NO_ERRORS_MESSAGE",
    "ParsedOntology",
    "format_diagnostics",
    "JsonGraphParser",
    "OntologyLoader",
    "create_ontology_loader",
]
