"""
ontograph Ontology Configuration
================================
Settings shared by the JSON graph parser, the graph builder and the loader.

Module: ontograph/config/settings.py

Purpose:
    Provide one dataclass that:
    - Controls ingestion behaviour (inverse edge synthesis, diagnostics logging)
    - Controls build strictness (dangling edge sources)
    - Locates the download cache and known ontology release URLs
    - Persists to / loads from YAML files

Dependencies:
    - yaml: Configuration file I/O
    - pathlib: File path handling

Called by:
    - ontograph/ontology/loader.py (JsonGraphParser, OntologyLoader)
    - ontograph/ontology/builder.py (OntologyBuilder)

Version: 1.0.0
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)


DEFAULT_ONTOLOGY_URLS: Dict[str, str] = {
    "hp": "http://purl.obolibrary.org/obo/hp.json",
    "mondo": "http://purl.obolibrary.org/obo/mondo.json",
}


# =============================================================================
# Ontology Configuration
# =============================================================================
@dataclass
class OntologyConfig:
    """
    Ingestion and build settings

    Attributes:
        synthesize_inverse_edges: add an IS_A_INVERSE edge for every is-a edge
        lenient_sources: treat an edge whose source id is not a term as a
            diagnostic instead of a fatal GraphIntegrityError
        log_diagnostics: also emit every diagnostic through the logger
        json_dump_indent: indentation of the JSON fragment quoted in diagnostics
        cache_dir: download cache for known ontologies (default ~/.ontograph/ontologies)
        ontology_urls: release URL per known ontology name
    """
    synthesize_inverse_edges: bool = True
    lenient_sources: bool = False
    log_diagnostics: bool = True
    json_dump_indent: int = 2
    cache_dir: Optional[str] = None
    ontology_urls: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ONTOLOGY_URLS))

    @property
    def resolved_cache_dir(self) -> Path:
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return Path.home() / ".ontograph" / "ontologies"

    # =========================================================================
    # Conversion
    # =========================================================================
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "OntologyConfig":
        """Build from a mapping; unknown keys are ignored with a warning"""
        config = cls()
        if not data:
            return config

        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown ontology config key: {key}")
                continue
            if key == "ontology_urls":
                urls = dict(DEFAULT_ONTOLOGY_URLS)
                urls.update(value or {})
                value = urls
            setattr(config, key, value)

        return config

    # =========================================================================
    # Persistence
    # =========================================================================
    def save_to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to a YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump({"ontology": self.to_dict()}, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Ontology configuration saved to {path}")

    @classmethod
    def load_from_yaml(cls, path: Union[str, Path]) -> "OntologyConfig":
        """Load configuration from a YAML file (top-level `ontology:` section or flat)"""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if isinstance(data, dict) and "ontology" in data:
            data = data["ontology"] or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} is not a mapping")

        config = cls.from_dict(data)
        logger.info(f"Ontology configuration loaded from {path}")
        return config


# =============================================================================
# Global Instance
# =============================================================================
_default_config: Optional[OntologyConfig] = None


def get_ontology_config() -> OntologyConfig:
    """Get the process-wide ontology configuration"""
    global _default_config
    if _default_config is None:
        _default_config = OntologyConfig()
    return _default_config


def set_ontology_config(config: OntologyConfig) -> None:
    """Replace the process-wide ontology configuration"""
    global _default_config
    _default_config = config


def reset_ontology_config() -> None:
    """Reset the global configuration (for testing)"""
    global _default_config
    _default_config = None


__all__ = [
    "DEFAULT_ONTOLOGY_URLS",
    "OntologyConfig",
    "get_ontology_config",
    "set_ontology_config",
    "reset_ontology_config",
]
