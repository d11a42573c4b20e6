"""
ontograph Configuration Module
==============================
Centralized configuration for ingestion and graph construction.

Module: ontograph/config/__init__.py

Components (re-exported):
    From settings:
        - OntologyConfig: parser / builder / loader settings
        - get_ontology_config: Get global config instance
        - set_ontology_config: Replace global config instance
        - reset_ontology_config: Drop global config instance (tests)

Dependencies:
    - yaml: Configuration files

Usage:
    from ontograph.config import OntologyConfig
    config = OntologyConfig.load_from_yaml("configs/ontology.yaml")
    config.save_to_yaml("configs/current.yaml")
"""

from ontograph.config.settings import (
    DEFAULT_ONTOLOGY_URLS,
    OntologyConfig,
    get_ontology_config,
    reset_ontology_config,
    set_ontology_config,
)


__all__ = [
    "DEFAULT_ONTOLOGY_URLS",
    "OntologyConfig",
    "get_ontology_config",
    "set_ontology_config",
    "reset_ontology_config",
]
