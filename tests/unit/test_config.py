"""
Unit Tests for Ontology Configuration
=====================================
"""
import logging
from pathlib import Path

import pytest
import yaml

from ontograph.config import (
    DEFAULT_ONTOLOGY_URLS,
    OntologyConfig,
    get_ontology_config,
    reset_ontology_config,
    set_ontology_config,
)


@pytest.fixture(autouse=True)
def clean_global_config():
    reset_ontology_config()
    yield
    reset_ontology_config()


# =============================================================================
# Test Defaults
# =============================================================================
class TestOntologyConfigDefaults:
    """Default values"""

    def test_defaults(self):
        config = OntologyConfig()
        assert config.synthesize_inverse_edges is True
        assert config.lenient_sources is False
        assert config.log_diagnostics is True
        assert config.json_dump_indent == 2
        assert config.ontology_urls == DEFAULT_ONTOLOGY_URLS

    def test_urls_not_shared(self):
        config = OntologyConfig()
        config.ontology_urls["go"] = "http://purl.obolibrary.org/obo/go.json"
        assert "go" not in OntologyConfig().ontology_urls

    def test_resolved_cache_dir(self, tmp_path: Path):
        assert OntologyConfig().resolved_cache_dir == Path.home() / ".ontograph" / "ontologies"
        assert OntologyConfig(cache_dir=str(tmp_path)).resolved_cache_dir == tmp_path


# =============================================================================
# Test Conversion
# =============================================================================
class TestOntologyConfigConversion:
    """to_dict / from_dict"""

    def test_round_trip(self):
        config = OntologyConfig(lenient_sources=True, json_dump_indent=0)
        assert OntologyConfig.from_dict(config.to_dict()) == config

    def test_empty(self):
        assert OntologyConfig.from_dict(None) == OntologyConfig()
        assert OntologyConfig.from_dict({}) == OntologyConfig()

    def test_unknown_key_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ontograph.config.settings"):
            config = OntologyConfig.from_dict({"edge_leniency": True, "lenient_sources": True})
        assert config.lenient_sources is True
        assert "edge_leniency" in caplog.text

    def test_urls_merged_with_defaults(self):
        config = OntologyConfig.from_dict({"ontology_urls": {"go": "http://purl.obolibrary.org/obo/go.json"}})
        assert set(config.ontology_urls) == {"hp", "mondo", "go"}


# =============================================================================
# Test YAML Persistence
# =============================================================================
class TestOntologyConfigYaml:
    """save_to_yaml / load_from_yaml"""

    def test_save_and_load(self, tmp_path: Path):
        path = tmp_path / "configs" / "ontology.yaml"
        config = OntologyConfig(synthesize_inverse_edges=False, cache_dir="/tmp/onto")
        config.save_to_yaml(path)

        with open(path) as f:
            raw = yaml.safe_load(f)
        assert raw["ontology"]["synthesize_inverse_edges"] is False

        assert OntologyConfig.load_from_yaml(path) == config

    def test_load_flat_mapping(self, tmp_path: Path):
        path = tmp_path / "flat.yaml"
        path.write_text("lenient_sources: true\nlog_diagnostics: false\n")
        config = OntologyConfig.load_from_yaml(path)
        assert config.lenient_sources is True
        assert config.log_diagnostics is False

    def test_load_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert OntologyConfig.load_from_yaml(path) == OntologyConfig()

    @pytest.mark.parametrize("text", ["- a\n- b\n", "ontology\n", "ontology:\n  - lenient_sources\n"])
    def test_load_non_mapping(self, tmp_path: Path, text):
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(ValueError, match="not a mapping"):
            OntologyConfig.load_from_yaml(path)

    def test_load_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            OntologyConfig.load_from_yaml(tmp_path / "absent.yaml")


# =============================================================================
# Test Global Instance
# =============================================================================
class TestGlobalConfig:
    """Process-wide configuration"""

    def test_singleton(self):
        assert get_ontology_config() is get_ontology_config()

    def test_set_and_reset(self):
        custom = OntologyConfig(lenient_sources=True)
        set_ontology_config(custom)
        assert get_ontology_config() is custom

        reset_ontology_config()
        assert get_ontology_config() is not custom
        assert get_ontology_config().lenient_sources is False
