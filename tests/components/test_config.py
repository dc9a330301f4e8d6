"""
Configuration Tests

Tests for settings loading from the environment and props files.
"""

import pytest
import yaml

from component_check import ComponentSettings, ComponentShape, ConfigurationError
from component_check.config import load_props_file


class TestComponentSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        settings = ComponentSettings()

        assert settings.module is None
        assert settings.search_paths == ["."]
        assert settings.props == {}
        assert settings.shape is None
        assert settings.hook_timeout == 60.0
        assert settings.probe_prefix == "hello-component"

    @pytest.mark.parametrize("variable", ["componentModule", "COMPONENT_MODULE"])
    def test_module_from_environment(self, monkeypatch, variable):
        monkeypatch.setenv(variable, "build/hello-component")

        assert ComponentSettings().require_module() == "build/hello-component"

    def test_bare_module_variable_ignored(self, monkeypatch):
        monkeypatch.setenv("MODULE", "build/hello-component")

        assert ComponentSettings().module is None

    def test_module_by_keyword(self):
        assert ComponentSettings(module="hello-component").module == "hello-component"

    def test_missing_module(self):
        with pytest.raises(ConfigurationError, match="environment variable: componentModule"):
            ComponentSettings().require_module()

    def test_complex_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("COMPONENT_PROPS", '{"audience": "world", "timeout": 60}')
        monkeypatch.setenv("COMPONENT_SEARCH_PATHS", '["build", "plugins"]')
        monkeypatch.setenv("COMPONENT_SHAPE", "class")
        monkeypatch.setenv("COMPONENT_HOOK_TIMEOUT", "8")

        settings = ComponentSettings()

        assert settings.props == {"audience": "world", "timeout": 60}
        assert settings.search_paths == ["build", "plugins"]
        assert settings.shape is ComponentShape.CLASS
        assert settings.hook_timeout == 8.0

    def test_non_positive_timeout_disables_bound(self):
        assert ComponentSettings(hook_timeout=0).hook_timeout is None

    def test_empty_probe_prefix_disables_probe(self):
        assert ComponentSettings(probe_prefix="").probe_prefix is None


class TestPropsFile:
    """Test YAML props files."""

    def test_props_file_overlaid_by_props(self, tmp_path):
        props_file = tmp_path / "props.yaml"
        props_file.write_text(yaml.safe_dump({"audience": "world", "timeout": 60}))

        settings = ComponentSettings(props_file=props_file, props={"audience": "team"})

        assert settings.resolved_props() == {"audience": "team", "timeout": 60}

    def test_empty_props_file(self, tmp_path):
        props_file = tmp_path / "empty.yaml"
        props_file.write_text("")

        assert load_props_file(props_file) == {}

    def test_props_file_must_be_mapping(self, tmp_path):
        props_file = tmp_path / "list.yaml"
        props_file.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="expected a mapping"):
            load_props_file(props_file)

    def test_missing_props_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="props file"):
            load_props_file(tmp_path / "missing.yaml")
