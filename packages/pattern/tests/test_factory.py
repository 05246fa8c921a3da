"""Tests for building patterns from configuration."""

import json

import pytest
import yaml

from typeknobs_common import NotFoundError
from typeknobs_config import CircularReferenceError, ConfigError
from typeknobs_pattern import (
    MatchMode,
    PatternFactory,
    PatternRegistry,
    create_default_registry,
    load_patterns,
)


@pytest.fixture
def factory():
    return PatternFactory()


@pytest.fixture
def pattern_config():
    """Definitions that refer to each other out of order."""
    return {
        "patterns": {
            "port": {
                "origin": "int",
                "source": r"\d+",
                "mode": "regex_convert",
                "validators": [{"type": "range", "min": 1, "max": 65535}],
            },
            "endpoint": {
                "origin": "int",
                "mode": "type_convert",
                "previous": "port_text",
            },
            "port_text": {
                "source": r"port=(\d+)",
                "mode": "REGEX_MATCH",
            },
            "not_port": {
                "accepts": ["@port"],
                "anti": True,
            },
        }
    }


class TestPatternFactory:
    """Test PatternFactory.create."""

    def test_regex_convert(self, factory):
        pattern = factory.create(origin="int", source=r"\d+", mode="regex_convert")

        assert pattern.mode is MatchMode.REGEX_CONVERT
        assert pattern.exec("12").value == 12

    def test_mode_defaults(self, factory):
        assert factory.create(source=r"\d+").mode is MatchMode.REGEX_MATCH
        assert factory.create().mode is MatchMode.KEEP

    def test_alias_and_anti(self, factory):
        pattern = factory.create(source=r"\d+", alias="digits", anti=True)

        assert str(pattern) == "!digits"
        assert pattern.exec("abc").success

    def test_accepts_types_and_references(self, factory):
        pattern = factory.create(origin="any", accepts=["int", "@bool"])

        assert pattern.exec(3).success
        assert pattern.exec("yes").success
        assert pattern.exec("maybe").failed

    def test_previous_from_registry(self, factory):
        pattern = factory.create(origin="int", mode="type_convert", previous="hex")
        assert pattern.exec("0x10").value == 16

    def test_validators(self, factory):
        pattern = factory.create(
            source=r"[a-z]+",
            validators=[
                {"type": "length", "min": 2, "max": 4},
                {"type": "choices", "values": ["ab", "abc", "xyz"]},
                {"type": "regex", "pattern": "a.*"},
            ],
        )

        assert pattern.exec("abc").success
        assert pattern.exec("xyz").failed
        assert pattern.exec("a").failed

    def test_every_regex_validator_applies(self, factory):
        """Test that each regex validator keeps its own expression."""
        pattern = factory.create(
            source=r"\w+",
            validators=[
                {"type": "regex", "pattern": "a.*"},
                {"type": "regex", "pattern": ".*z"},
            ],
        )

        assert pattern.exec("abz").success
        assert pattern.exec("bz").failed
        assert pattern.exec("ab").failed

    def test_invalid_regex_validator(self, factory):
        with pytest.raises(ConfigError) as exc_info:
            factory.create(source=r"\w+", validators=[{"type": "regex", "pattern": "a("}])
        assert exc_info.value.context["pattern"] == "a("

    @pytest.mark.parametrize("anti", ["false", "true", 0, 1, None])
    def test_anti_must_be_boolean(self, factory, anti):
        """Test that quoted or numeric flags are rejected rather than coerced."""
        with pytest.raises(ConfigError):
            factory.create(source=r"\d+", anti=anti)

    def test_anti_false(self, factory):
        pattern = factory.create(source=r"\d+", anti=False)

        assert not pattern.anti
        assert pattern.exec("12").success

    def test_unknown_validator_skipped(self, factory, caplog):
        pattern = factory.create(source=r"\d+", validators=[{"type": "checksum"}])

        assert pattern.validators == ()
        assert "Unknown validator type: checksum" in caplog.text

    def test_unknown_origin(self, factory):
        with pytest.raises(ConfigError) as exc_info:
            factory.create(origin="decimal")
        assert exc_info.value.context["origin"] == "decimal"

    def test_unknown_mode(self, factory):
        with pytest.raises(ConfigError):
            factory.create(mode="fuzzy")

    def test_unknown_reference(self, factory):
        with pytest.raises(NotFoundError):
            factory.create(previous="uuid")

    def test_non_string_accept(self, factory):
        with pytest.raises(ConfigError):
            factory.create(accepts=[3])


class TestLoadPatterns:
    """Test load_patterns from dicts and files."""

    def test_from_dict(self, pattern_config):
        registry = load_patterns(pattern_config)

        assert registry.get("port").exec("8080").value == 8080
        assert registry.get("port").exec("0").failed
        assert registry.get("endpoint").exec("port=80").value == 80
        assert registry.get("not_port").exec("abc").success
        assert registry.get("not_port").exec("80").failed

    def test_builtins_available(self, pattern_config):
        registry = load_patterns(pattern_config)
        assert registry.has("int")

    def test_name_is_default_alias(self, pattern_config):
        registry = load_patterns(pattern_config)

        assert str(registry.get("port")) == "port"
        assert str(registry.get("endpoint")) == "port_text -> endpoint"

    def test_into_existing_registry(self, pattern_config):
        registry = PatternRegistry("custom")
        load_patterns({"patterns": {"word": {"source": "[a-z]+"}}}, registry)

        assert registry.list_keys() == ["word"]

    def test_definitions_replace_registered(self):
        registry = create_default_registry()
        load_patterns({"patterns": {"int": {"source": r"\d{1,3}", "origin": "int", "mode": "regex_convert"}}}, registry)

        assert registry.get("int").exec("1234").failed

    def test_yaml_file(self, tmp_path, pattern_config):
        path = tmp_path / "patterns.yaml"
        path.write_text(yaml.safe_dump(pattern_config))

        registry = load_patterns(path)
        assert registry.get("endpoint").exec("port=443").value == 443

    def test_json_file(self, tmp_path, pattern_config):
        path = tmp_path / "patterns.json"
        path.write_text(json.dumps(pattern_config))

        registry = load_patterns(str(path))
        assert registry.get("port").exec("22").value == 22

    def test_empty_source(self):
        registry = load_patterns({})
        assert registry.count() == len(create_default_registry())

    def test_circular_reference(self):
        config = {
            "patterns": {
                "a": {"previous": "b"},
                "b": {"accepts": ["@c"]},
                "c": {"previous": "a"},
            }
        }

        with pytest.raises(CircularReferenceError) as exc_info:
            load_patterns(config)

        assert exc_info.value.context["cycle"] == ["a", "b", "c", "a"]

    def test_self_reference(self):
        with pytest.raises(CircularReferenceError):
            load_patterns({"patterns": {"a": {"previous": "a"}}})

    def test_dangling_reference(self):
        with pytest.raises(NotFoundError) as exc_info:
            load_patterns({"patterns": {"a": {"previous": "missing"}}})

        assert exc_info.value.context["reference"] == "missing"

    def test_patterns_must_be_mapping(self):
        with pytest.raises(ConfigError):
            load_patterns({"patterns": ["port"]})

    def test_definition_must_be_mapping(self):
        with pytest.raises(ConfigError):
            load_patterns({"patterns": {"port": r"\d+"}})
