"""Tests for configuration loading and schema parsing."""

import json
from pathlib import Path

import pytest
from vcf2rdf.config import load_config, parse_config
from vcf2rdf.config.schemas import ConversionConfig, SequenceConfig
from vcf2rdf.errors import InvalidConfig, IoFailure

YAML_DOCUMENT = """
base: http://example.org/variation
namespaces:
  ex: http://example.org/
info: [DP, AF]
reference:
  1:
    name: chr1
    reference: http://identifiers.org/hco/1/GRCh38
  2: null
subject: normalized-location
normalize: false
logging:
  level: INFO
"""


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(YAML_DOCUMENT, encoding="utf-8")

    document = load_config(path)

    assert document["base"] == "http://example.org/variation"
    assert document["info"] == ["DP", "AF"]


def test_load_json_config(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"info": ["DP"]}), encoding="utf-8")

    assert load_config(path) == {"info": ["DP"]}


def test_load_empty_config_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == {}


def test_load_missing_config(tmp_path: Path) -> None:
    with pytest.raises(IoFailure):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("name", "content"),
    [
        ("config.toml", "base = 'x'"),
        ("config.yaml", "base: [unclosed"),
        ("config.yaml", "- just\n- a list\n"),
    ],
)
def test_load_invalid_config(tmp_path: Path, name: str, content: str) -> None:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")

    with pytest.raises(InvalidConfig):
        load_config(path)


def test_parse_config_builds_typed_schema(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(YAML_DOCUMENT, encoding="utf-8")

    config = parse_config(load_config(path))

    assert config.namespaces == {"ex": "http://example.org/"}
    assert config.reference["1"] == SequenceConfig(
        name="chr1", reference="http://identifiers.org/hco/1/GRCh38"
    )
    assert config.reference["2"] is None
    assert config.subject == "normalized-location"
    assert config.normalize is False
    assert config.best_effort is False
    assert config.logging.level == "INFO"


def test_parse_config_defaults() -> None:
    config = parse_config(None)

    assert config == ConversionConfig()
    assert config.info is None
    assert config.reference == {}


@pytest.mark.parametrize(
    "document",
    [
        {"info": "DP"},
        {"normalize": "yes"},
        {"subject": "by-magic"},
        {"unknown": 1},
        {"reference": {"1": {"name": "chr1", "extra": True}}},
    ],
)
def test_parse_config_rejects_wrong_types(document: dict[str, object]) -> None:
    with pytest.raises(InvalidConfig):
        parse_config(document)


def test_parse_config_rejects_non_mapping() -> None:
    with pytest.raises(InvalidConfig):
        parse_config(["base"])  # type: ignore[arg-type]
