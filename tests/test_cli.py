"""Tests for the command-line interface."""

from collections.abc import Callable, Iterator
import json
import logging
from pathlib import Path

import pytest
from rdflib import Graph
from rdflib.namespace import RDF
import yaml
from vcf2rdf.cli import create_parser, main
from vcf2rdf.rdf_generation.namespaces import GVO


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    package_logger = logging.getLogger("vcf2rdf")
    handlers, level, package_level = root.handlers[:], root.level, package_logger.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    package_logger.setLevel(package_level)


@pytest.fixture
def vcf(write_vcf: Callable[..., Path], make_line: Callable[..., str]) -> Path:
    return write_vcf(
        [
            make_line(identifier="rs1", info="DP=30"),
            make_line(chrom="2", pos=200, identifier="rs2", alt="G,C"),
        ]
    )


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_parser_defaults() -> None:
    args = create_parser().parse_args(["convert", "input.vcf"])

    assert args.format == "nt"
    assert args.subject is None
    assert args.input_type == "auto"
    assert not args.rehearsal


def test_convert_to_stdout(vcf: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["convert", str(vcf)]) == 0

    graph = Graph().parse(data=capsys.readouterr().out, format="nt")
    assert len(set(graph.subjects(RDF.type, GVO.SNV))) == 3


def test_convert_with_config_file(
    vcf: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        yaml.safe_dump({"base": "http://example.org/variation", "subject": "by-id"}),
        encoding="utf-8",
    )
    output = tmp_path / "out" / "result.ttl"

    code = main(["convert", str(vcf), "-c", str(config), "-f", "turtle", "-o", str(output)])

    assert code == 0
    assert capsys.readouterr().out == ""
    graph = Graph().parse(output, format="turtle")
    assert {str(s) for s in graph.subjects(RDF.type, GVO.SNV)} == {
        "http://example.org/variation/rs1",
        "http://example.org/variation/rs2_1",
        "http://example.org/variation/rs2_2",
    }


def test_convert_rehearsal(vcf: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["convert", "--rehearsal", str(vcf)]) == 0

    graph = Graph().parse(data=capsys.readouterr().out, format="nt")
    assert len(set(graph.subjects(RDF.type, GVO.SNV))) == 1


def test_convert_reports_configuration_errors(
    vcf: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["convert", "--subject", "by-location", str(vcf)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: ")


def test_convert_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["convert", str(tmp_path / "missing.vcf")]) == 1
    assert "Error: " in capsys.readouterr().err


def test_convert_malformed_record(
    write_vcf: Callable[..., Path],
    make_line: Callable[..., str],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_vcf([make_line(pos="x"), make_line(pos=200)])

    assert main(["convert", str(path)]) == 1
    capsys.readouterr()

    assert main(["convert", "--best-effort", str(path)]) == 0
    assert "_:v1" in capsys.readouterr().out


def test_stat_count(vcf: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["stat", "--count", str(vcf)]) == 0
    assert capsys.readouterr().out.strip() == "2"


def test_stat_report(vcf: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["stat", str(vcf)]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["records_seen"] == 2
    assert report["alleles_seen"] == 3
    assert report["contigs"] == {"1": 1, "2": 1}


def test_generate_config(vcf: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["generate-config", "--assembly", "GRCh38", str(vcf)]) == 0

    document = yaml.safe_load(capsys.readouterr().out)
    assert document["assembly"] == "GRCh38"
    assert document["info"] == ["DP", "AF", "AD", "DB", "GL", "NOTE"]
    assert document["reference"]["2"]["reference"] == (
        "http://identifiers.org/hco/2/GRCh38"
    )


def test_generate_config_unknown_assembly(
    vcf: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["generate-config", "--assembly", "nope", str(vcf)]) == 1
    assert "Error: " in capsys.readouterr().err
