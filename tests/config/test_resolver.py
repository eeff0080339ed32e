"""Tests for building the RunConfig of a run."""

import pytest
from vcf2rdf.config.models import HeaderModel, SequenceMapping, SubjectStrategy
from vcf2rdf.config.resolver import build_run, normalize_base
from vcf2rdf.errors import InvalidConfig, UnresolvedNamespace
from vcf2rdf.processors.header import HeaderParser
from vcf2rdf.rdf_generation.namespaces import BUILTIN_NAMESPACES

HCO_1 = "http://identifiers.org/hco/1/GRCh38"


def test_defaults_without_configuration(header: HeaderModel) -> None:
    run = build_run(header)

    assert run.info_keys == header.info_keys
    assert dict(run.references) == {}
    assert run.subject is SubjectStrategy.BLANK_NODE
    assert run.normalize is True
    assert run.best_effort is False
    assert run.base is None
    assert dict(run.namespaces) == dict(BUILTIN_NAMESPACES)


def test_info_allow_list_keeps_header_order_and_drops_unknown(
    header: HeaderModel,
) -> None:
    run = build_run(header, {"info": ["NOTE", "DP", "MISSING"]})

    assert run.info_keys == ("DP", "NOTE")


def test_reference_entries_for_undeclared_contigs_are_ignored(
    header: HeaderModel,
) -> None:
    run = build_run(
        header,
        {
            "reference": {
                "1": {"name": "chr1", "reference": HCO_1},
                "X": {"name": "chrX", "reference": "http://example.org/X"},
            }
        },
    )

    assert dict(run.references) == {
        "1": SequenceMapping(name="chr1", reference=HCO_1)
    }
    assert run.reference_for("1") == HCO_1
    assert run.reference_for("2") is None


def test_assembly_fills_references_and_explicit_entries_win() -> None:
    header = HeaderParser().parse(
        ["##contig=<ID=chr1,length=248956422>", "##contig=<ID=chr2,length=242193529>"]
    )

    run = build_run(
        header,
        {
            "assembly": "GRCh38",
            "reference": {
                "chr2": {"name": "second"},
            },
        },
    )

    assert run.references["chr1"] == SequenceMapping(name="1", reference=HCO_1)
    assert run.references["chr2"] == SequenceMapping(
        name="second", reference="http://identifiers.org/hco/2/GRCh38"
    )


def test_null_reference_entry_removes_assembly_default() -> None:
    header = HeaderParser().parse(["##contig=<ID=1,length=248956422>"])

    run = build_run(header, {"assembly": "GRCh38", "reference": {"1": None}})

    assert dict(run.references) == {}


def test_unknown_assembly_is_invalid(header: HeaderModel) -> None:
    with pytest.raises(InvalidConfig, match="Unknown assembly"):
        build_run(header, {"assembly": "GRCz11"})


def test_reference_curies_are_expanded(header: HeaderModel) -> None:
    run = build_run(
        header,
        {
            "namespaces": {"ref": "http://example.org/sequence/"},
            "reference": {"1": {"reference": "ref:chr1"}},
        },
    )

    assert run.reference_for("1") == "http://example.org/sequence/chr1"


def test_reference_with_undeclared_prefix_fails(header: HeaderModel) -> None:
    with pytest.raises(UnresolvedNamespace):
        build_run(header, {"reference": {"1": {"reference": "nope:chr1"}}})


def test_overrides_take_precedence(header: HeaderModel) -> None:
    run = build_run(
        header,
        {
            "base": "http://example.org/v",
            "subject": "by-id",
            "normalize": True,
            "best_effort": False,
        },
        subject="normalized-location",
        normalize=False,
        best_effort=True,
    )

    assert run.subject is SubjectStrategy.NORMALIZED_LOCATION
    assert run.normalize is False
    assert run.best_effort is True


def test_by_reference_without_any_mapping_is_invalid(header: HeaderModel) -> None:
    with pytest.raises(InvalidConfig, match="reference sequence"):
        build_run(header, subject="by-reference")


def test_location_strategies_need_a_base(header: HeaderModel) -> None:
    with pytest.raises(InvalidConfig, match="base IRI"):
        build_run(header, subject="by-location")


@pytest.mark.parametrize("subject", ["by-id", "normalized-location"])
def test_relative_subjects_need_a_base(header: HeaderModel, subject: str) -> None:
    with pytest.raises(InvalidConfig, match="base IRI"):
        build_run(header, subject=subject)


def test_reference_iris_with_a_fragment_are_invalid(header: HeaderModel) -> None:
    document = {"reference": {"1": {"reference": "http://example.org/seq#chr1"}}}

    with pytest.raises(InvalidConfig, match="fragment"):
        build_run(header, document, subject="by-reference")


def test_unknown_strategy_is_invalid(header: HeaderModel) -> None:
    with pytest.raises(InvalidConfig, match="Unknown subject strategy"):
        build_run(header, subject="random")


@pytest.mark.parametrize(
    "namespaces",
    [
        {"ex": "not-an-iri"},
        {"1bad": "http://example.org/"},
        {"bad prefix": "http://example.org/"},
    ],
)
def test_invalid_namespaces(header: HeaderModel, namespaces: dict[str, str]) -> None:
    with pytest.raises(InvalidConfig):
        build_run(header, {"namespaces": namespaces})


def test_user_namespaces_extend_builtins(header: HeaderModel) -> None:
    run = build_run(header, {"namespaces": {"ex": "http://example.org/"}})

    assert run.namespaces["ex"] == "http://example.org/"
    assert run.namespaces["faldo"] == BUILTIN_NAMESPACES["faldo"]


@pytest.mark.parametrize(
    ("base", "expected"),
    [
        ("http://example.org/v", "http://example.org/v/"),
        ("http://example.org/v/", "http://example.org/v/"),
        ("http://example.org/v#", "http://example.org/v#"),
        (None, None),
    ],
)
def test_normalize_base(base: str | None, expected: str | None) -> None:
    assert normalize_base(base) == expected


def test_relative_base_is_invalid() -> None:
    with pytest.raises(InvalidConfig):
        normalize_base("variation/")


def test_malformed_document_is_invalid(header: HeaderModel) -> None:
    with pytest.raises(InvalidConfig):
        build_run(header, {"info": 3})
