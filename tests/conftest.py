"""Shared test fixtures for the VCF2RDF tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from vcf2rdf.config.models import HeaderModel, VariantRecord
from vcf2rdf.processors.header import HeaderParser
from vcf2rdf.processors.record import RecordDecoder

HEADER_LINES = [
    "##fileformat=VCFv4.2",
    "##contig=<ID=1,length=1000>",
    "##contig=<ID=2,length=1000>",
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">',
    '##INFO=<ID=AF,Number=A,Type=Float,Description="Allele frequency">',
    '##INFO=<ID=AD,Number=R,Type=Integer,Description="Allelic depths">',
    '##INFO=<ID=DB,Number=0,Type=Flag,Description="dbSNP membership">',
    '##INFO=<ID=GL,Number=G,Type=Float,Description="Genotype likelihoods">',
    '##INFO=<ID=NOTE,Number=.,Type=String,Description="Free text, with a comma">',
    '##FILTER=<ID=q10,Description="Quality below 10">',
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
]


def data_line(
    chrom: str = "1",
    pos: int | str = 100,
    identifier: str = ".",
    ref: str = "A",
    alt: str = "T",
    qual: str = ".",
    filters: str = ".",
    info: str = ".",
) -> str:
    """Tab-separated data line with the eight fixed columns."""
    return "\t".join([chrom, str(pos), identifier, ref, alt, qual, filters, info])


@pytest.fixture
def header_lines() -> list[str]:
    return list(HEADER_LINES)


@pytest.fixture
def header(header_lines: list[str]) -> HeaderModel:
    """HeaderModel parsed from the shared header lines."""
    return HeaderParser().parse(header_lines)


@pytest.fixture
def decode(header: HeaderModel) -> Callable[..., VariantRecord]:
    """Decode a data line built from keyword columns."""
    decoder = RecordDecoder(header)

    def _decode(**columns: object) -> VariantRecord:
        return decoder.decode(data_line(**columns), line_number=1)  # type: ignore[arg-type]

    return _decode


@pytest.fixture
def write_vcf(tmp_path: Path) -> Callable[..., Path]:
    """Write a plain-text VCF made of the shared header and ``lines``."""

    def _write(
        lines: list[str],
        name: str = "input.vcf",
        header: list[str] | None = None,
    ) -> Path:
        path = tmp_path / name
        content = (header if header is not None else HEADER_LINES) + lines
        path.write_text("\n".join(content) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_line() -> Callable[..., str]:
    return data_line
