"""Reference assembly tables used to map contigs to reference sequences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class AssemblySequence:
    """One chromosome of a reference assembly and its aliases."""

    name: str
    genbank: str
    refseq: str
    ucsc_name: str
    reference: str

    def matches(self, contig: str) -> bool:
        return contig in (self.name, self.genbank, self.refseq, self.ucsc_name)


@dataclass(frozen=True)
class Assembly:
    """A reference assembly release."""

    name: str
    genbank: str
    refseq: str
    sequences: tuple[AssemblySequence, ...]

    def find_sequence(self, contig: str) -> AssemblySequence | None:
        for sequence in self.sequences:
            if sequence.matches(contig):
                return sequence
        return None


def _hco(name: str, assembly: str) -> str:
    return f"http://identifiers.org/hco/{name}/{assembly}"


def _refseq(accession: str) -> str:
    return f"https://identifiers.org/refseq/{accession}"


def _human(
    assembly: str, rows: list[tuple[str, str, str]]
) -> tuple[AssemblySequence, ...]:
    return tuple(
        AssemblySequence(
            name=name,
            genbank=genbank,
            refseq=refseq,
            ucsc_name="chrM" if name == "MT" else f"chr{name}",
            reference=_hco(name, assembly),
        )
        for name, genbank, refseq in rows
    )


def _mouse(rows: list[tuple[str, str, str]]) -> tuple[AssemblySequence, ...]:
    return tuple(
        AssemblySequence(
            name=name,
            genbank=genbank,
            refseq=refseq,
            ucsc_name=f"chr{name}",
            reference=_refseq(refseq),
        )
        for name, genbank, refseq in rows
    )


GRCH37: Final = Assembly(
    name="GRCh37",
    genbank="GCA_000001405.14",
    refseq="GCF_000001405.25",
    sequences=_human(
        "GRCh37",
        [
            ("1", "CM000663.1", "NC_000001.10"),
            ("2", "CM000664.1", "NC_000002.11"),
            ("3", "CM000665.1", "NC_000003.11"),
            ("4", "CM000666.1", "NC_000004.11"),
            ("5", "CM000667.1", "NC_000005.9"),
            ("6", "CM000668.1", "NC_000006.11"),
            ("7", "CM000669.1", "NC_000007.13"),
            ("8", "CM000670.1", "NC_000008.10"),
            ("9", "CM000671.1", "NC_000009.11"),
            ("10", "CM000672.1", "NC_000010.10"),
            ("11", "CM000673.1", "NC_000011.9"),
            ("12", "CM000674.1", "NC_000012.11"),
            ("13", "CM000675.1", "NC_000013.10"),
            ("14", "CM000676.1", "NC_000014.8"),
            ("15", "CM000677.1", "NC_000015.9"),
            ("16", "CM000678.1", "NC_000016.9"),
            ("17", "CM000679.1", "NC_000017.10"),
            ("18", "CM000680.1", "NC_000018.9"),
            ("19", "CM000681.1", "NC_000019.9"),
            ("20", "CM000682.1", "NC_000020.10"),
            ("21", "CM000683.1", "NC_000021.8"),
            ("22", "CM000684.1", "NC_000022.10"),
            ("X", "CM000685.1", "NC_000023.10"),
            ("Y", "CM000686.1", "NC_000024.9"),
            ("MT", "J01415.2", "NC_012920.1"),
        ],
    ),
)

GRCH38: Final = Assembly(
    name="GRCh38",
    genbank="GCA_000001405.28",
    refseq="GCF_000001405.39",
    sequences=_human(
        "GRCh38",
        [
            ("1", "CM000663.2", "NC_000001.11"),
            ("2", "CM000664.2", "NC_000002.12"),
            ("3", "CM000665.2", "NC_000003.12"),
            ("4", "CM000666.2", "NC_000004.12"),
            ("5", "CM000667.2", "NC_000005.10"),
            ("6", "CM000668.2", "NC_000006.12"),
            ("7", "CM000669.2", "NC_000007.14"),
            ("8", "CM000670.2", "NC_000008.11"),
            ("9", "CM000671.2", "NC_000009.12"),
            ("10", "CM000672.2", "NC_000010.11"),
            ("11", "CM000673.2", "NC_000011.10"),
            ("12", "CM000674.2", "NC_000012.12"),
            ("13", "CM000675.2", "NC_000013.11"),
            ("14", "CM000676.2", "NC_000014.9"),
            ("15", "CM000677.2", "NC_000015.10"),
            ("16", "CM000678.2", "NC_000016.10"),
            ("17", "CM000679.2", "NC_000017.11"),
            ("18", "CM000680.2", "NC_000018.10"),
            ("19", "CM000681.2", "NC_000019.10"),
            ("20", "CM000682.2", "NC_000020.11"),
            ("21", "CM000683.2", "NC_000021.9"),
            ("22", "CM000684.2", "NC_000022.11"),
            ("X", "CM000685.2", "NC_000023.11"),
            ("Y", "CM000686.2", "NC_000024.10"),
            ("MT", "J01415.2", "NC_012920.1"),
        ],
    ),
)

GRCM38: Final = Assembly(
    name="GRCm38",
    genbank="GCA_000001635.2",
    refseq="GCF_000001635.20",
    sequences=_mouse(
        [
            ("1", "CM000994.2", "NC_000067.6"),
            ("2", "CM000995.2", "NC_000068.7"),
            ("3", "CM000996.2", "NC_000069.6"),
            ("4", "CM000997.2", "NC_000070.6"),
            ("5", "CM000998.2", "NC_000071.6"),
            ("6", "CM000999.2", "NC_000072.6"),
            ("7", "CM001000.2", "NC_000073.6"),
            ("8", "CM001001.2", "NC_000074.6"),
            ("9", "CM001002.2", "NC_000075.6"),
            ("10", "CM001003.2", "NC_000076.6"),
            ("11", "CM001004.2", "NC_000077.6"),
            ("12", "CM001005.2", "NC_000078.6"),
            ("13", "CM001006.2", "NC_000079.6"),
            ("14", "CM001007.2", "NC_000080.6"),
            ("15", "CM001008.2", "NC_000081.6"),
            ("16", "CM001009.2", "NC_000082.6"),
            ("17", "CM001010.2", "NC_000083.6"),
            ("18", "CM001011.2", "NC_000084.6"),
            ("19", "CM001012.2", "NC_000085.6"),
            ("X", "CM001013.2", "NC_000086.7"),
            ("Y", "CM001014.2", "NC_000087.7"),
        ]
    ),
)

GRCM39: Final = Assembly(
    name="GRCm39",
    genbank="GCA_000001635.9",
    refseq="GCF_000001635.27",
    sequences=_mouse(
        [
            ("1", "CM000994.3", "NC_000067.7"),
            ("2", "CM000995.3", "NC_000068.8"),
            ("3", "CM000996.3", "NC_000069.7"),
            ("4", "CM000997.3", "NC_000070.7"),
            ("5", "CM000998.3", "NC_000071.7"),
            ("6", "CM000999.3", "NC_000072.7"),
            ("7", "CM001000.3", "NC_000073.7"),
            ("8", "CM001001.3", "NC_000074.7"),
            ("9", "CM001002.3", "NC_000075.7"),
            ("10", "CM001003.3", "NC_000076.7"),
            ("11", "CM001004.3", "NC_000077.7"),
            ("12", "CM001005.3", "NC_000078.7"),
            ("13", "CM001006.3", "NC_000079.7"),
            ("14", "CM001007.3", "NC_000080.7"),
            ("15", "CM001008.3", "NC_000081.7"),
            ("16", "CM001009.3", "NC_000082.7"),
            ("17", "CM001010.3", "NC_000083.7"),
            ("18", "CM001011.3", "NC_000084.7"),
            ("19", "CM001012.3", "NC_000085.7"),
            ("X", "CM001013.3", "NC_000086.8"),
            ("Y", "CM001014.3", "NC_000087.8"),
        ]
    ),
)

ASSEMBLIES: Final[dict[str, Assembly]] = {
    assembly.name.lower(): assembly for assembly in (GRCH37, GRCH38, GRCM38, GRCM39)
}

# Common aliases seen in ##contig assembly tags.
_ALIASES: Final[dict[str, str]] = {
    "hg19": "grch37",
    "b37": "grch37",
    "hg38": "grch38",
    "mm10": "grcm38",
    "mm39": "grcm39",
}


def find_assembly(name: str | None) -> Assembly | None:
    """Look up an assembly by name, case-insensitively."""
    if not name:
        return None

    key = name.strip().lower().split(".p")[0]
    key = _ALIASES.get(key, key)
    return ASSEMBLIES.get(key)
