"""Canonical FALDO locations for variant alleles."""

from __future__ import annotations

from ..config.models import MISSING_VALUE, FaldoRegion, VariantType


def trim_alleles(position: int, reference: str, alternate: str) -> tuple[int, str, str]:
    """Remove bases shared by both alleles.

    Alleles are compared and returned upper-cased. Shared trailing bases are
    removed first, then shared leading bases, moving the position right by one
    per leading base removed. Either allele may end up empty.
    """
    reference, alternate = reference.upper(), alternate.upper()
    while reference and alternate and reference[-1] == alternate[-1]:
        reference = reference[:-1]
        alternate = alternate[:-1]

    shared = 0
    for ref_base, alt_base in zip(reference, alternate, strict=False):
        if ref_base != alt_base:
            break
        shared += 1

    return position + shared, reference[shared:], alternate[shared:]


def classify(reference: str, alternate: str) -> VariantType:
    """Classify a pair of trimmed alleles."""
    match (len(reference), len(alternate)):
        case (0, 0):
            raise ValueError("Reference and alternate alleles are identical")
        case (1, 1):
            return VariantType.SNV
        case (0, _):
            return VariantType.INSERTION
        case (_, 0):
            return VariantType.DELETION
        case (r, a) if r == a:
            return VariantType.MNV
        case _:
            return VariantType.INDEL


def normalize(
    position: int,
    reference: str,
    alternate: str,
    enabled: bool = True,
    sequence: str | None = None,
) -> FaldoRegion:
    """Compute the FALDO region of one alternate allele.

    With ``enabled`` the alleles are trimmed and the region follows the
    normalized conventions: an insertion sits between ``begin`` and ``end``
    (``end == begin + 1``), deletions and indels span ``begin..end`` inclusive,
    SNVs sit on a single position. Without it the region is taken verbatim from
    the 1-based ``position`` and the reference allele length.

    ``sequence`` is the reference-sequence IRI the region is placed on.

    Raises:
        ValueError: If both alleles are identical
    """
    reference = "" if reference == MISSING_VALUE else reference
    alternate = "" if alternate == MISSING_VALUE else alternate

    trimmed_position, trimmed_ref, trimmed_alt = trim_alleles(
        position, reference, alternate
    )
    variant_type = classify(trimmed_ref, trimmed_alt)

    if not enabled:
        return FaldoRegion(
            begin=position,
            end=position + max(len(reference), 1) - 1,
            variant_type=variant_type,
            position=position,
            reference_allele=reference,
            alternate_allele=alternate,
            normalized=False,
            reference=sequence,
        )

    if variant_type is VariantType.INSERTION:
        begin, end = trimmed_position - 1, trimmed_position
    else:
        begin = trimmed_position
        end = trimmed_position + len(trimmed_ref) - 1

    return FaldoRegion(
        begin=begin,
        end=end,
        variant_type=variant_type,
        position=trimmed_position,
        reference_allele=trimmed_ref,
        alternate_allele=trimmed_alt,
        normalized=True,
        reference=sequence,
    )


def renormalize(region: FaldoRegion) -> FaldoRegion:
    """Normalize a region again from its own coordinates."""
    return normalize(
        region.position,
        region.reference_allele,
        region.alternate_allele,
        region.normalized,
        region.reference,
    )
