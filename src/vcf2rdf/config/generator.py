"""Configuration template generation from a VCF header."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from ..errors import InvalidConfig
from ..utils.assembly import Assembly, find_assembly
from .models import HeaderModel

logger = logging.getLogger(__name__)

_COMMENTS = {
    "base": "Set base IRI if needed.",
    "namespaces": "Additional namespaces.",
    "info": "Remove unnecessary keys to convert.",
    "assembly": "Reference assembly used to fill the reference mapping.",
    "reference": (
        "Reference sequence of each contig. Records on contigs mapped to null\n"
        "# are skipped by the by-reference subject strategies."
    ),
}


def detect_assembly(header: HeaderModel) -> Assembly | None:
    """Assembly shared by every ``##contig`` assembly tag, if any."""
    tags = {contig.assembly for contig in header.contigs}
    if len(tags) != 1:
        return None
    return find_assembly(tags.pop())


def generate_config(header: HeaderModel, assembly: str | None = None) -> str:
    """Render a commented YAML configuration for ``header``.

    Args:
        header: Parsed header of the file to convert
        assembly: Assembly name; detected from contig tags when omitted

    Returns:
        str: YAML document accepted by ``load_config``

    Raises:
        InvalidConfig: If ``assembly`` is not a known assembly
    """
    if assembly is not None:
        selected = find_assembly(assembly)
        if selected is None:
            raise InvalidConfig(f"Unknown assembly {assembly!r}")
    else:
        selected = detect_assembly(header)

    reference: dict[str, Any] = {}
    unmapped = 0
    for contig in header.contigs:
        sequence = selected.find_sequence(contig.name) if selected else None
        if sequence is None:
            reference[contig.name] = None
            unmapped += 1
        else:
            reference[contig.name] = {
                "name": sequence.name,
                "reference": sequence.reference,
            }

    if selected and unmapped:
        logger.warning(
            f"{unmapped} contigs are not part of {selected.name} and are left unmapped"
        )

    document = {
        "base": None,
        "namespaces": None,
        "info": list(header.info_keys),
        "assembly": selected.name if selected else None,
        "reference": reference or None,
    }

    text = yaml.safe_dump(
        document, sort_keys=False, default_flow_style=False, allow_unicode=True
    )

    lines: list[str] = []
    for line in text.splitlines():
        key = line.split(":", 1)[0]
        if not line.startswith(" ") and key in _COMMENTS:
            if lines:
                lines.append("")
            lines.append(f"# {_COMMENTS[key]}")
        lines.append(line)

    return "\n".join(lines) + "\n"
