"""
Delimited block extraction for policy-maps and route-policies.

A block starts at the line equal to the resolved declaration and ends at the
first later terminator line (``end-policy-map`` or ``end-policy``), both
included. Route-policies are processed before policy-maps.
"""

import logging
from dataclasses import dataclass, field

from oparser.document import Document, extract_stanza, is_stanza_end
from oparser.models.overlay import DiagnosticRecord, Diagnostics, ExtractedBlock, ObjectKind
from oparser.models.settings import ExtractionSettings

logger = logging.getLogger(__name__)

BLOCK_ORDER = (ObjectKind.ROUTE_POLICY, ObjectKind.POLICY_MAP)


@dataclass
class BlockExtraction:
    blocks: list[ExtractedBlock] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    separator: str = "!"

    def for_kind(self, kind: ObjectKind) -> list[ExtractedBlock]:
        return [b for b in self.blocks if b.kind is kind and b.text is not None]

    def render(self, kind: ObjectKind) -> str:
        """Artifact text for ``kind``: each block followed by the separator line."""
        return "".join(f"{block.text}\n{self.separator}\n" for block in self.for_kind(kind))


def extract_block(document: Document, declaration: str, kind: ObjectKind) -> str | None:
    """
    Extract the block opened by ``declaration``.

    Returns None when the declaration line is absent or never terminated.
    """
    anchor = declaration.rstrip()
    return extract_stanza(
        document,
        start=lambda line: line.rstrip() == anchor,
        end=lambda line: is_stanza_end(line, kind),
    )


def extract_blocks(
    document: Document,
    declarations: dict[ObjectKind, list[str]],
    settings: ExtractionSettings | None = None,
) -> BlockExtraction:
    """
    Extract every resolved declaration, route-policies first.

    Args:
        document: Configuration document
        declarations: Resolved declaration lines per kind, in resolver order
        settings: Output settings (separator line)

    Returns:
        BlockExtraction with one block per declaration and a diagnostic for
        each declaration whose block could not be delimited
    """
    settings = settings or ExtractionSettings()
    extraction = BlockExtraction(separator=settings.separator)

    for kind in BLOCK_ORDER:
        for declaration in declarations.get(kind, []):
            if not declaration.strip():
                continue
            logger.info(f"Extracting {kind.keyword[0]} block for {declaration.strip()} ...")
            text = extract_block(document, declaration, kind)
            extraction.blocks.append(ExtractedBlock(declaration, kind, text))
            if text is None:
                extraction.diagnostics.record(
                    kind, DiagnosticRecord(label=kind.label, declaration=declaration.strip())
                )
                logger.warning(f"No {kind.terminator}-terminated block for {declaration.strip()}")

    return extraction
