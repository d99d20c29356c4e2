"""
Overlay extraction pipeline.

Runs the stages in order: interface selection, cross-reference resolution,
then stanza and block extraction. Every stage returns its own records; the
pipeline only collects them into an ``ExtractionResult``.
"""

import logging
from dataclasses import dataclass, field

from oparser.document import Document
from oparser.extract.blocks import BlockExtraction, extract_blocks
from oparser.extract.resolve import Resolution, resolve_references
from oparser.extract.select import select_interfaces
from oparser.extract.stanzas import StanzaExtraction, extract_stanzas
from oparser.models.overlay import (
    APPLY_ORDER,
    DiagnosticRecord,
    InterfaceSpec,
    Level1Entry,
    ObjectKind,
    StanzaKind,
)
from oparser.models.settings import ExtractionSettings

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Everything one pipeline run produced."""

    spec: InterfaceSpec | None
    entries: list[Level1Entry]
    resolution: Resolution
    stanzas: StanzaExtraction
    blocks: BlockExtraction
    settings: ExtractionSettings = field(default_factory=ExtractionSettings)

    def artifact_text(self, kind: StanzaKind | ObjectKind) -> str:
        if isinstance(kind, ObjectKind):
            return self.blocks.render(kind)
        return self.stanzas.render(kind)

    def missing(self, kind: StanzaKind | ObjectKind) -> list[DiagnosticRecord]:
        if isinstance(kind, ObjectKind):
            return self.blocks.diagnostics.for_kind(kind)
        return self.stanzas.diagnostics.for_kind(kind)

    def counts(self) -> dict[str, tuple[int, int]]:
        """(extracted, missing) per artifact category, in apply order."""
        counts = {}
        for kind in APPLY_ORDER:
            if isinstance(kind, ObjectKind):
                extracted = len(self.blocks.for_kind(kind))
                missing = len(self.resolution.diagnostics.for_kind(kind)) + len(self.missing(kind))
            else:
                extracted = len(self.stanzas.for_kind(kind))
                missing = len(self.missing(kind))
            counts[kind.value] = (extracted, missing)
        return counts

    @property
    def has_entries(self) -> bool:
        return bool(self.entries)


def extract_from_entries(
    document: Document,
    entries: list[Level1Entry],
    declarations: dict[ObjectKind, list[str]],
    settings: ExtractionSettings,
    spec: InterfaceSpec | None = None,
    resolution: Resolution | None = None,
) -> ExtractionResult:
    """
    Run the stanza and block stages on already selected and resolved input.

    ``declarations`` comes either from a fresh resolution or from the lists
    of an earlier run; ``resolution`` is only kept for its diagnostics.
    """
    stanzas = extract_stanzas(document, entries, settings)
    blocks = extract_blocks(document, declarations, settings)
    resolution = resolution or Resolution()
    return ExtractionResult(
        spec=spec,
        entries=entries,
        resolution=resolution,
        stanzas=stanzas,
        blocks=blocks,
        settings=settings,
    )


def run_pipeline(
    document: Document,
    spec: InterfaceSpec,
    settings: ExtractionSettings | None = None,
) -> ExtractionResult:
    """
    Extract the overlay configuration of ``spec`` from ``document``.

    Args:
        document: Configuration document
        spec: Validated interface specification
        settings: Extraction settings (defaults when omitted)

    Returns:
        ExtractionResult; an interface with no VRF declarations yields an
        empty result rather than an error
    """
    settings = settings or ExtractionSettings()

    entries = select_interfaces(document, spec)
    resolution = resolve_references(document, entries, settings)
    declarations = {
        ObjectKind.ROUTE_POLICY: resolution.route_policies,
        ObjectKind.POLICY_MAP: resolution.policy_maps,
    }
    result = extract_from_entries(
        document, entries, declarations, settings, spec=spec, resolution=resolution
    )

    logger.info(
        f"Extracted {len(result.stanzas.stanzas)} stanza record(s) and "
        f"{len(result.blocks.blocks)} block(s) for {spec.name}"
    )
    return result
