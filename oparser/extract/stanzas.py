"""
Single-line stanza extraction (VRF, interface, BGP, static, HSRP).
"""

import logging
from dataclasses import dataclass, field

from oparser.document import Document, is_stanza_start
from oparser.extract.matching import references
from oparser.models.overlay import (
    DiagnosticRecord,
    Diagnostics,
    ExtractedStanza,
    Level1Entry,
    StanzaKind,
)
from oparser.models.settings import ExtractionSettings

logger = logging.getLogger(__name__)


@dataclass
class StanzaExtraction:
    """Extracted stanzas in entry order, plus per-kind misses."""

    stanzas: list[ExtractedStanza] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def for_kind(self, kind: StanzaKind) -> list[ExtractedStanza]:
        return [s for s in self.stanzas if s.kind is kind and s.text is not None]

    def render(self, kind: StanzaKind) -> str:
        """Artifact text for ``kind``: every matching line, one per line."""
        return "".join(f"{stanza.text}\n" for stanza in self.for_kind(kind))


def extract_entry_stanzas(
    document: Document, entry: Level1Entry, settings: ExtractionSettings
) -> dict[StanzaKind, list[str]]:
    """Group the lines referencing ``entry`` by stanza kind, in document order."""
    candidates = [
        line for line in document if references(line, entry.attribute, entry.interface, settings)
    ]
    return {
        kind: [line for line in candidates if is_stanza_start(line, kind)] for kind in StanzaKind
    }


def extract_stanzas(
    document: Document,
    entries: list[Level1Entry],
    settings: ExtractionSettings | None = None,
) -> StanzaExtraction:
    """
    Extract the five simple stanza kinds for every entry.

    Args:
        document: Configuration document
        entries: Interface/VRF pairs from the selector
        settings: Matching settings

    Returns:
        StanzaExtraction with one record per (entry, kind); kinds with no
        matching line have ``text=None`` and a diagnostic record
    """
    settings = settings or ExtractionSettings()
    extraction = StanzaExtraction()

    for entry in entries:
        if entry.is_excluded(settings.excluded_attribute):
            continue

        logger.info(f"Extracting overlay stanzas for {entry.interface} ...")
        grouped = extract_entry_stanzas(document, entry, settings)

        for kind in StanzaKind:
            lines = grouped[kind]
            if lines:
                extraction.stanzas.append(ExtractedStanza(entry, kind, "\n".join(lines)))
            else:
                extraction.stanzas.append(ExtractedStanza(entry, kind, None))
                extraction.diagnostics.record(kind, DiagnosticRecord.for_entry(kind.label, entry))

    return extraction
