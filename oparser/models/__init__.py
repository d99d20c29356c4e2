"""
Data models and settings.

This package contains the records passed between extraction stages and the
settings that tune the cross-reference heuristics.

Modules:
- overlay: interface specs, pipeline records and diagnostics
- settings: extraction settings loaded from oparser.yaml
"""

from oparser.models.overlay import (
    APPLY_ORDER,
    REMOVAL_ORDER,
    Diagnostics,
    DiagnosticRecord,
    ExtractedBlock,
    ExtractedStanza,
    InterfaceSpec,
    InterfaceVariant,
    Level1Entry,
    ObjectKind,
    ResolvedReference,
    StanzaKind,
)
from oparser.models.settings import ExtractionSettings

__all__ = [
    "APPLY_ORDER",
    "REMOVAL_ORDER",
    "Diagnostics",
    "DiagnosticRecord",
    "ExtractedBlock",
    "ExtractedStanza",
    "ExtractionSettings",
    "InterfaceSpec",
    "InterfaceVariant",
    "Level1Entry",
    "ObjectKind",
    "ResolvedReference",
    "StanzaKind",
]
