"""
Cross-reference resolution of policy-maps and route-policies.

Policy objects are declared at top level and only referenced from
interfaces, so their names are recovered heuristically from the VRF name:

- policy-maps are searched with the VRF name itself;
- route-policies are searched with the VRF name minus its variant suffix
  (``-00`` / ``-01``) and minus the VRF naming prefix, because route-policy
  names do not follow the VRF naming convention.

Both searches also accept declarations mentioning the padded interface name.
"""

import logging
from dataclasses import dataclass, field

from oparser.document import Document, is_stanza_start
from oparser.extract.matching import references
from oparser.models.overlay import (
    DiagnosticRecord,
    Diagnostics,
    Level1Entry,
    ObjectKind,
    ResolvedReference,
)
from oparser.models.settings import ExtractionSettings

logger = logging.getLogger(__name__)


def strip_variant_suffix(name: str, length: int = 3) -> str:
    """
    Drop the fixed-length variant suffix from a VRF name.

    ``NGDCS-CUST-A-00`` and ``NGDCS-CUST-A-01`` both become ``NGDCS-CUST-A``.
    Names not longer than the suffix are returned unchanged.
    """
    if length <= 0 or len(name) <= length:
        return name
    return name[:-length]


def strip_naming_prefix(name: str, prefix: str = "NGDCS-") -> str:
    """Remove the VRF naming prefix if present, leaving other names unchanged."""
    if prefix and name.startswith(prefix):
        return name[len(prefix) :]
    return name


def route_policy_key(attribute: str, settings: ExtractionSettings) -> str:
    """Search key used to find the route-policies of a VRF."""
    base = strip_variant_suffix(attribute, settings.variant_suffix_length)
    return strip_naming_prefix(base, settings.route_policy_prefix)


@dataclass
class Resolution:
    """Resolver output: ordered declarations plus per-kind misses."""

    references: list[ResolvedReference] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def declarations(self, kind: ObjectKind) -> list[str]:
        return [ref.declaration for ref in self.references if ref.kind is kind and ref.resolved]

    @property
    def policy_maps(self) -> list[str]:
        return self.declarations(ObjectKind.POLICY_MAP)

    @property
    def route_policies(self) -> list[str]:
        return self.declarations(ObjectKind.ROUTE_POLICY)


def find_declarations(
    document: Document,
    kind: ObjectKind,
    key: str,
    interface: str,
    settings: ExtractionSettings,
) -> list[str]:
    """Return every ``kind`` declaration line referencing ``key`` or ``interface``."""
    return [
        line
        for line in document
        if is_stanza_start(line, kind) and references(line, key, interface, settings)
    ]


def resolve_references(
    document: Document,
    entries: list[Level1Entry],
    settings: ExtractionSettings | None = None,
) -> Resolution:
    """
    Resolve policy-map and route-policy declarations for each entry.

    Args:
        document: Configuration document
        entries: Interface/VRF pairs from the selector
        settings: Naming and matching settings

    Returns:
        Resolution with one reference per matched declaration, one unresolved
        reference per miss, and a diagnostic record for every miss
    """
    settings = settings or ExtractionSettings()
    resolution = Resolution()

    for entry in entries:
        if entry.is_excluded(settings.excluded_attribute):
            logger.debug(f"Skipping {entry.to_list_line()} (excluded attribute)")
            continue

        keys = {
            ObjectKind.POLICY_MAP: entry.attribute,
            ObjectKind.ROUTE_POLICY: route_policy_key(entry.attribute, settings),
        }
        for kind, key in keys.items():
            found = find_declarations(document, kind, key, entry.interface, settings)
            if found:
                for declaration in found:
                    resolution.references.append(ResolvedReference(entry, kind, declaration))
                logger.debug(f"{kind.label} for {entry.to_list_line()}: {len(found)} match(es)")
            else:
                resolution.references.append(ResolvedReference(entry, kind, None))
                resolution.diagnostics.record(kind, DiagnosticRecord.for_entry(kind.label, entry))
                logger.info(f"No {kind.keyword[0]} found for {entry.to_list_line()}")

    return resolution
