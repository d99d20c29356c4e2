"""Overlay extraction dataclasses.

These types flow through the extraction pipeline: the interface selector
produces ``Level1Entry`` pairs, the resolver turns them into
``ResolvedReference`` records, and the two extractors produce
``ExtractedStanza`` and ``ExtractedBlock`` records. Misses never raise; they
are collected as ``DiagnosticRecord`` entries in a ``Diagnostics`` container.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from oparser.exceptions import InvalidInterfaceSpecError

EXACT_INTERFACE_PATTERN = re.compile(r"^Bundle-Ether[0-9]{1,5}\.[0-9]{1,5}$")
FAMILY_INTERFACE_PATTERN = re.compile(r"^Bundle-Ether[0-9]{1,5}$")


class InterfaceVariant(str, Enum):
    """How an interface specification selects sub-interfaces."""

    EXACT = "exact"
    FAMILY = "family"


@dataclass(frozen=True)
class InterfaceSpec:
    """Validated target interface selector."""

    name: str
    variant: InterfaceVariant

    @classmethod
    def parse(cls, value: str) -> "InterfaceSpec":
        """
        Validate a raw interface specification.

        Args:
            value: e.g. ``Bundle-Ether7`` or ``Bundle-Ether7.100``

        Returns:
            InterfaceSpec with the matching variant

        Raises:
            InvalidInterfaceSpecError: If neither accepted pattern matches
        """
        if value is None:
            raise InvalidInterfaceSpecError(str(value))
        if EXACT_INTERFACE_PATTERN.fullmatch(value):
            return cls(name=value, variant=InterfaceVariant.EXACT)
        if FAMILY_INTERFACE_PATTERN.fullmatch(value):
            return cls(name=value, variant=InterfaceVariant.FAMILY)
        raise InvalidInterfaceSpecError(value)

    @property
    def base(self) -> str:
        """Bundle name without the sub-interface suffix."""
        return self.name.split(".", 1)[0]

    @property
    def is_exact(self) -> bool:
        return self.variant is InterfaceVariant.EXACT


class StanzaKind(str, Enum):
    """Single-line stanza categories extracted per interface/VRF pair."""

    VRF = "vrf"
    INTERFACE = "interface"
    ROUTER_BGP = "router_bgp"
    ROUTER_STATIC = "router_static"
    ROUTER_HSRP = "router_hsrp"

    @property
    def keyword(self) -> tuple[str, ...]:
        return STANZA_KEYWORDS[self]

    @property
    def label(self) -> str:
        return self.value


class ObjectKind(str, Enum):
    """Delimited objects referenced by, but declared outside, interfaces."""

    POLICY_MAP = "policy_map"
    ROUTE_POLICY = "route_policy"

    @property
    def keyword(self) -> tuple[str, ...]:
        return OBJECT_KEYWORDS[self]

    @property
    def terminator(self) -> str:
        return OBJECT_TERMINATORS[self]

    @property
    def label(self) -> str:
        return "pm" if self is ObjectKind.POLICY_MAP else "rpl"


STANZA_KEYWORDS: dict[StanzaKind, tuple[str, ...]] = {
    StanzaKind.VRF: ("vrf",),
    StanzaKind.INTERFACE: ("interface",),
    StanzaKind.ROUTER_BGP: ("router", "bgp"),
    StanzaKind.ROUTER_STATIC: ("router", "static"),
    StanzaKind.ROUTER_HSRP: ("router", "hsrp"),
}

OBJECT_KEYWORDS: dict[ObjectKind, tuple[str, ...]] = {
    ObjectKind.POLICY_MAP: ("policy-map",),
    ObjectKind.ROUTE_POLICY: ("route-policy",),
}

OBJECT_TERMINATORS: dict[ObjectKind, str] = {
    ObjectKind.POLICY_MAP: "end-policy-map",
    ObjectKind.ROUTE_POLICY: "end-policy",
}

# Order in which the artifacts are pushed back to a device. Removal runs in reverse.
APPLY_ORDER: tuple[ObjectKind | StanzaKind, ...] = (
    ObjectKind.POLICY_MAP,
    ObjectKind.ROUTE_POLICY,
    StanzaKind.VRF,
    StanzaKind.INTERFACE,
    StanzaKind.ROUTER_HSRP,
    StanzaKind.ROUTER_STATIC,
    StanzaKind.ROUTER_BGP,
)

REMOVAL_ORDER: tuple[ObjectKind | StanzaKind, ...] = tuple(reversed(APPLY_ORDER))


@dataclass(frozen=True)
class Level1Entry:
    """Interface/VRF pair harvested from an interface declaration."""

    interface: str
    attribute: str

    def is_excluded(self, sentinel: str) -> bool:
        return self.attribute == sentinel

    def to_list_line(self) -> str:
        return f"{self.interface},{self.attribute}"

    @classmethod
    def from_list_line(cls, line: str) -> "Level1Entry":
        interface, _, attribute = line.strip().partition(",")
        return cls(interface=interface, attribute=attribute)


@dataclass(frozen=True)
class ResolvedReference:
    """Outcome of resolving one object kind for one entry.

    ``declaration`` holds the full declaration line (for example
    ``policy-map CUSTOMER-A-IN``) and is ``None`` when nothing matched.
    """

    entry: Level1Entry
    kind: ObjectKind
    declaration: str | None = None

    @property
    def resolved(self) -> bool:
        return self.declaration is not None

    @property
    def object_name(self) -> str | None:
        if self.declaration is None:
            return None
        tokens = self.declaration.split()
        return tokens[1] if len(tokens) > 1 else None


@dataclass(frozen=True)
class ExtractedStanza:
    """Lines of one simple stanza kind gathered for one entry."""

    entry: Level1Entry
    kind: StanzaKind
    text: str | None = None


@dataclass(frozen=True)
class ExtractedBlock:
    """Delimited block for one resolved declaration."""

    declaration: str
    kind: ObjectKind
    text: str | None = None


@dataclass(frozen=True)
class DiagnosticRecord:
    """Human-readable record of an unmatched entry."""

    label: str
    interface: str | None = None
    attribute: str | None = None
    declaration: str | None = None

    @classmethod
    def for_entry(cls, label: str, entry: Level1Entry) -> "DiagnosticRecord":
        return cls(label=label, interface=entry.interface, attribute=entry.attribute)

    def __str__(self) -> str:
        if self.interface is not None:
            return f"{self.label} empty for line {self.interface},{self.attribute}"
        return f"{self.label} empty for {self.declaration}"


@dataclass
class Diagnostics:
    """Append-only unmatched-entry records, grouped per kind."""

    records: dict[Any, list[DiagnosticRecord]] = field(default_factory=dict)

    def record(self, kind: Any, record: DiagnosticRecord) -> None:
        self.records.setdefault(kind, []).append(record)

    def for_kind(self, kind: Any) -> list[DiagnosticRecord]:
        return list(self.records.get(kind, []))

    def render(self, kind: Any) -> str:
        return "".join(f"{record}\n" for record in self.records.get(kind, []))

    def __len__(self) -> int:
        return sum(len(items) for items in self.records.values())
