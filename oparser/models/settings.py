"""Extraction settings read from the workspace configuration."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExtractionSettings:
    """Knobs for the cross-reference heuristics and artifact layout.

    Attributes:
        variant_suffix_length: Characters dropped from a VRF name to get the
            route-policy stem (``-00`` / ``-01`` variants)
        route_policy_prefix: Prefix removed from the stem when route-policy
            names do not carry the VRF naming prefix
        strict: Match search keys as whole tokens instead of substrings
        interface_pad: Appended to the interface name when searching, so
            ``Bundle-Ether7.1`` does not match ``Bundle-Ether7.100``
        excluded_attribute: Attribute value marking non-VRF interfaces
        separator: Line written after every extracted block
    """

    variant_suffix_length: int = 3
    route_policy_prefix: str = "NGDCS-"
    strict: bool = False
    interface_pad: str = " "
    excluded_attribute: str = "hsrp"
    separator: str = "!"

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ExtractionSettings":
        """Build settings from the naming/matching/output config sections."""
        naming = config.get("naming", {}) or {}
        matching = config.get("matching", {}) or {}
        output = config.get("output", {}) or {}
        defaults = cls()

        return cls(
            variant_suffix_length=int(
                naming.get("variant_suffix_length", defaults.variant_suffix_length)
            ),
            route_policy_prefix=naming.get("route_policy_prefix", defaults.route_policy_prefix),
            strict=bool(matching.get("strict", defaults.strict)),
            interface_pad=matching.get("interface_pad", defaults.interface_pad),
            excluded_attribute=matching.get("excluded_attribute", defaults.excluded_attribute),
            separator=output.get("separator", defaults.separator),
        )
