"""
Cross-reference predicate shared by the resolver and the stanza extractor.

A line references an interface/VRF pair when it contains the search key
(the VRF name, or a name derived from it) or the interface name followed by
the padding character. Matching is literal substring containment, which can
over-match: ``CUSTOMER-A`` also matches ``CUSTOMER-AB``. Strict mode compares
whole tokens instead.
"""

from oparser.document import tokenize
from oparser.models.settings import ExtractionSettings


def references(line: str, key: str, interface: str, settings: ExtractionSettings) -> bool:
    """
    Check whether ``line`` references ``key`` or ``interface``.

    Args:
        line: Configuration line
        key: VRF name or derived route-policy name; empty keys never match
        interface: Interface name (e.g. ``Bundle-Ether7.100``)
        settings: Matching settings (strict mode, interface padding)

    Returns:
        True if the line mentions either search term
    """
    if settings.strict:
        tokens = tokenize(line)
        return (bool(key) and key in tokens) or interface in tokens

    if key and key in line:
        return True
    return f"{interface}{settings.interface_pad}" in line
