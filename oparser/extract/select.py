"""
Interface selection.

Finds the ``interface ... vrf ...`` declarations of the target bundle and
harvests their interface/VRF pairs, in document order.
"""

import logging
import re

from oparser.document import Document, InterfaceDeclaration
from oparser.models.overlay import InterfaceSpec, Level1Entry

logger = logging.getLogger(__name__)


def interface_pattern(spec: InterfaceSpec) -> re.Pattern:
    """
    Build the declaration pattern for an interface specification.

    Exact specs need ``vrf`` right after the interface name. Family specs
    accept the bundle itself or any ``.<id>`` sub-interface, with ``vrf``
    anywhere later on the line.
    """
    if spec.is_exact:
        return re.compile(rf"^interface {re.escape(spec.name)}\s+vrf(\s|$)")
    return re.compile(rf"^interface {re.escape(spec.base)}(\.\d+)?\s(.*\s)?vrf(\s|$)")


def select_interfaces(document: Document, spec: InterfaceSpec) -> list[Level1Entry]:
    """
    Select interface/VRF pairs for ``spec``.

    Args:
        document: Configuration document
        spec: Validated interface specification

    Returns:
        Entries in document order, duplicates kept. Empty when nothing matches.

    Raises:
        StructuralAnomalyError: If a matching line has fewer than four fields
    """
    pattern = interface_pattern(spec)
    entries = []

    for line_number, line in enumerate(document, start=1):
        if not pattern.match(line):
            continue
        declaration = InterfaceDeclaration.parse(line, line_number)
        entries.append(Level1Entry(interface=declaration.interface, attribute=declaration.attribute))
        logger.debug(f"Selected {declaration.interface},{declaration.attribute} (line {line_number})")

    if not entries:
        logger.warning(f"No interface declarations with a VRF matched {spec.name}")
    else:
        logger.info(f"Selected {len(entries)} interface(s) for {spec.name}")

    return entries
