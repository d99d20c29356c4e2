"""
Configuration document and stanza model.

An IOS-XR formal configuration is a flat sequence of column-0 lines. Most
stanza kinds are single lines (``interface Bundle-Ether7.100 vrf X``); policy
objects are delimited blocks running from their declaration line to an
explicit terminator (``end-policy-map`` / ``end-policy``).
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from oparser.exceptions import DocumentNotReadableError, StructuralAnomalyError
from oparser.models.overlay import ObjectKind, StanzaKind
from oparser.util.files import read_text

logger = logging.getLogger(__name__)

LinePredicate = Callable[[str], bool]


class Document:
    """Immutable, ordered view of a configuration's lines."""

    def __init__(self, lines, source: str | None = None):
        self._lines: tuple[str, ...] = tuple(lines)
        self.source = source

    @classmethod
    def from_text(cls, text: str, source: str | None = None) -> "Document":
        return cls(text.splitlines(), source=source)

    @classmethod
    def load(cls, path: str | Path) -> "Document":
        """
        Load a configuration document from disk.

        Args:
            path: Path to the formal configuration

        Returns:
            Document holding every line of the file

        Raises:
            DocumentNotReadableError: If the path is missing, not a file or unreadable
        """
        p = Path(path)
        if not p.is_file():
            raise DocumentNotReadableError(str(p), "not a file")
        try:
            text = read_text(p)
        except OSError as e:
            raise DocumentNotReadableError(str(p), str(e)) from e

        document = cls.from_text(text, source=str(p))
        logger.debug(f"Loaded {len(document)} lines from {p}")
        return document

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __getitem__(self, index):
        return self._lines[index]


def tokenize(line: str) -> list[str]:
    """Split a line into whitespace-delimited fields."""
    return line.split()


def starts_at_column_zero(line: str) -> bool:
    return bool(line) and not line[0].isspace()


def is_stanza_start(line: str, kind: StanzaKind | ObjectKind) -> bool:
    """True if ``line`` is a column-0 line opening a stanza of ``kind``."""
    if not starts_at_column_zero(line):
        return False
    keyword = kind.keyword
    return tuple(tokenize(line)[: len(keyword)]) == keyword


def is_stanza_end(line: str, kind: StanzaKind | ObjectKind) -> bool:
    """
    True if ``line`` closes a stanza of ``kind``.

    Delimited kinds close on their terminator keyword, whatever its
    indentation. Simple kinds close at the next column-0 line.
    """
    if isinstance(kind, ObjectKind):
        return line.strip() == kind.terminator
    return starts_at_column_zero(line)


def extract_stanza(
    document: Document, start: LinePredicate, end: LinePredicate
) -> str | None:
    """
    Extract the first range opened by ``start`` and closed by ``end``.

    Both boundary lines are included. Returns None when no line satisfies
    ``start`` or no later line satisfies ``end``.
    """
    lines = document.lines
    for i, line in enumerate(lines):
        if not start(line):
            continue
        for j in range(i + 1, len(lines)):
            if end(lines[j]):
                return "\n".join(lines[i : j + 1])
        return None
    return None


@dataclass(frozen=True)
class InterfaceDeclaration:
    """Named fields of an ``interface <name> vrf <vrf>`` line."""

    keyword: str
    interface: str
    attribute_keyword: str
    attribute: str

    FIELD_COUNT = 4

    @classmethod
    def parse(cls, line: str, line_number: int | None = None) -> "InterfaceDeclaration":
        """
        Read the declaration fields positionally.

        Raises:
            StructuralAnomalyError: If the line has fewer than four fields
        """
        fields = tokenize(line)
        if len(fields) < cls.FIELD_COUNT:
            raise StructuralAnomalyError(line, cls.FIELD_COUNT, line_number)

        declaration = cls(*fields[: cls.FIELD_COUNT])
        if declaration.attribute_keyword != "vrf":
            # Positional contract: keep the 4th field, but flag the layout.
            logger.warning(
                f"Unexpected field layout at line {line_number}: {line!r} "
                f"(using {declaration.attribute!r} as VRF name)"
            )
        return declaration
