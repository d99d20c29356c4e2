"""
File utility functions.

Router configurations are not guaranteed to be valid UTF-8 (descriptions
often carry Latin-1 text). Text is decoded with ``surrogateescape`` so that
undecodable bytes survive a read/write cycle unchanged.
"""

import hashlib
from pathlib import Path

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def ensure_dir(path: str | Path) -> Path:
    """Ensure directory exists, creating if necessary."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def read_text(path: str | Path) -> str:
    """Read a configuration file, keeping non-UTF-8 bytes as surrogates."""
    return Path(path).read_text(encoding=ENCODING, errors=ERRORS)


def write_text(path: str | Path, content: str) -> None:
    """Write text to file, creating parent directories if needed."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding=ENCODING, errors=ERRORS)


def hostname_from_path(path: str | Path) -> str:
    """Derive the router hostname from a config file name (``pe1.cfg`` -> ``pe1``)."""
    return Path(path).name.split(".")[0]


def sha256_file(path: str | Path) -> str:
    """Compute SHA256 hash of a file."""
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def sha256_text(content: str) -> str:
    """Compute SHA256 hash of a string, as it is written to disk."""
    return hashlib.sha256(content.encode(ENCODING, errors=ERRORS)).hexdigest()
