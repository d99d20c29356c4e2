"""
Artifact writing and intermediate list loading.

A run writes two directories that must already exist:

- ``lsts/<run>/``: intermediate lists (``level1.lst`` and the resolved
  policy-map / route-policy declarations) plus resolver misses
- ``cfgs/<run>/``: one configuration artifact per category, a diagnostics
  artifact per category with misses, and ``manifest.yaml`` with the order in
  which to apply (or remove) the artifacts
"""

import logging
from pathlib import Path

import yaml

from oparser.exceptions import MissingArtifactError, OutputDirectoryNotFoundError
from oparser.extract.pipeline import ExtractionResult
from oparser.extract.resolve import Resolution
from oparser.models.overlay import (
    APPLY_ORDER,
    REMOVAL_ORDER,
    Level1Entry,
    ObjectKind,
    StanzaKind,
)
from oparser.util.files import read_text, sha256_text, write_text

logger = logging.getLogger(__name__)

LEVEL1_LIST = "level1.lst"

DECLARATION_LISTS = {
    ObjectKind.POLICY_MAP: "level2_pm.lst",
    ObjectKind.ROUTE_POLICY: "level2_rpl.lst",
}

RESOLUTION_MISS_LISTS = {
    ObjectKind.POLICY_MAP: "level2_pm_empty.lst",
    ObjectKind.ROUTE_POLICY: "level2_rpl_empty.lst",
}

CONFIG_ARTIFACTS: dict[StanzaKind | ObjectKind, str] = {
    StanzaKind.VRF: "level1_vrf.cf",
    StanzaKind.INTERFACE: "level1_if.cf",
    StanzaKind.ROUTER_BGP: "level1_rbgp.cf",
    StanzaKind.ROUTER_STATIC: "level1_rstatic.cf",
    StanzaKind.ROUTER_HSRP: "level1_hsrp.cf",
    ObjectKind.ROUTE_POLICY: "level2_rpl.cf",
    ObjectKind.POLICY_MAP: "level2_pm.cf",
}

MANIFEST = "manifest.yaml"


def diagnostics_artifact(kind: StanzaKind | ObjectKind) -> str:
    """File name of the diagnostics artifact for ``kind`` (``level1_vrf_empty.cf``)."""
    return CONFIG_ARTIFACTS[kind].replace(".cf", "_empty.cf")


def _require_dir(directory: Path) -> Path:
    directory = Path(directory)
    if not directory.is_dir():
        raise OutputDirectoryNotFoundError(str(directory))
    return directory


def _lines(items) -> str:
    return "".join(f"{item}\n" for item in items)


def write_lists(lst_dir: Path, entries: list[Level1Entry], resolution: Resolution) -> list[Path]:
    """
    Write the intermediate lists of a run.

    The level-1 and declaration lists are always written, even when empty,
    so that a later replay can tell "nothing matched" from "never ran".

    Returns:
        Paths written
    """
    lst_dir = _require_dir(lst_dir)
    written = []

    level1 = lst_dir / LEVEL1_LIST
    write_text(level1, _lines(entry.to_list_line() for entry in entries))
    written.append(level1)

    for kind, name in DECLARATION_LISTS.items():
        path = lst_dir / name
        write_text(path, _lines(resolution.declarations(kind)))
        written.append(path)

    for kind, name in RESOLUTION_MISS_LISTS.items():
        path = lst_dir / name
        content = resolution.diagnostics.render(kind)
        if content:
            write_text(path, content)
            written.append(path)
        else:
            path.unlink(missing_ok=True)

    logger.debug(f"Wrote {len(written)} list(s) to {lst_dir}")
    return written


def write_configs(cfg_dir: Path, result: ExtractionResult) -> list[Path]:
    """
    Write the seven configuration artifacts, their diagnostics and the manifest.

    Returns:
        Paths written
    """
    cfg_dir = _require_dir(cfg_dir)
    written = []
    checksums = {}

    for kind in APPLY_ORDER:
        content = result.artifact_text(kind)
        path = cfg_dir / CONFIG_ARTIFACTS[kind]
        write_text(path, content)
        checksums[path.name] = sha256_text(content)
        written.append(path)

        # A diagnostics file from an earlier write must not outlive its misses.
        empty_path = cfg_dir / diagnostics_artifact(kind)
        missing = "".join(f"{record}\n" for record in result.missing(kind))
        if missing:
            write_text(empty_path, missing)
            written.append(empty_path)
        else:
            empty_path.unlink(missing_ok=True)

    manifest_path = cfg_dir / MANIFEST
    write_text(manifest_path, render_manifest(result, checksums))
    written.append(manifest_path)

    logger.debug(f"Wrote {len(written)} artifact(s) to {cfg_dir}")
    return written


def render_manifest(result: ExtractionResult, checksums: dict[str, str] | None = None) -> str:
    """Render the run manifest: apply/removal order, per-category counts, checksums."""
    manifest = {
        "interface": result.spec.name if result.spec else None,
        "variant": result.spec.variant.value if result.spec else None,
        "entries": [entry.to_list_line() for entry in result.entries],
        "apply_order": [CONFIG_ARTIFACTS[kind] for kind in APPLY_ORDER],
        "removal_order": [CONFIG_ARTIFACTS[kind] for kind in REMOVAL_ORDER],
        "counts": {
            label: {"extracted": extracted, "missing": missing}
            for label, (extracted, missing) in result.counts().items()
        },
    }
    if checksums:
        manifest["sha256"] = checksums
    return yaml.dump(manifest, default_flow_style=False, sort_keys=False)


def read_level1_list(lst_dir: Path) -> list[Level1Entry]:
    """
    Load the interface/VRF pairs of an earlier run.

    Raises:
        MissingArtifactError: If ``level1.lst`` does not exist
    """
    path = Path(lst_dir) / LEVEL1_LIST
    if not path.is_file():
        raise MissingArtifactError(str(path))
    return [Level1Entry.from_list_line(line) for line in read_text(path).splitlines() if line]


def read_declaration_list(lst_dir: Path, kind: ObjectKind) -> list[str]:
    """
    Load the resolved declarations of one kind from an earlier run.

    Raises:
        MissingArtifactError: If the list does not exist
    """
    path = Path(lst_dir) / DECLARATION_LISTS[kind]
    if not path.is_file():
        raise MissingArtifactError(str(path))
    return [line for line in read_text(path).splitlines() if line.strip()]
