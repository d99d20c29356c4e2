"""
Workspace management for oparser.
"""

import json
import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validate

from oparser.exceptions import InvalidConfigError, RunNotFoundError
from oparser.util.files import ensure_dir

logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent / "schema" / "config.schema.json"


@dataclass(frozen=True)
class Run:
    """Directories of one extraction run (``<hostname>_<epoch>``)."""

    name: str
    lst_dir: Path
    cfg_dir: Path
    meta_dir: Path


class Workspace:
    """Manages the oparser workspace structure and configuration."""

    REQUIRED_DIRS = [
        "input",
        "lsts",
        "cfgs",
        "runs",
    ]

    DEFAULT_CONFIG = {
        "naming": {
            "variant_suffix_length": 3,
            "route_policy_prefix": "NGDCS-",
        },
        "matching": {
            "strict": False,
            "interface_pad": " ",
            "excluded_attribute": "hsrp",
        },
        "output": {
            "separator": "!",
        },
    }

    def __init__(self, root: Path):
        self.root = Path(root)
        self.config_file = self.root / "oparser.yaml"
        self._config_cache: dict[str, Any] | None = None

    def initialize(self) -> None:
        """Initialize workspace directory structure and config."""
        for dir_path in self.REQUIRED_DIRS:
            (self.root / dir_path).mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w") as f:
            yaml.dump(self.DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)

    def load_config(self) -> dict[str, Any]:
        """
        Load and validate workspace configuration.

        Raises:
            InvalidConfigError: If the file is empty, not a mapping, not YAML
                or fails schema validation
        """
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_file.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_file}")

        try:
            with open(self.config_file) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigError(f"failed to parse YAML: {e}") from e

        if config is None:
            raise InvalidConfigError(f"config file is empty: {self.config_file}")

        if not isinstance(config, dict):
            raise InvalidConfigError(f"expected a mapping, got {type(config).__name__}")

        self._validate_config_schema(config)
        self._config_cache = config

        return config

    def _validate_config_schema(self, config: dict) -> None:
        """Validate config against JSON schema."""
        schema = json.loads(SCHEMA_FILE.read_text())
        try:
            validate(instance=config, schema=schema)
        except ValidationError as e:
            raise InvalidConfigError(
                f"{e.message} (path: {'.'.join(str(p) for p in e.path) or '<root>'})"
            ) from e

    def run_paths(self, name: str) -> Run:
        return Run(
            name=name,
            lst_dir=self.root / "lsts" / name,
            cfg_dir=self.root / "cfgs" / name,
            meta_dir=self.root / "runs" / name,
        )

    def create_run(self, hostname: str, epoch: int | None = None) -> Run:
        """
        Create the directories of a new run.

        Args:
            hostname: Router hostname, from the configuration file name
            epoch: Run timestamp (default: now)

        Returns:
            Run with freshly created list, config and metadata directories
        """
        epoch = int(time.time()) if epoch is None else epoch
        run = self.run_paths(f"{hostname}_{epoch}")
        for directory in (run.lst_dir, run.cfg_dir, run.meta_dir):
            ensure_dir(directory)
        logger.debug(f"Created run {run.name}")
        return run

    def find_run(self, name: str) -> Run:
        """
        Look up an existing run.

        Raises:
            RunNotFoundError: If the run's list directory does not exist
        """
        run = self.run_paths(name)
        if not run.lst_dir.is_dir():
            raise RunNotFoundError(name)
        return run

    def remove_run(self, run: Run) -> list[Path]:
        """Delete the directories of a run. Returns the directories removed."""
        removed = []
        for directory in (run.lst_dir, run.cfg_dir, run.meta_dir):
            if directory.is_dir():
                logger.info(f"Deleting: {directory} ...")
                shutil.rmtree(directory)
                removed.append(directory)
        return removed
