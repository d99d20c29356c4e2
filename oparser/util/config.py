"""Configuration utility functions."""

from pathlib import Path

from oparser.models.settings import ExtractionSettings


def load_settings(root: Path | None = None) -> ExtractionSettings:
    """
    Get extraction settings for a workspace.

    Args:
        root: Workspace root (default: current directory)

    Returns:
        Settings from oparser.yaml, or the defaults when the directory is not
        a workspace

    Raises:
        InvalidConfigError: If oparser.yaml exists but is invalid
    """
    from oparser.workspace import Workspace

    ws = Workspace(root if root is not None else Path.cwd())
    if not ws.config_file.exists():
        return ExtractionSettings()

    return ExtractionSettings.from_config(ws.load_config())
