"""
Custom exceptions for oparser with helpful error messages.

Every fatal error carries a stable ``exit_code`` so callers (and the CLI) can
tell input problems apart from workspace or structural problems.
"""

EXIT_INVALID_INPUT = 79
EXIT_READING_FILE = 80
EXIT_STRUCTURAL_ANOMALY = 86
EXIT_OUTPUT_DIRECTORY = 87
EXIT_WORKSPACE = 88
EXIT_CONFIGURATION = 89
EXIT_GENERIC = 90


class OparserError(Exception):
    """Base exception for oparser errors."""

    exit_code = EXIT_GENERIC

    def __init__(self, message: str, suggestion: str = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.message)

    def __str__(self):
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class InputError(OparserError):
    """Fatal errors caused by the inputs of a run."""

    pass


class InvalidInterfaceSpecError(InputError):
    """Interface specification matches neither accepted pattern."""

    exit_code = EXIT_INVALID_INPUT

    def __init__(self, value: str):
        message = f"Input validation failed: {value!r} is not a valid interface specification"
        suggestion = (
            "The interface must be a Bundle-Ether family or a single sub-interface:\n"
            "  - Bundle-Ether7      (every sub-interface of bundle 7)\n"
            "  - Bundle-Ether7.100  (only sub-interface 100)"
        )
        super().__init__(message, suggestion)


class DocumentNotReadableError(InputError):
    """Configuration document missing or unreadable."""

    exit_code = EXIT_READING_FILE

    def __init__(self, file_path: str, reason: str = None):
        message = f"File reading failed: {file_path}"
        if reason:
            message += f" ({reason})"
        suggestion = (
            "Check that the path points to an IOS-XR configuration in formal format:\n"
            f"  ls -l {file_path}"
        )
        super().__init__(message, suggestion)


class MissingArtifactError(InputError):
    """An intermediate list required by a later stage is missing."""

    exit_code = EXIT_READING_FILE

    def __init__(self, artifact_path: str):
        message = f"Reading file failed: {artifact_path}"
        suggestion = (
            "The earlier stages of this run did not produce the list.\n"
            "Run a full extraction first:\n"
            "  oparser extract --file <cfg> --interface <Bundle-EtherX.Y>"
        )
        super().__init__(message, suggestion)


class StructuralAnomalyError(OparserError):
    """A declaration line does not have the expected field layout."""

    exit_code = EXIT_STRUCTURAL_ANOMALY

    def __init__(self, line: str, expected_fields: int, line_number: int = None):
        self.line = line
        self.expected_fields = expected_fields
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ""
        message = (
            f"Unexpected declaration layout{location}: expected at least "
            f"{expected_fields} fields in {line!r}"
        )
        suggestion = (
            "oparser reads interface declarations positionally:\n"
            "  interface <name> vrf <vrf-name>\n"
            "Make sure the configuration was exported with 'show running-config formal'."
        )
        super().__init__(message, suggestion)


class OutputDirectoryNotFoundError(OparserError):
    """Artifacts were requested for a directory that does not exist."""

    exit_code = EXIT_OUTPUT_DIRECTORY

    def __init__(self, path: str):
        message = f"Output directory does not exist: {path}"
        suggestion = "Create the run directories through the workspace before writing artifacts."
        super().__init__(message, suggestion)


class WorkspaceError(OparserError):
    """Errors related to workspace management."""

    exit_code = EXIT_WORKSPACE


class WorkspaceNotFoundError(WorkspaceError):
    """Workspace not found or not initialized."""

    def __init__(self, path: str = None):
        message = "Not in an oparser workspace."
        if path:
            message = f"No oparser workspace found at: {path}"

        suggestion = (
            "Initialize a new workspace with:\n"
            "  oparser init <workspace-dir>\n\n"
            "Or navigate to an existing workspace directory."
        )
        super().__init__(message, suggestion)


class RunNotFoundError(WorkspaceError):
    """Named run does not exist in the workspace."""

    def __init__(self, run_name: str):
        message = f"Run not found: {run_name}"
        suggestion = "List the available runs with:\n  ls lsts/"
        super().__init__(message, suggestion)


class ConfigurationError(OparserError):
    """Configuration file errors."""

    exit_code = EXIT_CONFIGURATION


class InvalidConfigError(ConfigurationError):
    """Configuration file is invalid."""

    def __init__(self, error_details: str):
        message = f"Invalid configuration file: {error_details}"

        suggestion = (
            "Fix the oparser.yaml file.\n"
            "You can regenerate the default configuration:\n"
            "  mv oparser.yaml oparser.yaml.backup\n"
            "  oparser init .\n\n"
            "Then merge your settings back from the backup."
        )
        super().__init__(message, suggestion)


def format_error_for_cli(error: Exception) -> str:
    """
    Format an exception for CLI display with helpful information.

    Args:
        error: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(error, OparserError):
        output = f"[red]Error:[/red] {error.message}"
        if error.suggestion:
            output += f"\n\n[yellow]{error.suggestion}[/yellow]"
        return output
    else:
        return f"[red]Error:[/red] {str(error)}"
