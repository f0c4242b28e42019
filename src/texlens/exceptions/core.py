"""
Exception classes for texlens analyses.

This module defines specific exception types for the few conditions that are
surfaced to a host instead of being degraded locally: external state that is
not ready yet, missing main files and invalid registry tables.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Table/file context only
    DEVELOPER = "developer"  # Full context including source offsets


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where an error originated, both in terms of the LaTeX source
    (file and offset of a command usage) and in terms of registry tables
    (the table file and the entry that was being read).

    Params:
        file: Path of the LaTeX file or registry table involved
        offset: Source offset of the command usage, if any
        command_text: The command name or table entry that caused the error
        table_key: Top-level section of a registry table (commands, environments, ...)
    """

    file: str | None = None
    offset: int | None = None
    command_text: str | None = None
    table_key: str | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.file:
            lines.append(f"  in {self.file}")

        if self.table_key:
            lines.append(f"  section: {self.table_key}")

        # Offsets only help someone with the file open in a debugger
        if error_level == ErrorLevel.DEVELOPER and self.offset is not None:
            lines.append(f"  at offset {self.offset}")

        if self.command_text:
            lines.append(f"  entry: {self.command_text}")

        return "\n".join(lines)


class TexLensError(Exception):
    """Base exception for all texlens errors."""

    pass


class IndexNotReadyError(TexLensError):
    """Raised when the file-set index is still being built.

    Distinguishes "try again later" from a legitimately empty result.
    """

    def __init__(self, operation: str):
        """
        Initialize the exception.

        Params:
            operation: The query that could not be answered yet
        """
        self.operation = operation
        super().__init__(f"Index not ready, cannot run '{operation}'; try again later")


class MainFileNotFoundError(TexLensError):
    """Raised when an analysis needs the main file of a file set and there is none."""

    def __init__(self, reason: str = "file set has no documents"):
        """
        Initialize the exception.

        Params:
            reason: Why the main file could not be determined
        """
        self.reason = reason
        super().__init__(f"Main file not found: {reason}")


class RegistryError(TexLensError):
    """Raised when a registry entry violates its invariants."""

    def __init__(self, entry: str, reason: str):
        """
        Initialize the exception.

        Params:
            entry: Name of the offending command, environment or package
            reason: Why the entry is invalid
        """
        self.entry = entry
        self.reason = reason
        super().__init__(f"Invalid registry entry '{entry}': {reason}")


class RegistryLoadError(RegistryError):
    """Raised when registry tables cannot be read or validated."""

    def __init__(
        self,
        entry: str,
        reason: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            entry: Name of the offending entry, or the table path for file-level failures
            reason: Why loading failed
            context: Optional location information
            error_level: Detail level used to format the location
        """
        self.entry = entry
        self.reason = reason
        self.context = context
        self.error_level = error_level

        primary_error = f"Cannot load registry entry '{entry}': {reason}"
        location_info = context.format_location(error_level) if context else ""
        if location_info:
            TexLensError.__init__(self, f"{primary_error}\n{location_info}")
        else:
            TexLensError.__init__(self, primary_error)
