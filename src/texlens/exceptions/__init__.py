"""
texlens exception classes.

This package provides all exception types used throughout texlens for
consistent error handling and reporting.
"""

from texlens.exceptions.core import (
    ErrorContext,
    ErrorLevel,
    IndexNotReadyError,
    MainFileNotFoundError,
    RegistryError,
    RegistryLoadError,
    TexLensError,
)

__all__ = [
    "TexLensError",
    "ErrorContext",
    "ErrorLevel",
    "IndexNotReadyError",
    "MainFileNotFoundError",
    "RegistryError",
    "RegistryLoadError",
]
