"""
Syntax tree query surface.

This package provides the node types produced by the host's LaTeX parser and
the in-memory file set texlens analyses run against.
"""

from texlens.syntax.file_set import Document, FileSet
from texlens.syntax.nodes import (
    CommandUsage,
    EnvironmentUsage,
    OptionalContent,
    OptionalParameter,
    Parameter,
    ParameterGroup,
    ParameterText,
    RequiredParameter,
)

__all__ = [
    "CommandUsage",
    "Document",
    "EnvironmentUsage",
    "FileSet",
    "OptionalContent",
    "OptionalParameter",
    "Parameter",
    "ParameterGroup",
    "ParameterText",
    "RequiredParameter",
]
