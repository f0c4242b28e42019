"""
Reference resolution.

This package resolves command usages to the labels, files, URLs and
definitions they refer to, with user-defined aliases taken into account.
"""

from texlens.resolution.aliases import AliasRegistry
from texlens.resolution.references import (
    DefinitionReference,
    FileReference,
    LabelReference,
    ReferenceResolver,
    SymbolicReference,
    UrlReference,
)

__all__ = [
    "AliasRegistry",
    "DefinitionReference",
    "FileReference",
    "LabelReference",
    "ReferenceResolver",
    "SymbolicReference",
    "UrlReference",
]
