"""
Core texlens components.

This package provides the fundamental building blocks used by every analysis:
text ranges and type aliases.
"""

from texlens.core.text_range import TextRange, is_escaped, strip_group
from texlens.core.types import ConfigDict, OptionMap

__all__ = [
    "TextRange",
    "is_escaped",
    "strip_group",
    "ConfigDict",
    "OptionMap",
]
