"""
texlens - Semantic analysis for LaTeX and BibTeX documents

texlens resolves the references in command usages and finds commands and
environments whose package is not imported.
"""

from importlib.metadata import version

from texlens.api import TexLens
from texlens.config import AnalysisSettings
from texlens.syntax.file_set import Document, FileSet
from texlens.syntax.nodes import CommandUsage, EnvironmentUsage

__version__ = version("texlens")

__all__ = [
    "__version__",
    "AnalysisSettings",
    "CommandUsage",
    "Document",
    "EnvironmentUsage",
    "FileSet",
    "TexLens",
]
