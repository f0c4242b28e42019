"""
Document analyses.

This package provides the missing-import analysis with its fixes, package
inclusion helpers and index program detection.
"""

from texlens.analysis.imports import ImportPackageFix, MissingImportAnalyzer, ProblemReport
from texlens.analysis.index_programs import IndexProgram, default_index_programs
from texlens.analysis.packages import (
    Advisory,
    BufferEditor,
    DocumentEditor,
    included_packages,
    insert_usepackage,
    package_names,
)

__all__ = [
    "Advisory",
    "BufferEditor",
    "DocumentEditor",
    "ImportPackageFix",
    "IndexProgram",
    "MissingImportAnalyzer",
    "ProblemReport",
    "default_index_programs",
    "included_packages",
    "insert_usepackage",
    "package_names",
]
