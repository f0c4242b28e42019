"""
Package inclusion in a file set.

Finds the packages a file set imports and inserts new `\\usepackage` lines
without creating package conflicts. Edits and advisories go through a
`DocumentEditor`, the host's channel for changing documents and notifying
the user.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from texlens.parsing.splitter import split_values
from texlens.registry.packages import Package, PackageGraph
from texlens.registry.tables import PACKAGE_COMMANDS
from texlens.syntax.file_set import Document, FileSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Advisory:
    """A non-fatal message for the user, e.g. why a fix did nothing."""

    title: str
    message: str


class DocumentEditor(Protocol):
    """Host channel for document edits and user notifications."""

    def insert_text(self, document: Document, offset: int, text: str) -> None: ...

    def notify(self, advisory: Advisory) -> None: ...


@dataclass
class BufferEditor:
    """
    `DocumentEditor` that applies edits to `Document.text` and collects advisories.

    Suitable for hosts that keep document text in memory, and for tests.
    """

    edits: list[tuple[str, int, str]] = field(default_factory=list)
    advisories: list[Advisory] = field(default_factory=list)

    def insert_text(self, document: Document, offset: int, text: str) -> None:
        self.edits.append((document.path, offset, text))
        if document.text is not None:
            document.text = document.text[:offset] + text + document.text[offset:]

    def notify(self, advisory: Advisory) -> None:
        self.advisories.append(advisory)


def package_names(document_or_file_set: Document | FileSet) -> list[str]:
    """
    Names of imported packages, in import order, with duplicates.

    `\\usepackage{a,b}` contributes both `a` and `b`.

    Raises:
        IndexNotReadyError: When a file set is still being indexed
    """
    if isinstance(document_or_file_set, FileSet):
        commands = document_or_file_set.commands_in_file_set()
    else:
        commands = document_or_file_set.commands_in_file()

    names = []
    for command in commands:
        if command.name not in PACKAGE_COMMANDS:
            continue
        for parameter in command.required_parameters():
            names.extend(
                value.strip() for value in split_values(parameter.content) if value.strip()
            )
    return names


def included_packages(file_set: FileSet) -> set[str]:
    """Names of all packages imported anywhere in the file set."""
    return set(package_names(file_set))


def _insert_position(document: Document) -> tuple[int, str]:
    """Offset and text template for a new package import in `document`."""
    commands = document.commands_in_file()
    imports = [command for command in commands if command.name in PACKAGE_COMMANDS]
    if imports:
        return imports[-1].end_offset, "\n{}"
    classes = [command for command in commands if command.name == "\\documentclass"]
    if classes:
        return classes[0].end_offset, "\n{}"
    return 0, "{}\n"


def insert_usepackage(
    document: Document,
    editor: DocumentEditor,
    package: Package,
    included: Iterable[str],
    graph: PackageGraph,
) -> bool:
    """
    Import `package` in `document` unless that would cause a conflict.

    The import goes after the last package import, else after
    `\\documentclass`, else at the start of the document.

    Params:
        document: Document receiving the import, normally the main file
        editor: Channel used to apply the edit
        package: Package to import
        included: Names of packages already imported in the file set
        graph: Package graph holding the conflict groups

    Returns:
        False if a conflicting package is present and nothing was inserted,
        True otherwise (including when there was nothing to insert)
    """
    included_names = set(included)
    if package.is_default or package.name in included_names:
        return True

    if graph.conflicts_with(package, included_names):
        logger.warning(
            "Not inserting %s: conflicts with an included package", package.name
        )
        return False

    offset, template = _insert_position(document)
    editor.insert_text(document, offset, template.format(package.usepackage()))
    logger.debug("Inserted %s at offset %d of %s", package.name, offset, document.path)
    return True
