"""
Index and glossary program detection.

Decides which programs a build has to run between LaTeX passes to produce
the index and the glossaries, based on the packages a file set imports and
the options they are imported with.
"""

import logging
import shutil
from enum import Enum

from texlens.analysis.packages import included_packages
from texlens.parsing.parameters import get_optional_parameters
from texlens.parsing.splitter import split_values
from texlens.registry.packages import GLOSSARIES, GLOSSARIESEXTRA
from texlens.registry.tables import GLOSSARY_PACKAGES, INDEX_PACKAGES, PACKAGE_COMMANDS
from texlens.syntax.file_set import FileSet
from texlens.syntax.nodes import CommandUsage

logger = logging.getLogger(__name__)


class IndexProgram(Enum):
    """Programs that turn index or glossary entries into typeset lists."""

    MAKEINDEX = "makeindex"
    XINDY = "xindy"
    TRUEXINDY = "truexindy"
    MAKEGLOSSARIES = "makeglossaries"
    MAKEGLOSSARIESLITE = "makeglossaries-lite"
    BIB2GLS = "bib2gls"


# Options of \makeindex (imakeidx) naming the program, highest priority first
_MAKEINDEX_PROGRAMS = (
    ("makeindex", IndexProgram.MAKEINDEX),
    ("xindy", IndexProgram.XINDY),
    ("texindy", IndexProgram.XINDY),
    ("truexindy", IndexProgram.TRUEXINDY),
)


def _imported_names(command: CommandUsage) -> set[str]:
    names = set()
    for parameter in command.required_parameters():
        names.update(value.strip() for value in split_values(parameter.content))
    return names


def package_options(file_set: FileSet, packages: set[str]) -> dict[str, str]:
    """
    Merged option map of every import of one of `packages`.

    Params:
        file_set: File set to search
        packages: Package names whose import options are collected

    Returns:
        Option map, later imports overriding earlier ones
    """
    options: dict[str, str] = {}
    for command in file_set.commands_in_file_set():
        if command.name in PACKAGE_COMMANDS and _imported_names(command) & packages:
            options.update(get_optional_parameters(command.optional_parameters()))
    return options


def makeindex_options(file_set: FileSet) -> dict[str, str]:
    """Merged option map of every `\\makeindex` usage in the file set."""
    options: dict[str, str] = {}
    for command in file_set.commands_in_file_set():
        if command.name == "\\makeindex":
            options.update(get_optional_parameters(command.optional_parameters()))
    return options


def perl_available() -> bool:
    return shutil.which("perl") is not None


def default_index_programs(
    file_set: FileSet, perl_installed: bool | None = None
) -> set[IndexProgram]:
    """
    Index programs a build of `file_set` needs.

    Params:
        file_set: The file set to build
        perl_installed: Whether perl is available; looked up on PATH when None.
            `makeglossaries` needs perl, `makeglossaries-lite` does not

    Returns:
        The programs to run, empty when the document has no index

    Raises:
        MainFileNotFoundError: When the file set has no documents
        IndexNotReadyError: When the file set is still being indexed
    """
    main_document = file_set.main_document

    included = included_packages(file_set)
    index_options = package_options(file_set, INDEX_PACKAGES | GLOSSARY_PACKAGES)
    programs: set[IndexProgram] = set()

    if included & INDEX_PACKAGES:
        programs.add(IndexProgram.XINDY if "xindy" in index_options else IndexProgram.MAKEINDEX)

    if GLOSSARIES.name in included:
        if perl_installed is None:
            perl_installed = perl_available()
        programs.add(
            IndexProgram.MAKEGLOSSARIES if perl_installed else IndexProgram.MAKEGLOSSARIESLITE
        )
    elif GLOSSARIESEXTRA.name in included and "record" in index_options:
        programs.add(IndexProgram.BIB2GLS)

    # imakeidx lets \makeindex override the program
    options = makeindex_options(file_set)
    for option, program in _MAKEINDEX_PROGRAMS:
        if option in options:
            programs.add(program)
            break

    logger.debug("Index programs for %s: %s", main_document.path, programs)
    return programs
