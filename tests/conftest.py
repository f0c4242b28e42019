"""
Shared test fixtures and utilities for the texlens test suite.
"""

import pytest

from texlens.analysis import BufferEditor, MissingImportAnalyzer
from texlens.registry import SchemaRegistry, builtin_package_graph
from texlens.syntax import CommandUsage, Document, FileSet


@pytest.fixture
def registry():
    """Registry with the built-in command and environment tables."""
    return SchemaRegistry.builtin()


@pytest.fixture
def graph():
    """Package graph with the built-in loads and conflicts."""
    return builtin_package_graph()


@pytest.fixture
def analyzer(registry, graph):
    return MissingImportAnalyzer(registry, graph)


@pytest.fixture
def editor():
    return BufferEditor()


@pytest.fixture
def make_file_set():
    """Factory for single-document file sets.

    Usage:
        def test_something(make_file_set):
            file_set = make_file_set(CommandUsage.build("\\\\sqrt", "{2}"))
    """

    def _make(*commands, environments=(), text=None, path="main.tex", indexed=True):
        document = Document(path, list(commands), list(environments), text)
        return FileSet([document], indexed=indexed)

    return _make


@pytest.fixture
def usepackage():
    """Factory for `\\usepackage` usages.

    Usage:
        usepackage("amsmath", "amssymb", options="[fleqn]", offset=10)
    """

    def _make(*names, options=None, offset=0, command="\\usepackage"):
        parameters = [options] if options else []
        parameters.append("{" + ",".join(names) + "}")
        return CommandUsage.build(command, *parameters, offset=offset)

    return _make
