"""
Tests for included packages and conflict-aware package insertion.
"""

from texlens.analysis import (
    Advisory,
    ImportPackageFix,
    included_packages,
    insert_usepackage,
    package_names,
)
from texlens.registry import DEFAULT
from texlens.registry.packages import AMSMATH, GRAPHICX, NATBIB, Package
from texlens.syntax import CommandUsage, Document, FileSet

PREAMBLE = "\\documentclass{article}\n\\usepackage{amsmath}\n"
BODY = "\\begin{document}\n\\includegraphics{img}\n\\end{document}\n"


def parsed(text):
    """A document holding the usages of `text` that the tests rely on."""
    commands = []
    for name, parameter in [
        ("\\documentclass", "{article}"),
        ("\\usepackage", "{amsmath}"),
        ("\\usepackage", "{biblatex}"),
        ("\\usepackage", "{natbib}"),
        ("\\includegraphics", "{img}"),
        ("\\citep", "{key}"),
        ("\\addbibresource", "{refs.bib}"),
    ]:
        offset = text.find(name + parameter)
        if offset >= 0:
            commands.append(CommandUsage.build(name, parameter, offset=offset))
    return Document("main.tex", commands, text=text)


class TestIncludedPackages:
    """Tests for collecting imported package names."""

    def test_all_import_commands(self, usepackage):
        document = Document(
            "main.tex",
            [
                usepackage("amsmath", "amssymb"),
                usepackage("hyperref", options="[hidelinks]", offset=30),
                usepackage("xcolor", command="\\RequirePackage", offset=60),
                CommandUsage.build("\\input", "{chapter}", offset=90),
            ],
        )
        assert included_packages(FileSet([document])) == {"amsmath", "amssymb", "hyperref", "xcolor"}

    def test_whitespace_and_order(self, usepackage):
        document = Document("main.tex", [usepackage(" amsmath ", "graphicx", "amsmath")])
        assert package_names(document) == ["amsmath", "graphicx", "amsmath"]

    def test_whole_file_set(self, usepackage):
        main = Document("main.tex", [usepackage("amsmath")])
        chapter = Document("chapter.tex", [usepackage("listings")])
        assert included_packages(FileSet([main, chapter])) == {"amsmath", "listings"}


class TestInsertUsepackage:
    """Tests for inserting package imports."""

    def test_after_last_import(self, editor, graph):
        document = parsed(PREAMBLE + BODY)

        assert insert_usepackage(document, editor, GRAPHICX, {"amsmath"}, graph)

        assert document.text == (
            "\\documentclass{article}\n\\usepackage{amsmath}\n\\usepackage{graphicx}\n" + BODY
        )

    def test_after_documentclass(self, editor, graph):
        document = parsed("\\documentclass{article}\n" + BODY)

        assert insert_usepackage(document, editor, GRAPHICX, set(), graph)

        assert document.text == "\\documentclass{article}\n\\usepackage{graphicx}\n" + BODY

    def test_at_start(self, editor, graph):
        document = parsed("\\includegraphics{img}\n")

        assert insert_usepackage(document, editor, GRAPHICX, set(), graph)

        assert document.text == "\\usepackage{graphicx}\n\\includegraphics{img}\n"

    def test_with_options(self, editor, graph):
        document = parsed("")
        insert_usepackage(document, editor, Package("inputenc").with_options("utf8"), set(), graph)
        assert document.text == "\\usepackage[utf8]{inputenc}\n"

    def test_already_included(self, editor, graph):
        document = parsed(PREAMBLE)
        assert insert_usepackage(document, editor, AMSMATH, {"amsmath"}, graph)
        assert editor.edits == []

    def test_default_package(self, editor, graph):
        assert insert_usepackage(parsed(PREAMBLE), editor, DEFAULT, set(), graph)
        assert editor.edits == []

    def test_conflicting_package(self, editor, graph):
        document = parsed("\\usepackage{biblatex}\n")
        assert not insert_usepackage(document, editor, NATBIB, {"biblatex"}, graph)
        assert document.text == "\\usepackage{biblatex}\n"

    def test_document_without_text(self, editor, graph):
        """Test that edits are recorded when the host keeps the text itself."""
        document = Document("main.tex")
        insert_usepackage(document, editor, GRAPHICX, set(), graph)
        assert editor.edits == [("main.tex", 0, "\\usepackage{graphicx}\n")]
        assert document.text is None


class TestImportPackageFix:
    """Tests for applying fixes of missing-import reports."""

    def test_fix_inserts_import(self, analyzer, editor):
        document = parsed(PREAMBLE + BODY)
        file_set = FileSet([document])
        (report,) = analyzer.analyze(file_set)

        assert report.fixes[0].family_name == "Add import for package 'graphicx'"
        assert report.fixes[0].apply(file_set, editor)
        assert "\\usepackage{amsmath}\n\\usepackage{graphicx}\n" in document.text
        assert editor.advisories == []

    def test_conflict_leaves_document_unchanged(self, analyzer, editor):
        """Test that natbib is not inserted next to biblatex and the user is told why."""
        text = "\\usepackage{biblatex}\n\\citep{key}\n"
        document = parsed(text)
        file_set = FileSet([document])
        (report,) = analyzer.analyze(file_set)

        assert report.fixes == (ImportPackageFix(NATBIB),)
        assert not report.fixes[0].apply(file_set, editor)

        assert document.text == text
        assert editor.edits == []
        assert editor.advisories == [
            Advisory(
                "Conflicting package detected",
                "The package natbib was not inserted because a conflicting package was detected.",
            )
        ]

    def test_fix_inserts_into_main_document(self, analyzer, editor):
        main = parsed(PREAMBLE)
        chapter = parsed(BODY)
        chapter.path = "chapter.tex"
        file_set = FileSet([main, chapter])
        (report,) = analyzer.analyze(file_set, document=chapter)

        report.fixes[0].apply(file_set, editor)

        assert main.text == PREAMBLE.replace("{amsmath}\n", "{amsmath}\n\\usepackage{graphicx}\n")
        assert chapter.text == BODY

    def test_conflicting_fix_keeps_included_packages(self, analyzer, editor):
        """Test that biblatex is not inserted when natbib is imported."""
        text = "\\usepackage{natbib}\n\\addbibresource{refs.bib}\n"
        document = parsed(text)
        file_set = FileSet([document])
        (report,) = analyzer.analyze(file_set)

        assert not report.fixes[0].apply(file_set, editor)

        assert included_packages(file_set) == {"natbib"}
        assert document.text == text
        assert len(editor.advisories) == 1
