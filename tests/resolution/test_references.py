"""
Tests for resolving command usages to references.
"""

import pytest

from texlens.core import TextRange
from texlens.exceptions import IndexNotReadyError
from texlens.resolution import (
    DefinitionReference,
    FileReference,
    LabelReference,
    ReferenceResolver,
    UrlReference,
)
from texlens.syntax import CommandUsage, Document, FileSet


@pytest.fixture
def resolver(registry):
    return ReferenceResolver(registry)


def values(references):
    return [reference.value for reference in references]


class TestLabelReferences:
    """Tests for label-referencing commands."""

    def test_one_reference_per_label(self, resolver):
        usage = CommandUsage.build("\\ref", "{fig:a,fig:b}", offset=30)
        references = resolver.resolve(usage)

        assert all(isinstance(reference, LabelReference) for reference in references)
        assert [reference.range for reference in references] == [TextRange(5, 5), TextRange(11, 5)]
        assert values(references) == ["fig:a", "fig:b"]

    def test_whitespace_around_labels(self, resolver):
        usage = CommandUsage.build("\\cref", "{ sec:intro , sec:end}")
        assert values(resolver.resolve(usage)) == [" sec:intro", "sec:end"]

    def test_without_required_parameter(self, resolver):
        """Test that a bare label command falls through to definition lookup."""
        assert resolver.resolve(CommandUsage.build("\\ref")) == []

    def test_empty_parameter(self, resolver):
        assert resolver.resolve(CommandUsage.build("\\ref", "{}")) == []

    def test_trailing_comma(self, resolver):
        """Test that a trailing comma does not create an empty label reference."""
        (reference,) = resolver.resolve(CommandUsage.build("\\ref", "{a,}"))
        assert reference.range == TextRange(5, 1)
        assert reference.value == "a"

    def test_user_defined_alias(self, resolver):
        """Test that a command wrapping \\ref resolves to labels too."""
        definition = CommandUsage.build("\\newcommand", "{\\figref}", "[1]", "{Figure~\\ref{#1}}")
        usage = CommandUsage.build("\\figref", "{fig:plot}", offset=50)
        file_set = FileSet([Document("main.tex", [definition, usage])])

        references = resolver.resolve(usage, file_set)

        assert len(references) == 1
        assert isinstance(references[0], LabelReference)
        assert references[0].value == "fig:plot"


class TestFileReferences:
    """Tests for commands with file arguments."""

    def test_input(self, resolver):
        usage = CommandUsage.build("\\input", "{chapters/intro}")
        (reference,) = resolver.resolve(usage)

        assert isinstance(reference, FileReference)
        assert reference.value == "chapters/intro"
        assert reference.extensions == ("tex",)
        assert reference.candidate_names() == ["chapters/intro.tex", "chapters/intro"]

    def test_comma_separated_files(self, resolver):
        usage = CommandUsage.build("\\bibliography", "{refs,extra}")
        assert values(resolver.resolve(usage)) == ["refs", "extra"]

    def test_trailing_comma_in_file_list(self, resolver):
        usage = CommandUsage.build("\\includeonly", "{ch1,}")
        assert values(resolver.resolve(usage)) == ["ch1"]

    def test_single_file_parameter_not_split(self, resolver):
        """Test that a file name may contain commas when the slot is not comma separated."""
        usage = CommandUsage.build("\\includegraphics", "[width=3cm]", "{img,v2}")
        (reference,) = resolver.resolve(usage)

        assert reference.range == TextRange(28, 6)
        assert reference.value == "img,v2"
        assert reference.default_extension == "pdf"

    def test_extension_already_present(self, resolver):
        usage = CommandUsage.build("\\includegraphics", "{plot.png}")
        (reference,) = resolver.resolve(usage)
        assert reference.candidate_names() == ["plot.png"]

    def test_non_file_slots_skipped(self, resolver):
        """Test that only the file slot of \\import produces a reference."""
        usage = CommandUsage.build("\\import", "{dir/}", "{chapter}")
        assert values(resolver.resolve(usage)) == ["chapter"]

    def test_extra_groups_use_last_file_slot(self, resolver):
        usage = CommandUsage.build("\\includeonly", "{a,b}", "{c}")
        assert values(resolver.resolve(usage)) == ["a", "b", "c"]


class TestUrlReferences:
    """Tests for URL commands."""

    def test_url(self, resolver):
        (reference,) = resolver.resolve(CommandUsage.build("\\url", "{https://ctan.org}"))
        assert isinstance(reference, UrlReference)
        assert reference.value == "https://ctan.org"

    def test_href_only_first_parameter(self, resolver):
        usage = CommandUsage.build("\\href", "{https://ctan.org}", "{CTAN}")
        assert values(resolver.resolve(usage)) == ["https://ctan.org"]


class TestDefinitionReferences:
    """Tests for the fallback reference to a command definition."""

    def test_defined_command(self, resolver):
        definition = CommandUsage.build("\\newcommand", "{\\R}", "{\\mathbb{R}}")
        usage = CommandUsage.build("\\R", offset=40)
        file_set = FileSet([Document("main.tex", [definition, usage])])

        (reference,) = resolver.resolve(usage, file_set)

        assert isinstance(reference, DefinitionReference)
        assert reference.range == TextRange(0, 2)
        assert reference.value == "\\R"
        assert reference.multi_resolve() == [definition]

    def test_undefined_command(self, resolver):
        """Test that a reference which would resolve to nothing is not returned."""
        file_set = FileSet([Document("main.tex")])
        assert resolver.resolve(CommandUsage.build("\\unknown"), file_set) == []

    def test_no_file_set(self, resolver):
        assert resolver.resolve(CommandUsage.build("\\unknown")) == []


class TestIndexNotReady:
    """Tests for resolution while the host is still indexing."""

    def test_label_lookup_propagates(self, resolver):
        file_set = FileSet([Document("main.tex")], indexed=False)
        with pytest.raises(IndexNotReadyError):
            resolver.resolve(CommandUsage.build("\\ref", "{a}"), file_set)


class TestRepeatability:
    """Tests for resolving the same usage more than once."""

    @pytest.mark.parametrize(
        "usage",
        [
            CommandUsage.build("\\ref", "{a,b}"),
            CommandUsage.build("\\input", "{chapter}"),
            CommandUsage.build("\\url", "{https://ctan.org}"),
        ],
    )
    def test_identical_results(self, resolver, usage):
        file_set = FileSet([Document("main.tex", [usage])])
        assert resolver.resolve(usage, file_set) == resolver.resolve(usage, file_set)
