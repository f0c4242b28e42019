"""
Tests for command and environment usage nodes.
"""

from texlens.core import TextRange
from texlens.syntax import (
    CommandUsage,
    EnvironmentUsage,
    OptionalParameter,
    ParameterGroup,
    ParameterText,
    RequiredParameter,
)


class TestCommandUsageBuild:
    """Tests for building usages from raw parameter text."""

    def test_parameters_are_contiguous(self):
        usage = CommandUsage.build("\\ref", "{a,b}", offset=10)
        (parameter,) = usage.parameters
        assert parameter == RequiredParameter("{a,b}", 14)
        assert usage.end_offset == 19
        assert usage.text == "\\ref{a,b}"

    def test_optional_parameters_detected(self):
        usage = CommandUsage.build("\\usepackage", "[utf8]", "{inputenc}")
        assert [type(p) for p in usage.parameters] == [OptionalParameter, RequiredParameter]
        assert usage.required_parameter(0) == "inputenc"
        assert usage.required_parameter(1) is None

    def test_without_parameters(self):
        usage = CommandUsage.build("\\maketitle", offset=5)
        assert usage.end_offset == 15
        assert usage.first_required_parameter() is None

    def test_previous_not_compared(self):
        """Test that the preceding usage does not take part in equality."""
        first = CommandUsage.build("\\newcommand")
        assert CommandUsage.build("\\foo", previous=first) == CommandUsage.build("\\foo")


class TestOptionalParameterParse:
    """Tests for splitting optional parameter content into items."""

    def test_text_and_groups(self):
        parameter = OptionalParameter.parse("[name={a,b},x]", offset=3)
        assert parameter.contents == (
            ParameterText("name="),
            ParameterGroup("a,b"),
            ParameterText(",x"),
        )
        assert parameter.text == "[name={a,b},x]"
        assert parameter.text_range == TextRange(3, 14)

    def test_nested_groups_stay_in_one_item(self):
        parameter = OptionalParameter.parse("[{a{b}}]")
        assert parameter.contents == (ParameterGroup("a{b}"),)

    def test_unbalanced_group_kept_as_text(self):
        parameter = OptionalParameter.parse("[a{b]")
        assert parameter.contents == (ParameterText("a"), ParameterText("{b"))
        assert parameter.text == "[a{b]"

    def test_escaped_brace_is_text(self):
        parameter = OptionalParameter.parse("[a\\{b]")
        assert parameter.contents == (ParameterText("a\\{b"),)

    def test_escaped_backslash_before_brace(self):
        """Test that a brace after an escaped backslash opens a group."""
        parameter = OptionalParameter.parse("[a\\\\{b}]")
        assert parameter.contents == (ParameterText("a\\\\"), ParameterGroup("b"))


class TestTextInRange:
    """Tests for looking up text by usage-relative ranges."""

    def test_name_token(self):
        usage = CommandUsage.build("\\ref", "{a}", offset=100)
        assert usage.text_in_range(TextRange(0, 4)) == "\\ref"

    def test_inside_parameter(self):
        usage = CommandUsage.build("\\cite", "[p. 3]", "{knuth,lamport}", offset=7)
        assert usage.text_in_range(TextRange(12, 5)) == "knuth"
        assert usage.text_in_range(TextRange(18, 7)) == "lamport"

    def test_spanning_tokens(self):
        usage = CommandUsage.build("\\ref", "{a}")
        assert usage.text_in_range(TextRange(2, 4)) == ""


class TestDefinitions:
    """Tests for definition detection."""

    def test_defined_command_name(self):
        definition = CommandUsage.build("\\newcommand", "{\\figref}", "[1]", "{Figure~\\ref{#1}}")
        assert definition.is_command_definition()
        assert definition.defined_command_name() == "\\figref"

    def test_not_a_command_token(self):
        definition = CommandUsage.build("\\newcommand", "{foo bar}", "{x}")
        assert definition.defined_command_name() is None

    def test_environment_definition(self):
        definition = CommandUsage.build("\\renewenvironment", "{proof}", "{}", "{}")
        assert definition.is_environment_definition()
        assert not definition.is_command_definition()
        assert definition.is_definition()

    def test_defines_named_command(self):
        definition = CommandUsage.build("\\newcommand", "{\\eqref}", "{x}")
        usage = CommandUsage.build("\\eqref", offset=12, previous=definition)
        assert definition.defines(usage)
        assert not definition.defines(CommandUsage.build("\\ref"))

    def test_defines_without_braces(self):
        """Test `\\newcommand\\foo{...}`, where the next usage is the defined command."""
        definition = CommandUsage.build("\\newcommand")
        usage = CommandUsage.build("\\eqref", "{x}", offset=11, previous=definition)
        assert definition.defines(usage)

    def test_regular_command_defines_nothing(self):
        previous = CommandUsage.build("\\textbf", "{\\eqref}")
        assert not previous.defines(CommandUsage.build("\\eqref", offset=8))


class TestEnvironmentUsage:
    """Tests for environment usages."""

    def test_name_range_after_begin(self):
        environment = EnvironmentUsage("align", offset=20)
        assert environment.name_range == TextRange(7, 5)
        assert environment.name_range.substring("\\begin{align}") == "align"
