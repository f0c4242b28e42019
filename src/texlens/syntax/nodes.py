"""
Syntax tree nodes consumed by texlens.

The tree itself is produced by an external LaTeX parser. These classes are
the query surface texlens relies on: command usages with their ordered
parameters, and environment usages. Nodes are immutable snapshots; a host
creates new ones when a document is re-parsed.
"""

from dataclasses import dataclass, field

from texlens.core.text_range import TextRange, is_escaped, strip_group
from texlens.registry.tables import (
    COMMAND_DEFINITIONS,
    DEFINITIONS,
    ENVIRONMENT_DEFINITIONS,
)


@dataclass(frozen=True)
class ParameterText:
    """Plain text inside an optional parameter, e.g. `name=` in `[name={v}]`."""

    text: str


@dataclass(frozen=True)
class ParameterGroup:
    """A braced group inside an optional parameter; `text` excludes the braces."""

    text: str


OptionalContent = ParameterText | ParameterGroup


@dataclass(frozen=True)
class RequiredParameter:
    """
    A required (braced) parameter of a command usage.

    Params:
        text: Raw parameter text including the enclosing braces
        offset: Absolute source offset of the opening brace
    """

    text: str
    offset: int

    @property
    def content(self) -> str:
        return strip_group(self.text)

    @property
    def text_range(self) -> TextRange:
        return TextRange(self.offset, len(self.text))


@dataclass(frozen=True)
class OptionalParameter:
    """
    An optional (bracketed) parameter of a command usage.

    Params:
        contents: Ordered text and group items between the brackets
        offset: Absolute source offset of the opening bracket
    """

    contents: tuple[OptionalContent, ...]
    offset: int

    @property
    def text(self) -> str:
        inner = "".join(
            f"{{{item.text}}}" if isinstance(item, ParameterGroup) else item.text
            for item in self.contents
        )
        return f"[{inner}]"

    @property
    def text_range(self) -> TextRange:
        return TextRange(self.offset, len(self.text))

    @classmethod
    def parse(cls, text: str, offset: int = 0) -> "OptionalParameter":
        """
        Build an optional parameter from its raw `[...]` text.

        Top-level braced groups become `ParameterGroup` items, everything else
        is kept as `ParameterText`.

        Params:
            text: Raw parameter text including the brackets
            offset: Absolute source offset of the opening bracket

        Returns:
            OptionalParameter with its content items in source order
        """
        interior = strip_group(text)
        contents: list[OptionalContent] = []
        buffer = ""
        depth = 0
        group_start = 0
        for index, char in enumerate(interior):
            escaped = is_escaped(interior, index)
            if char == "{" and not escaped:
                if depth == 0:
                    if buffer:
                        contents.append(ParameterText(buffer))
                        buffer = ""
                    group_start = index + 1
                depth += 1
                continue
            if char == "}" and not escaped and depth > 0:
                depth -= 1
                if depth == 0:
                    contents.append(ParameterGroup(interior[group_start:index]))
                continue
            if depth == 0:
                buffer += char
        if depth > 0:
            # Unbalanced group, keep the remainder as text
            buffer += "{" + interior[group_start:]
        if buffer:
            contents.append(ParameterText(buffer))
        return cls(contents=tuple(contents), offset=offset)


Parameter = RequiredParameter | OptionalParameter


@dataclass(frozen=True)
class CommandUsage:
    """
    One occurrence of a LaTeX command with its supplied parameters.

    Params:
        name: Command token including the leading backslash, e.g. `\\ref`
        offset: Absolute source offset of the command token
        parameters: Ordered required and optional parameters as written
        previous: Immediately preceding command usage in the same scope
        file: Path of the file containing the usage
    """

    name: str
    offset: int = 0
    parameters: tuple[Parameter, ...] = ()
    previous: "CommandUsage | None" = field(default=None, compare=False, repr=False)
    file: str | None = None

    @classmethod
    def build(
        cls,
        name: str,
        *parameters: str,
        offset: int = 0,
        previous: "CommandUsage | None" = None,
        file: str | None = None,
    ) -> "CommandUsage":
        """
        Create a usage from raw parameter strings written right after the name.

        Parameters starting with `[` are optional, everything else is required.
        Offsets are computed as if the usage were written contiguously, e.g.
        `CommandUsage.build("\\\\ref", "{a,b}", offset=10)` places `{a,b}` at 14.

        Params:
            name: Command token including the leading backslash
            parameters: Raw parameter texts including their delimiters
            offset: Absolute source offset of the command token
            previous: Immediately preceding command usage
            file: Path of the containing file

        Returns:
            The command usage
        """
        position = offset + len(name)
        built: list[Parameter] = []
        for raw in parameters:
            if raw.startswith("["):
                built.append(OptionalParameter.parse(raw, position))
            else:
                built.append(RequiredParameter(raw, position))
            position += len(raw)
        return cls(
            name=name,
            offset=offset,
            parameters=tuple(built),
            previous=previous,
            file=file,
        )

    @property
    def text(self) -> str:
        return self.name + "".join(parameter.text for parameter in self.parameters)

    @property
    def end_offset(self) -> int:
        if not self.parameters:
            return self.offset + len(self.name)
        return max(parameter.text_range.end for parameter in self.parameters)

    @property
    def text_range(self) -> TextRange:
        return TextRange.between(self.offset, self.end_offset)

    def text_in_range(self, text_range: TextRange) -> str:
        """
        Source text covered by a range relative to the start of this usage.

        Parameters may be separated by whitespace the usage does not store,
        so the text is looked up in the name token or in the one parameter
        containing the range.

        Params:
            text_range: Range relative to `offset`

        Returns:
            The covered text, or an empty string when the range spans tokens
        """
        absolute = text_range.shift_right(self.offset)
        if absolute.end <= self.offset + len(self.name):
            return text_range.substring(self.name)
        for parameter in self.parameters:
            if parameter.text_range.contains(absolute):
                return absolute.shift_left(parameter.offset).substring(parameter.text)
        return ""

    def required_parameters(self) -> list[RequiredParameter]:
        return [p for p in self.parameters if isinstance(p, RequiredParameter)]

    def optional_parameters(self) -> list[OptionalParameter]:
        return [p for p in self.parameters if isinstance(p, OptionalParameter)]

    def first_required_parameter(self) -> RequiredParameter | None:
        required = self.required_parameters()
        return required[0] if required else None

    def required_parameter(self, index: int) -> str | None:
        """Return the trimmed content of the required parameter at `index`, if any."""
        required = self.required_parameters()
        if index >= len(required):
            return None
        return required[index].content.strip()

    def is_command_definition(self) -> bool:
        return self.name in COMMAND_DEFINITIONS

    def is_environment_definition(self) -> bool:
        return self.name in ENVIRONMENT_DEFINITIONS

    def is_definition(self) -> bool:
        return self.name in DEFINITIONS

    def defined_command_name(self) -> str | None:
        """
        Name of the command this definition defines.

        For `\\newcommand{\\foo}{...}` this is `\\foo`. Returns None when this
        usage is not a command definition, when it has no required parameters
        (`\\newcommand\\foo`, where the defined command is the next usage), or
        when the first required parameter is not a single command token.
        """
        if not self.is_command_definition():
            return None
        first = self.required_parameter(0)
        if not first or not first.startswith("\\"):
            return None
        if any(char.isspace() or char in "{}" for char in first):
            return None
        return first

    def defines(self, usage: "CommandUsage") -> bool:
        """
        Check whether `usage` is the command being defined by this usage.

        Only the usage itself is inspected, so callers pass the usage that
        immediately follows a definition.
        """
        if not self.is_command_definition():
            return False
        if not self.required_parameters():
            # \newcommand\foo{...}: the defined command is the forced first parameter
            return usage.offset >= self.end_offset
        return self.defined_command_name() == usage.name


@dataclass(frozen=True)
class EnvironmentUsage:
    """
    One `\\begin{name}...\\end{name}` environment.

    Params:
        name: Environment name
        offset: Absolute source offset of `\\begin`
        file: Path of the containing file
    """

    name: str
    offset: int = 0
    file: str | None = None

    # Length of "\begin{"
    NAME_OFFSET = 7

    @property
    def name_range(self) -> TextRange:
        """Range of the environment name relative to the environment start."""
        return TextRange(self.NAME_OFFSET, len(self.name))
