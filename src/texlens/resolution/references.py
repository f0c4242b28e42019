"""
Symbolic references exposed by command usages.

For `\\ref{fig:a,fig:b}` the references are the two labels, for
`\\input{chapter}` the included file, for `\\url{...}` the URL and for any
other command the definition of the command itself. Navigation and
autocompletion in the host consume these references.
"""

import logging
from dataclasses import dataclass, field

from texlens.core.text_range import TextRange
from texlens.parsing.splitter import extract_sub_parameter_ranges
from texlens.registry.arguments import RequiredFileArgument
from texlens.registry.commands import SchemaRegistry
from texlens.registry.tables import LABEL_REFERENCE_COMMANDS, URL_COMMANDS
from texlens.resolution.aliases import AliasRegistry
from texlens.syntax.file_set import FileSet
from texlens.syntax.nodes import CommandUsage, RequiredParameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SymbolicReference:
    """
    A navigable link from part of a command usage to something else.

    Params:
        element: The command usage owning the reference
        range: Range of the referencing text, relative to the usage start
    """

    element: CommandUsage
    range: TextRange

    @property
    def value(self) -> str:
        """The referencing text, e.g. the label name."""
        return self.element.text_in_range(self.range)


@dataclass(frozen=True)
class LabelReference(SymbolicReference):
    """Reference to a `\\label`."""

    pass


@dataclass(frozen=True)
class FileReference(SymbolicReference):
    """Reference to an included file."""

    extensions: tuple[str, ...] = ()
    default_extension: str = ""

    def candidate_names(self) -> list[str]:
        """
        File names the reference may point to.

        A target that already ends in an allowed extension is taken as is;
        otherwise the default extension is tried first, then the bare name.
        """
        target = self.value.strip()
        if not target:
            return []
        basename = target.rsplit("/", 1)[-1]
        if "." in basename and basename.rsplit(".", 1)[1] in self.extensions:
            return [target]
        if not self.default_extension:
            return [target]
        return [f"{target}.{self.default_extension}", target]


@dataclass(frozen=True)
class UrlReference(SymbolicReference):
    """Reference to a web location."""

    pass


@dataclass(frozen=True)
class DefinitionReference(SymbolicReference):
    """Reference from a command usage to the definition(s) of that command."""

    file_set: FileSet | None = field(default=None, compare=False, repr=False)

    @property
    def command_name(self) -> str:
        return self.element.name

    def multi_resolve(self) -> list[CommandUsage]:
        """
        Definitions of the command in the file set.

        Raises:
            IndexNotReadyError: When the file set is still being indexed
        """
        if self.file_set is None:
            return []
        return self.file_set.command_definitions(self.command_name)


class ReferenceResolver:
    """
    Resolves command usages to the references they expose.

    Params:
        registry: Command schemas, used to find file arguments
        aliases: Alias context, refreshed for label references when stale
        label_commands: Base set of label-referencing commands
        url_commands: Commands whose first parameter is a URL
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        aliases: AliasRegistry | None = None,
        label_commands: frozenset[str] = LABEL_REFERENCE_COMMANDS,
        url_commands: frozenset[str] = URL_COMMANDS,
    ):
        self.registry = registry
        self.aliases = aliases if aliases is not None else AliasRegistry()
        self.label_commands = frozenset(label_commands)
        self.url_commands = frozenset(url_commands)

    def label_reference_commands(self, file_set: FileSet | None = None) -> frozenset[str]:
        """All label-referencing commands, including user-defined aliases."""
        if file_set is not None:
            return self.aliases.update_aliases(self.label_commands, file_set)
        aliases = set(self.label_commands)
        for command in self.label_commands:
            aliases |= self.aliases.get_aliases(command)
        return frozenset(aliases)

    def resolve(self, usage: CommandUsage, file_set: FileSet | None = None) -> list[SymbolicReference]:
        """
        References exposed by `usage`.

        The first matching rule wins:
        1. label-referencing command with a required parameter: one label
           reference per comma-separated value,
        2. command with file arguments: one file reference per file,
        3. URL command with a required parameter: one URL reference per value,
        4. otherwise a reference to the command's definition, only if it has one.

        Params:
            usage: The command usage
            file_set: File set the usage belongs to, for aliases and definitions

        Returns:
            References in source order; empty when nothing can be resolved

        Raises:
            IndexNotReadyError: When the file set is still being indexed
        """
        first_parameter = usage.first_required_parameter()

        if first_parameter is not None and usage.name in self.label_reference_commands(file_set):
            return self._sub_parameter_references(usage, first_parameter, LabelReference)

        file_references = self._file_references(usage)
        if first_parameter is not None and file_references:
            return file_references

        if first_parameter is not None and usage.name in self.url_commands:
            return self._sub_parameter_references(usage, first_parameter, UrlReference)

        reference = DefinitionReference(
            usage, TextRange(0, len(usage.name)), file_set=file_set
        )
        # A reference that resolves to nothing would show up as broken
        if not reference.multi_resolve():
            logger.debug("No definition found for %s", usage.name)
            return []
        return [reference]

    def _sub_parameter_references(
        self,
        usage: CommandUsage,
        parameter: RequiredParameter,
        reference_type: type[SymbolicReference],
    ) -> list[SymbolicReference]:
        delta = parameter.offset - usage.offset
        return [
            reference_type(usage, sub_range.shift_right(delta))
            for sub_range in extract_sub_parameter_ranges(parameter)
        ]

    def _file_references(self, usage: CommandUsage) -> list[SymbolicReference]:
        # Overloads share a name; the first registered one decides
        schema = self.registry.first(usage.name)
        if schema is None:
            return []

        required_arguments = schema.required_arguments()
        # Extra groups beyond the schema, as in \includeonly{a}{b}, are files too
        trailing_argument = schema.last_file_argument()

        references: list[SymbolicReference] = []
        for index, parameter in enumerate(usage.required_parameters()):
            if index < len(required_arguments):
                argument = required_arguments[index]
            else:
                argument = trailing_argument
            if not isinstance(argument, RequiredFileArgument):
                continue

            if argument.comma_separated:
                delta = parameter.offset - usage.offset
                ranges = [
                    sub_range.shift_right(delta)
                    for sub_range in extract_sub_parameter_ranges(parameter)
                ]
            else:
                ranges = [parameter.text_range.shrink(1).shift_left(usage.offset)]

            references.extend(
                FileReference(
                    usage,
                    sub_range,
                    extensions=argument.extensions,
                    default_extension=argument.default_extension,
                )
                for sub_range in ranges
            )
        return references
