"""
In-memory file set.

A `FileSet` is a document together with every file it transitively includes,
as handed over by the host's indexer. It answers the syntax-tree queries the
analyses need. While the host is still indexing (`indexed=False`) every query
raises `IndexNotReadyError` so callers can tell "not yet" from "nothing".
"""

from dataclasses import dataclass, field

from texlens.exceptions import IndexNotReadyError, MainFileNotFoundError
from texlens.syntax.nodes import CommandUsage, EnvironmentUsage


@dataclass
class Document:
    """
    A single parsed LaTeX file.

    Params:
        path: File path, used as identity within the file set
        commands: Command usages, including usages nested in parameters
        environments: Environment usages
        text: Source text, if the host provides it
    """

    path: str
    commands: list[CommandUsage] = field(default_factory=list)
    environments: list[EnvironmentUsage] = field(default_factory=list)
    text: str | None = None

    def commands_in_file(self) -> list[CommandUsage]:
        """Command usages in source order."""
        return sorted(self.commands, key=lambda command: command.offset)

    def environments_in_file(self) -> list[EnvironmentUsage]:
        """Environment usages in source order."""
        return sorted(self.environments, key=lambda environment: environment.offset)


@dataclass
class FileSet:
    """
    The documents that make up one LaTeX project, main file first.

    Params:
        documents: Parsed documents; the first one is the main file
        indexed: False while the host is still building its indices
        revision: Bumped by the host whenever any document is re-parsed
    """

    documents: list[Document] = field(default_factory=list)
    indexed: bool = True
    revision: int = 0

    def _require_index(self, operation: str) -> None:
        if not self.indexed:
            raise IndexNotReadyError(operation)

    @property
    def main_document(self) -> Document:
        """
        The root document of the file set.

        Raises:
            MainFileNotFoundError: When the file set is empty
        """
        if not self.documents:
            raise MainFileNotFoundError()
        return self.documents[0]

    def commands_in_file_set(self) -> list[CommandUsage]:
        """All command usages, grouped by document and in source order within each."""
        self._require_index("commands_in_file_set")
        return [
            command
            for document in self.documents
            for command in document.commands_in_file()
        ]

    def environments_in_file_set(self) -> list[EnvironmentUsage]:
        self._require_index("environments_in_file_set")
        return [
            environment
            for document in self.documents
            for environment in document.environments_in_file()
        ]

    def definitions_and_redefinitions(self) -> list[CommandUsage]:
        """All usages of definition commands (`\\newcommand`, `\\newenvironment`, ...)."""
        return [
            command for command in self.commands_in_file_set() if command.is_definition()
        ]

    def command_definitions(self, name: str) -> list[CommandUsage]:
        """
        Find the usages that define command `name`.

        Params:
            name: Command name including the leading backslash

        Returns:
            Defining usages in file-set order; empty when `name` is never defined
        """
        definitions = []
        for command in self.commands_in_file_set():
            if command.defined_command_name() == name:
                definitions.append(command)
            elif (
                command.previous is not None
                and command.name == name
                and not command.previous.required_parameters()
                and command.previous.defines(command)
            ):
                # \newcommand\foo{...}: point at the definition command
                definitions.append(command.previous)
        return definitions

    def defined_environments(self) -> set[str]:
        """Names of environments defined or redefined anywhere in the file set."""
        defined = set()
        for command in self.definitions_and_redefinitions():
            if not command.is_environment_definition():
                continue
            name = command.required_parameter(0)
            if name:
                defined.add(name)
        return defined
