"""
Command and environment schemas, and the registry that holds them.

Several schemas may share a command name (for example `\\mathscr`, provided by
both mathrsfs and euscript). The registry keeps all of them in registration
order; analyses decide how to treat the alternatives.
"""

import logging
from collections.abc import Iterable

from attrs import field, frozen

from texlens.registry.arguments import (
    Argument,
    RequiredArgument,
    RequiredFileArgument,
)
from texlens.registry.packages import DEFAULT, Package

logger = logging.getLogger(__name__)


def _command_key(name: str) -> str:
    return name[1:] if name.startswith("\\") else name


@frozen
class CommandSchema:
    """
    One registered definition of a command.

    Params:
        name: Command name without the leading backslash
        arguments: Ordered argument slots
        dependency: Package providing the command; None when unknown
    """

    name: str = field(converter=_command_key)
    arguments: tuple[Argument, ...] = field(default=(), converter=tuple)
    dependency: Package | None = DEFAULT

    @property
    def command(self) -> str:
        """The command as written in a document, with its backslash."""
        return "\\" + self.name

    def required_arguments(self) -> list[RequiredArgument]:
        return [arg for arg in self.arguments if isinstance(arg, RequiredArgument)]

    def last_file_argument(self) -> RequiredFileArgument | None:
        for argument in reversed(self.required_arguments()):
            if isinstance(argument, RequiredFileArgument):
                return argument
        return None


@frozen
class EnvironmentSchema:
    """A registered environment and the package providing it."""

    name: str
    dependency: Package | None = DEFAULT


class SchemaRegistry:
    """Registry of command and environment schemas.

    Filled once at startup, from the built-in tables and optionally from
    user-supplied tables, and only read afterwards.

    Lookups accept command names with or without the leading backslash.
    """

    def __init__(
        self,
        commands: Iterable[CommandSchema] = (),
        environments: Iterable[EnvironmentSchema] = (),
    ):
        self._commands: dict[str, list[CommandSchema]] = {}
        self._environments: dict[str, EnvironmentSchema] = {}
        for schema in commands:
            self.register_command(schema)
        for schema in environments:
            self.register_environment(schema)

    @classmethod
    def builtin(cls) -> "SchemaRegistry":
        """Registry pre-populated with the built-in command and environment tables."""
        from texlens.registry.tables import BUILTIN_COMMANDS, BUILTIN_ENVIRONMENTS

        return cls(BUILTIN_COMMANDS, BUILTIN_ENVIRONMENTS)

    def register_command(self, schema: CommandSchema) -> None:
        """
        Add a command schema.

        Registering the exact same schema twice is a no-op; a different schema
        for an existing name becomes an additional overload.

        Params:
            schema: The schema to add
        """
        overloads = self._commands.setdefault(schema.name, [])
        if schema in overloads:
            return
        if overloads:
            logger.debug(
                "Registering overload %d of %s", len(overloads) + 1, schema.command
            )
        overloads.append(schema)

    def register_environment(self, schema: EnvironmentSchema) -> None:
        """Add an environment schema, replacing an existing one of the same name."""
        if schema.name in self._environments:
            logger.debug("Replacing environment schema %s", schema.name)
        self._environments[schema.name] = schema

    def lookup(self, name: str) -> tuple[CommandSchema, ...]:
        """All schemas registered for command `name`, in registration order."""
        return tuple(self._commands.get(_command_key(name), ()))

    def first(self, name: str) -> CommandSchema | None:
        """The first registered schema for `name`, used where one must be picked."""
        overloads = self._commands.get(_command_key(name))
        return overloads[0] if overloads else None

    def environment(self, name: str) -> EnvironmentSchema | None:
        return self._environments.get(name)

    def dependencies(self, name: str) -> list[Package]:
        """
        Distinct known dependencies over all overloads of `name`.

        Params:
            name: Command name, with or without backslash

        Returns:
            Packages in registration order; schemas without a dependency are skipped
        """
        dependencies: list[Package] = []
        for schema in self.lookup(name):
            if schema.dependency is not None and schema.dependency not in dependencies:
                dependencies.append(schema.dependency)
        return dependencies
