"""
Loading extra registry tables from YAML.

Projects and hosts can describe commands, environments and package
relations the built-in tables do not know about:

    commands:
      - name: mycite
        dependency: mybib
        arguments:
          - kind: optional
          - kind: file
            extensions: [bib]
    environments:
      - name: theorem
        dependency: amsthm
    packages:
      loads:
        mybib: [biblatex]
      conflicts:
        - [mybib, natbib]

Entries are validated with pydantic before they become registry objects.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from texlens.core.types import ConfigDict
from texlens.exceptions import ErrorContext, RegistryError, RegistryLoadError
from texlens.registry import builtin_package_graph
from texlens.registry.arguments import (
    Argument,
    OptionalArgument,
    RequiredArgument,
    RequiredFileArgument,
)
from texlens.registry.commands import CommandSchema, EnvironmentSchema, SchemaRegistry
from texlens.registry.packages import DEFAULT, Package, PackageGraph

logger = logging.getLogger(__name__)


def _package(name: str | None) -> Package | None:
    """Map a table dependency to a package; `default` and empty mean DEFAULT."""
    if name is None:
        return None
    if name in ("", "default"):
        return DEFAULT
    return Package(name)


class ArgumentEntry(BaseModel):
    """One argument slot of a command entry."""

    kind: Literal["required", "optional", "file"] = "required"
    name: str = ""
    comma_separated: bool = True
    extensions: list[str] = Field(default_factory=list)
    default_extension: str = ""

    @field_validator("extensions")
    @classmethod
    def strip_dots(cls, extensions: list[str]) -> list[str]:
        return [extension.lstrip(".") for extension in extensions]

    def to_argument(self) -> Argument:
        if self.kind == "optional":
            return OptionalArgument(self.name)
        if self.kind == "file":
            options = {"default_extension": self.default_extension} if self.default_extension else {}
            return RequiredFileArgument(
                self.name,
                comma_separated=self.comma_separated,
                extensions=tuple(self.extensions),
                **options,
            )
        return RequiredArgument(self.name, comma_separated=self.comma_separated)


class CommandEntry(BaseModel):
    """A command table entry. `dependency: null` means the package is unknown."""

    name: str
    arguments: list[ArgumentEntry] = Field(default_factory=list)
    dependency: str | None = "default"

    @field_validator("name")
    @classmethod
    def name_without_backslash(cls, name: str) -> str:
        name = name.lstrip("\\")
        if not name:
            raise ValueError("command name must not be empty")
        return name

    def to_schema(self) -> CommandSchema:
        return CommandSchema(
            self.name,
            tuple(argument.to_argument() for argument in self.arguments),
            _package(self.dependency),
        )


class EnvironmentEntry(BaseModel):
    """An environment table entry."""

    name: str
    dependency: str | None = "default"

    def to_schema(self) -> EnvironmentSchema:
        return EnvironmentSchema(self.name, _package(self.dependency))


class PackageGraphEntry(BaseModel):
    """Package relations: loader -> loaded packages, and conflict groups."""

    loads: dict[str, list[str]] = Field(default_factory=dict)
    conflicts: list[list[str]] = Field(default_factory=list)

    def to_graph(self) -> PackageGraph:
        return PackageGraph(
            {
                Package(loader): [Package(name) for name in loaded]
                for loader, loaded in self.loads.items()
            },
            [[Package(name) for name in group] for group in self.conflicts],
        )


class RegistryTables(BaseModel):
    """Top-level structure of a registry YAML file."""

    commands: list[CommandEntry] = Field(default_factory=list)
    environments: list[EnvironmentEntry] = Field(default_factory=list)
    packages: PackageGraphEntry = Field(default_factory=PackageGraphEntry)


def parse_registry_tables(
    config: ConfigDict, source: str = "<dict>"
) -> tuple[list[CommandSchema], list[EnvironmentSchema], PackageGraph]:
    """
    Validate raw table data and convert it into registry objects.

    Params:
        config: Parsed YAML (or equivalent) mapping
        source: Where the data came from, for error messages

    Returns:
        Command schemas, environment schemas and the package graph

    Raises:
        RegistryLoadError: When the data does not match the table structure or
            an entry violates a registry invariant
    """
    try:
        tables = RegistryTables.model_validate(config)
    except ValidationError as e:
        raise RegistryLoadError(source, str(e), ErrorContext(file=source))

    commands = []
    for entry in tables.commands:
        try:
            commands.append(entry.to_schema())
        except RegistryError as e:
            raise RegistryLoadError(
                entry.name,
                e.reason,
                ErrorContext(file=source, table_key="commands", command_text=entry.name),
            )

    environments = [entry.to_schema() for entry in tables.environments]
    logger.debug(
        "Loaded %d commands and %d environments from %s",
        len(commands),
        len(environments),
        source,
    )
    return commands, environments, tables.packages.to_graph()


def load_registry_tables(
    yaml_path: str | Path,
    registry: SchemaRegistry | None = None,
    graph: PackageGraph | None = None,
) -> tuple[SchemaRegistry, PackageGraph]:
    """
    Read registry tables from a YAML file and merge them into a registry.

    Params:
        yaml_path: Path to the YAML file
        registry: Registry to extend; a built-in registry when omitted
        graph: Package graph to extend; the built-in graph when omitted

    Returns:
        The extended registry and package graph

    Raises:
        RegistryLoadError: When the file cannot be read or is invalid
    """
    import yaml

    path = Path(yaml_path)
    try:
        with path.open() as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise RegistryLoadError(str(path), str(e), ErrorContext(file=str(path)))

    if not isinstance(config, dict):
        raise RegistryLoadError(
            str(path), "top level must be a mapping", ErrorContext(file=str(path))
        )

    commands, environments, extra_graph = parse_registry_tables(config, str(path))

    if registry is None:
        registry = SchemaRegistry.builtin()
    if graph is None:
        graph = builtin_package_graph()

    for schema in commands:
        registry.register_command(schema)
    for schema in environments:
        registry.register_environment(schema)
    return registry, graph.merged(extra_graph)
