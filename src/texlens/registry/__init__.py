"""
Command, environment and package registry.

This package provides the argument schemas of known commands, the packages
commands and environments depend on, the package graph and the built-in
tables that populate them.
"""

from texlens.registry.arguments import (
    Argument,
    OptionalArgument,
    RequiredArgument,
    RequiredFileArgument,
)
from texlens.registry.commands import CommandSchema, EnvironmentSchema, SchemaRegistry
from texlens.registry.packages import DEFAULT, Package, PackageGraph


def builtin_package_graph() -> PackageGraph:
    """Package graph of the built-in tables."""
    from texlens.registry.tables import CONFLICTING_PACKAGES, PACKAGE_LOADS

    return PackageGraph(PACKAGE_LOADS, CONFLICTING_PACKAGES)


__all__ = [
    "Argument",
    "CommandSchema",
    "DEFAULT",
    "EnvironmentSchema",
    "OptionalArgument",
    "Package",
    "PackageGraph",
    "RequiredArgument",
    "RequiredFileArgument",
    "SchemaRegistry",
    "builtin_package_graph",
]
