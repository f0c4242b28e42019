"""
Missing package imports.

Reports command and environment usages whose package is not imported in the
file set, each with fixes that insert the import. A command provided by
several packages is satisfied by any one of them, and a package counts as
imported when an imported package loads it.
"""

import logging
from dataclasses import dataclass, field

from texlens.analysis.packages import (
    Advisory,
    DocumentEditor,
    included_packages,
    insert_usepackage,
)
from texlens.core.text_range import TextRange
from texlens.registry.commands import SchemaRegistry
from texlens.registry.packages import Package, PackageGraph
from texlens.syntax.file_set import Document, FileSet
from texlens.syntax.nodes import CommandUsage, EnvironmentUsage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportPackageFix:
    """Fix that imports `package` in the main file of the file set."""

    package: Package
    graph: PackageGraph = field(compare=False, repr=False, default_factory=PackageGraph)

    @property
    def family_name(self) -> str:
        return f"Add import for package '{self.package.name}'"

    def apply(self, file_set: FileSet, editor: DocumentEditor) -> bool:
        """
        Insert the import, or tell the user why it was not inserted.

        Params:
            file_set: File set whose main document receives the import
            editor: Host channel for the edit and the advisory

        Returns:
            True if the package is imported afterwards

        Raises:
            IndexNotReadyError: When the file set is still being indexed
            MainFileNotFoundError: When the file set has no documents
        """
        included = included_packages(file_set)
        if insert_usepackage(
            file_set.main_document, editor, self.package, included, self.graph
        ):
            return True
        editor.notify(
            Advisory(
                "Conflicting package detected",
                f"The package {self.package.name} was not inserted because a "
                f"conflicting package was detected.",
            )
        )
        return False


@dataclass(frozen=True)
class ProblemReport:
    """
    A usage that needs a package which is not imported.

    Params:
        element: The offending command or environment usage
        range: Highlighted range, relative to the start of `element`
        message: Description for the user
        fixes: Alternative fixes, one per acceptable package
    """

    element: CommandUsage | EnvironmentUsage
    range: TextRange
    message: str
    fixes: tuple[ImportPackageFix, ...] = ()


def _describe_packages(packages: list[Package]) -> str:
    """`a`, `a, or b`, `a, b, or c`."""
    names = [package.name for package in packages]
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + ", or " + names[-1]


class MissingImportAnalyzer:
    """
    Finds usages of commands and environments whose package is missing.

    Params:
        registry: Command and environment schemas
        graph: Package graph used for loaded-by and conflict checks
    """

    def __init__(self, registry: SchemaRegistry, graph: PackageGraph):
        self.registry = registry
        self.graph = graph

    def analyze(
        self,
        file_set: FileSet,
        document: Document | None = None,
        included: set[str] | None = None,
    ) -> list[ProblemReport]:
        """
        Report missing imports.

        Both passes use the same set of included packages, computed once.

        Params:
            file_set: The file set providing imports and definitions
            document: Restrict reports to this document; all documents when omitted
            included: Precomputed included package names

        Returns:
            Command reports followed by environment reports, each in source order

        Raises:
            IndexNotReadyError: When the file set is still being indexed
        """
        if included is None:
            included = included_packages(file_set)
        return self.analyze_commands(file_set, included, document) + self.analyze_environments(
            file_set, included, document
        )

    def analyze_commands(
        self,
        file_set: FileSet,
        included: set[str],
        document: Document | None = None,
    ) -> list[ProblemReport]:
        """Report command usages whose packages are all missing."""
        commands = document.commands_in_file() if document else file_set.commands_in_file_set()
        reports = []
        for command in commands:
            schemas = self.registry.lookup(command.name)
            if not schemas:
                continue

            # A command that is being defined does not need its package.
            # Only the immediately preceding usage is checked.
            if command.previous is not None and command.previous.defines(command):
                logger.debug("Skipping %s: being defined", command.name)
                continue

            dependencies = self.registry.dependencies(command.name)
            if not dependencies or any(dependency.is_default for dependency in dependencies):
                continue

            if self.graph.is_satisfied(dependencies, included):
                continue

            shortest = min(schemas, key=lambda schema: len(schema.name))
            reports.append(
                ProblemReport(
                    element=command,
                    range=TextRange(0, len(shortest.name) + 1),
                    message=f"Command requires {_describe_packages(dependencies)} package",
                    fixes=tuple(
                        ImportPackageFix(dependency, self.graph) for dependency in dependencies
                    ),
                )
            )
        return reports

    def analyze_environments(
        self,
        file_set: FileSet,
        included: set[str],
        document: Document | None = None,
    ) -> list[ProblemReport]:
        """Report environments whose package is missing."""
        environments = (
            document.environments_in_file() if document else file_set.environments_in_file_set()
        )
        defined = file_set.defined_environments()
        reports = []
        for environment in environments:
            if environment.name in defined:
                continue

            schema = self.registry.environment(environment.name)
            if schema is None or schema.dependency is None:
                continue
            package = schema.dependency
            if package.is_default or package.name in included:
                continue

            # amssymb loads amsfonts, mathtools loads amsmath, ...
            if self.graph.is_satisfied([package], included):
                continue

            reports.append(
                ProblemReport(
                    element=environment,
                    range=environment.name_range,
                    message=f"Environment requires {package.name} package",
                    fixes=(ImportPackageFix(package, self.graph),),
                )
            )
        return reports
