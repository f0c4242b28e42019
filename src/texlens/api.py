"""
Host-facing entry point.

`TexLens` bundles the registry, the package graph, the settings and the
alias context of one project, and exposes the operations a host editor
calls: reference resolution, missing-import analysis, option maps and alias
refresh.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from texlens.analysis.imports import MissingImportAnalyzer, ProblemReport
from texlens.config import AnalysisSettings
from texlens.core.types import OptionMap
from texlens.parsing.parameters import get_optional_parameters
from texlens.registry import builtin_package_graph
from texlens.registry.commands import SchemaRegistry
from texlens.registry.loader import load_registry_tables
from texlens.registry.packages import PackageGraph
from texlens.resolution.aliases import AliasRegistry
from texlens.resolution.references import ReferenceResolver, SymbolicReference
from texlens.syntax.file_set import Document, FileSet
from texlens.syntax.nodes import CommandUsage, Parameter

logger = logging.getLogger(__name__)


class TexLens:
    """
    Semantic analysis of one LaTeX project.

    Params:
        registry: Command and environment schemas; built-in tables when omitted
        graph: Package graph; built-in graph when omitted
        settings: Analysis settings; defaults when omitted
        aliases: Alias context; a fresh one when omitted
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        graph: PackageGraph | None = None,
        settings: AnalysisSettings | None = None,
        aliases: AliasRegistry | None = None,
    ):
        self.registry = registry if registry is not None else SchemaRegistry.builtin()
        self.graph = graph if graph is not None else builtin_package_graph()
        self.settings = settings if settings is not None else AnalysisSettings()
        self.aliases = aliases if aliases is not None else AliasRegistry()
        self.resolver = ReferenceResolver(
            self.registry,
            self.aliases,
            label_commands=self.settings.label_reference_commands,
            url_commands=self.settings.url_commands,
        )
        self.analyzer = MissingImportAnalyzer(self.registry, self.graph)

    @classmethod
    def from_files(
        cls,
        settings_path: str | Path | None = None,
        tables_path: str | Path | None = None,
    ) -> "TexLens":
        """
        Create from a settings YAML file and extra registry tables.

        Raises:
            RegistryLoadError: When the registry tables are invalid
        """
        settings = AnalysisSettings.from_yaml(settings_path) if settings_path else None
        registry, graph = None, None
        if tables_path:
            registry, graph = load_registry_tables(tables_path)
        return cls(registry=registry, graph=graph, settings=settings)

    def resolve_references(
        self, usage: CommandUsage, file_set: FileSet | None = None
    ) -> list[SymbolicReference]:
        """
        References exposed by a command usage, see `ReferenceResolver.resolve`.

        Raises:
            IndexNotReadyError: When the file set is still being indexed
        """
        return self.resolver.resolve(usage, file_set)

    def analyze_missing_imports(
        self,
        file_set: FileSet,
        settings_enabled: bool | None = None,
        document: Document | None = None,
    ) -> list[ProblemReport]:
        """
        Missing-import reports for the file set, or for one of its documents.

        Params:
            file_set: The file set to analyse
            settings_enabled: Overrides `automatic_dependency_check` when given
            document: Only report usages in this document

        Returns:
            Problem reports; empty when the analysis is disabled

        Raises:
            IndexNotReadyError: When the file set is still being indexed
        """
        if settings_enabled is None:
            settings_enabled = self.settings.automatic_dependency_check
        if not settings_enabled:
            logger.debug("Missing-import analysis disabled")
            return []
        return self.analyzer.analyze(file_set, document)

    def build_optional_parameter_map(self, parameters: Iterable[Parameter]) -> OptionMap:
        return get_optional_parameters(parameters)

    def refresh(self, file_set: FileSet) -> None:
        """
        Bring the alias context up to date with `file_set`.

        Raises:
            IndexNotReadyError: When the file set is still being indexed
        """
        self.aliases.refresh(file_set)
        self.resolver.label_reference_commands(file_set)
