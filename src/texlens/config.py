"""
Analysis settings for texlens.

Hosts create the settings once and pass them to `TexLens`. Settings can be
created from a dict or a YAML file; only the given values override the
defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from pathlib import Path
from texlens.core.types import ConfigDict
from texlens.registry.tables import LABEL_REFERENCE_COMMANDS, URL_COMMANDS


@dataclass
class AnalysisSettings:
    """Settings consulted by the analyses.

    Examples:
        # All defaults
        settings = AnalysisSettings()

        # Disable the missing-import analysis
        settings = AnalysisSettings.from_dict({"automatic_dependency_check": False})

        # From YAML file
        settings = AnalysisSettings.from_yaml("texlens.yaml")
    """

    # Run the missing-import analysis
    automatic_dependency_check: bool = True

    # Base commands whose first parameter holds labels; aliases are added on top
    label_reference_commands: frozenset[str] = field(
        default_factory=lambda: LABEL_REFERENCE_COMMANDS
    )
    url_commands: frozenset[str] = field(default_factory=lambda: URL_COMMANDS)

    def __post_init__(self):
        # YAML gives lists
        self.label_reference_commands = frozenset(self.label_reference_commands)
        self.url_commands = frozenset(self.url_commands)

    @classmethod
    def from_dict(cls, config: ConfigDict) -> AnalysisSettings:
        """Create from dict, only overriding specified values.

        Params:
            config: Dictionary with partial overrides. Keys that are not
                settings are ignored.

        Returns:
            AnalysisSettings instance with specified overrides
        """
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in config.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> AnalysisSettings:
        """Create from YAML file with partial overrides.

        Params:
            yaml_path: Path to YAML file containing the settings

        Returns:
            AnalysisSettings instance with YAML overrides

        Example YAML:
            automatic_dependency_check: false
            url_commands: ["\\url", "\\href", "\\weblink"]
        """
        import yaml

        path = Path(yaml_path)
        with path.open() as f:
            config = yaml.safe_load(f) or {}

        return cls.from_dict(config)
