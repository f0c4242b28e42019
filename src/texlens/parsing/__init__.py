"""
Parameter parsing.

This package provides group-aware splitting of parameter text and the
extraction of option maps and values from command parameters.
"""

from texlens.parsing.parameters import get_optional_parameters, get_required_parameters
from texlens.parsing.splitter import (
    PARAMETER_SPLIT,
    extract_sub_parameter_ranges,
    split_to_ranges,
    split_values,
)

__all__ = [
    "PARAMETER_SPLIT",
    "extract_sub_parameter_ranges",
    "get_optional_parameters",
    "get_required_parameters",
    "split_to_ranges",
    "split_values",
]
