"""
Core type definitions for texlens.

This module contains type aliases used throughout texlens for type safety
and consistency.
"""

from typing import Any

# Ordered option name -> value mapping built from optional parameters
OptionMap = dict[str, str]

ConfigDict = dict[str, Any]
