"""
Parameter value extraction.

Builds option maps from optional parameters (`\\usepackage[xindy,record]{...}`,
`\\makeindex[options=-s style.ist]`) and plain values from required parameters.
"""

from collections.abc import Iterable

from texlens.core.types import OptionMap
from texlens.syntax.nodes import (
    OptionalParameter,
    Parameter,
    RequiredParameter,
)


def _optional_parameter_string(parameter: OptionalParameter) -> str:
    # name= and {value} are adjacent content items of one option
    return "".join(item.text for item in parameter.contents)


def get_optional_parameters(parameters: Iterable[Parameter]) -> OptionMap:
    """
    Map option names to values for all optional parameters.

    Several optional parameters (`\\cmd[a][b]`) are treated like one
    comma-separated parameter (`\\cmd[a,b]`). Options are split naively on
    commas and once on the first `=`. An option without `=` maps to the empty
    string. Keys and values are trimmed; a later duplicate key overwrites the
    value of an earlier one.

    Params:
        parameters: Parameters of a command usage; required ones are ignored

    Returns:
        Option names and values in insertion order
    """
    parameter_string = ",".join(
        _optional_parameter_string(parameter)
        for parameter in parameters
        if isinstance(parameter, OptionalParameter)
    )

    options: OptionMap = {}
    if not parameter_string.strip():
        return options

    for option in parameter_string.split(","):
        key, _, value = option.partition("=")
        options[key.strip()] = value.strip()
    return options


def get_required_parameters(parameters: Iterable[Parameter]) -> list[str]:
    """
    Values of all required parameters, with outer braces removed and trimmed.

    Params:
        parameters: Parameters of a command usage; optional ones are ignored

    Returns:
        One value per required parameter, in order
    """
    return [
        parameter.text.lstrip("{").rstrip("}").strip()
        for parameter in parameters
        if isinstance(parameter, RequiredParameter)
    ]
