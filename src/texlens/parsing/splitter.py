"""
Group-aware splitting of parameter text.

Splits the interior of a parameter such as `\\cite{a,{b,c},d}` into sub-values
without splitting inside nested `{...}` groups. Separators are found with a
regular expression; brace nesting is tracked with a character scan because a
regular expression cannot balance nested braces.
"""

import re

from texlens.core.text_range import TextRange, is_escaped, strip_group
from texlens.syntax.nodes import RequiredParameter

# Commas separate values; surrounding whitespace is not part of a value
PARAMETER_SPLIT = re.compile(r"\s*,\s*")


def group_depths(text: str) -> list[int]:
    """
    Brace nesting depth of every character of `text`.

    Braces themselves belong to the enclosing level. Escaped braces (`\\{`,
    `\\}`) do not open or close groups, and an unmatched `}` never makes the
    depth negative.

    Params:
        text: Text to scan

    Returns:
        One depth per character
    """
    depths = []
    depth = 0
    for index, char in enumerate(text):
        if char == "{" and not is_escaped(text, index):
            depths.append(depth)
            depth += 1
        elif char == "}" and not is_escaped(text, index) and depth > 0:
            depth -= 1
            depths.append(depth)
        else:
            depths.append(depth)
    return depths


def split_to_ranges(text: str, pattern: re.Pattern | str = PARAMETER_SPLIT) -> list[TextRange]:
    """
    Split `text` on separators that are not inside a nested group.

    Params:
        text: Parameter interior, with the enclosing delimiters already stripped
        pattern: Separator pattern; matches inside `{...}`, empty matches and
            matches starting at an escaped character are ignored

    Returns:
        Ranges relative to `text`, in source order and non-overlapping. Every
        character that is not part of an accepted separator is covered. Empty
        text gives no ranges; trailing empty pieces are dropped, but at least
        one range is kept.
    """
    if not text:
        return []
    if isinstance(pattern, str):
        pattern = re.compile(pattern)

    depths = group_depths(text)
    ranges = []
    start = 0
    for match in pattern.finditer(text):
        if match.start() == match.end():
            continue
        if any(depths[index] for index in range(match.start(), match.end())):
            continue
        if is_escaped(text, match.start()):
            continue
        ranges.append(TextRange.between(start, match.start()))
        start = match.end()
    ranges.append(TextRange.between(start, len(text)))
    while len(ranges) > 1 and ranges[-1].length == 0:
        ranges.pop()
    return ranges


def split_values(text: str, pattern: re.Pattern | str = PARAMETER_SPLIT) -> list[str]:
    """Split `text` like `split_to_ranges` and return the values themselves."""
    return [sub_range.substring(text) for sub_range in split_to_ranges(text, pattern)]


def extract_sub_parameter_ranges(
    parameter: RequiredParameter | str, pattern: re.Pattern | str = PARAMETER_SPLIT
) -> list[TextRange]:
    """
    Sub-value ranges of a parameter, relative to the start of the parameter.

    The enclosing group is stripped before splitting, so every range is shifted
    right by one to account for the opening delimiter. Parameters shorter than
    two characters have no interior and give no ranges.

    Params:
        parameter: The parameter, or its raw text including delimiters
        pattern: Separator pattern

    Returns:
        Ranges relative to the parameter's opening delimiter
    """
    text = parameter.text if isinstance(parameter, RequiredParameter) else parameter
    return [
        sub_range.shift_right(1)
        for sub_range in split_to_ranges(strip_group(text), pattern)
    ]
