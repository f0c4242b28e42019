"""
Text range utilities.

Pure helpers operating on strings and offsets: the `TextRange` value type used
for every usage-relative range in texlens, and `strip_group` for removing the
enclosing delimiters of a parameter.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextRange:
    """Half-open range `[offset, offset + length)` in some owning text."""

    offset: int
    length: int

    def __post_init__(self):
        """Reject ranges that cannot exist in any text."""
        if self.offset < 0 or self.length < 0:
            raise ValueError(
                f"Invalid text range: offset={self.offset}, length={self.length}"
            )

    @classmethod
    def between(cls, start: int, end: int) -> "TextRange":
        """Create a range from start and end offsets."""
        return cls(start, end - start)

    @property
    def end(self) -> int:
        return self.offset + self.length

    def shift_right(self, delta: int) -> "TextRange":
        return TextRange(self.offset + delta, self.length)

    def shift_left(self, delta: int) -> "TextRange":
        return TextRange(self.offset - delta, self.length)

    def shrink(self, amount: int) -> "TextRange":
        """Remove `amount` characters from both ends of the range.

        Params:
            amount: Characters to drop on each side

        Returns:
            The shrunk range; an empty range at the centre if the range is too short
        """
        if self.length < 2 * amount:
            return TextRange(self.offset + self.length // 2, 0)
        return TextRange(self.offset + amount, self.length - 2 * amount)

    def contains(self, other: "TextRange") -> bool:
        return self.offset <= other.offset and other.end <= self.end

    def substring(self, text: str) -> str:
        """Return the part of `text` covered by this range."""
        return text[self.offset : self.end]

    def __str__(self) -> str:
        return f"({self.offset},{self.end})"


def strip_group(text: str) -> str:
    """
    Strip the enclosing delimiters of a group.

    `{a,b}` becomes `a,b` and `[opt]` becomes `opt`. The first and last
    characters are removed without checking what they are.

    Params:
        text: Raw parameter text including its delimiters

    Returns:
        The interior of the group, or an empty string when `text` is shorter
        than two characters
    """
    if len(text) < 2:
        return ""
    return text[1:-1]


def is_escaped(text: str, index: int) -> bool:
    """Check whether the character at `index` is preceded by an odd number of backslashes."""
    backslashes = 0
    position = index - 1
    while position >= 0 and text[position] == "\\":
        backslashes += 1
        position -= 1
    return backslashes % 2 == 1
