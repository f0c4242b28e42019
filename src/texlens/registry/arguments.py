"""
Argument slots of registered commands.

Each registered command declares an ordered sequence of argument slots. The
reference resolver walks the required slots to find which supplied parameters
point to files.
"""

from attrs import Factory, field, frozen

from texlens.exceptions import RegistryError


@frozen
class Argument:
    """Base class for argument slots."""

    name: str = ""


@frozen
class OptionalArgument(Argument):
    """A `[...]` argument."""

    pass


@frozen
class RequiredArgument(Argument):
    """
    A `{...}` argument.

    `comma_separated` tells whether commas in the parameter separate values,
    as in `\\includeonly{a,b}`.
    """

    comma_separated: bool = True


@frozen
class RequiredFileArgument(RequiredArgument):
    """
    A `{...}` argument that names one or more files.

    Params:
        extensions: Allowed file extensions, without dots; never empty
        default_extension: Extension tried when the target has none; defaults
            to the first allowed extension
    """

    extensions: tuple[str, ...] = field(default=(), converter=tuple)
    default_extension: str = field(
        default=Factory(lambda self: self.extensions[0] if self.extensions else "", takes_self=True)
    )

    @extensions.validator
    def _check_extensions(self, attribute, value):
        if not value:
            raise RegistryError(self.name or "<file argument>", "file arguments need at least one extension")
