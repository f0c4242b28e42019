"""
LaTeX packages and the package graph.

A `Package` is an external style file that has to be imported before some
commands or environments can be used. The `PackageGraph` holds the static
knowledge about packages: which packages load other packages, and which
packages cannot be used together.
"""

from collections.abc import Iterable, Mapping

from attrs import field, frozen


@frozen
class Package:
    """A LaTeX package, optionally with the options it should be loaded with."""

    name: str
    is_default: bool = False
    options: tuple[str, ...] = field(default=(), converter=tuple)

    def with_options(self, *options: str) -> "Package":
        """Return the same package, to be imported with the given options."""
        return Package(self.name, self.is_default, options)

    def usepackage(self) -> str:
        """The import statement for this package, e.g. `\\usepackage[utf8]{inputenc}`."""
        if self.options:
            return f"\\usepackage[{','.join(self.options)}]{{{self.name}}}"
        return f"\\usepackage{{{self.name}}}"


# Always satisfied: available without any import
DEFAULT = Package("", is_default=True)

AMSFONTS = Package("amsfonts")
AMSMATH = Package("amsmath")
AMSSYMB = Package("amssymb")
AMSTHM = Package("amsthm")
BIBLATEX = Package("biblatex")
CLEVEREF = Package("cleveref")
COLOR = Package("color")
EUSCRIPT = Package("euscript")
FONTENC = Package("fontenc")
GLOSSARIES = Package("glossaries")
GLOSSARIESEXTRA = Package("glossaries-extra")
GRAPHICS = Package("graphics")
GRAPHICX = Package("graphicx")
HYPERREF = Package("hyperref")
IMPORT = Package("import")
INPUTENC = Package("inputenc")
LISTINGS = Package("listings")
LONGTABLE = Package("longtable")
MATHRSFS = Package("mathrsfs")
MATHTOOLS = Package("mathtools")
NAMEREF = Package("nameref")
NATBIB = Package("natbib")
SUBFILES = Package("subfiles")
TABULARX = Package("tabularx")
URL = Package("url")
VARIOREF = Package("varioref")
XCOLOR = Package("xcolor")
XR = Package("xr")


class PackageGraph:
    """
    Static package knowledge: "loads" edges and mutually conflicting groups.

    The graph is built once and never mutated by analyses. Packages are
    compared by name, so a package requested with options is the same node as
    the bare package.

    Params:
        loads: Maps a package to the packages it loads
        conflicts: Groups of packages that cannot be used together
    """

    def __init__(
        self,
        loads: Mapping[Package, Iterable[Package]] | None = None,
        conflicts: Iterable[Iterable[Package]] | None = None,
    ):
        self._loads: dict[Package, frozenset[Package]] = {
            loader: frozenset(loaded) for loader, loaded in (loads or {}).items()
        }
        self._conflicts: tuple[frozenset[Package], ...] = tuple(
            frozenset(group) for group in (conflicts or ())
        )

    @property
    def loads(self) -> dict[Package, frozenset[Package]]:
        return dict(self._loads)

    @property
    def conflicts(self) -> tuple[frozenset[Package], ...]:
        return self._conflicts

    def merged(self, other: "PackageGraph") -> "PackageGraph":
        """Combine two graphs; edges of the same loader are united."""
        loads = dict(self._loads)
        for loader, loaded in other._loads.items():
            loads[loader] = loads.get(loader, frozenset()) | loaded
        return PackageGraph(loads, self._conflicts + other._conflicts)

    def packages_loaded_by(self, package: Package) -> frozenset[Package]:
        """Every package `package` loads, directly or through other packages."""
        found: set[Package] = set()
        pending = [package.name]
        while pending:
            name = pending.pop()
            for loader, loaded in self._loads.items():
                if loader.name != name:
                    continue
                for child in loaded:
                    if child not in found:
                        found.add(child)
                        pending.append(child.name)
        return frozenset(found)

    def loaders_of(self, package: Package) -> frozenset[Package]:
        """Every package that loads `package`, directly or through other packages."""
        found: set[Package] = set()
        pending = [package.name]
        while pending:
            name = pending.pop()
            for loader, loaded in self._loads.items():
                if loader in found:
                    continue
                if any(child.name == name for child in loaded):
                    found.add(loader)
                    pending.append(loader.name)
        return frozenset(found)

    def conflicting_packages(self, package: Package) -> frozenset[Package]:
        """
        Packages that conflict with `package`.

        Only the listed conflict groups that contain `package` are inspected.
        """
        conflicting: set[Package] = set()
        for group in self._conflicts:
            if any(member.name == package.name for member in group):
                conflicting.update(
                    member for member in group if member.name != package.name
                )
        return frozenset(conflicting)

    def conflicts_with(self, package: Package, included: Iterable[str]) -> bool:
        """Check whether any included package name conflicts with `package`."""
        included_names = set(included)
        return any(
            member.name in included_names
            for member in self.conflicting_packages(package)
        )

    def is_satisfied(self, dependencies: Iterable[Package], included: Iterable[str]) -> bool:
        """
        Check whether at least one of `dependencies` is available.

        A dependency is available when it is the default package, when it is
        included itself, or when an included package loads it.

        Params:
            dependencies: Acceptable alternatives; any one of them is enough
            included: Names of the packages imported by the document

        Returns:
            True if some alternative is satisfied
        """
        included_names = set(included)
        for dependency in dependencies:
            if dependency.is_default or dependency.name in included_names:
                return True
            if any(loader.name in included_names for loader in self.loaders_of(dependency)):
                return True
        return False
