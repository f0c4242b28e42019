"""
Built-in command, environment and package tables.

Static knowledge about LaTeX that every analysis starts from. Command names in
the sets below include the leading backslash; schema names do not.
"""

from texlens.registry.arguments import (
    OptionalArgument,
    RequiredArgument,
    RequiredFileArgument,
)
from texlens.registry.commands import CommandSchema, EnvironmentSchema
from texlens.registry.packages import (
    AMSFONTS,
    AMSMATH,
    AMSSYMB,
    AMSTHM,
    BIBLATEX,
    CLEVEREF,
    COLOR,
    EUSCRIPT,
    GLOSSARIES,
    GLOSSARIESEXTRA,
    GRAPHICS,
    GRAPHICX,
    HYPERREF,
    IMPORT,
    LISTINGS,
    LONGTABLE,
    MATHRSFS,
    MATHTOOLS,
    NAMEREF,
    NATBIB,
    SUBFILES,
    TABULARX,
    URL,
    VARIOREF,
    XCOLOR,
    XR,
)

# Commands referring to a label, before user-defined aliases are added
LABEL_REFERENCE_COMMANDS = frozenset(
    {
        "\\ref",
        "\\eqref",
        "\\nameref",
        "\\autoref",
        "\\fullref",
        "\\pageref",
        "\\vref",
        "\\Autoref",
        "\\cref",
        "\\Cref",
        "\\labelcref",
        "\\cpageref",
    }
)

# Commands with a URL in their first parameter
URL_COMMANDS = frozenset({"\\url", "\\href"})

PACKAGE_COMMANDS = frozenset({"\\usepackage", "\\RequirePackage"})

REGULAR_STRICT_COMMAND_DEFINITIONS = frozenset(
    {"\\newcommand", "\\newcommand*", "\\newif", "\\NewDocumentCommand"}
)

COMMAND_REDEFINITIONS = frozenset(
    {
        "\\renewcommand",
        "\\renewcommand*",
        "\\providecommand",
        "\\providecommand*",
        "\\ProvideDocumentCommand",
        "\\DeclareDocumentCommand",
        "\\def",
        "\\let",
    }
)

MATH_COMMAND_DEFINITIONS = frozenset(
    {
        "\\DeclareMathOperator",
        "\\DeclarePairedDelimiter",
        "\\DeclarePairedDelimiterX",
        "\\DeclarePairedDelimiterXPP",
    }
)

COMMAND_DEFINITIONS = (
    REGULAR_STRICT_COMMAND_DEFINITIONS | COMMAND_REDEFINITIONS | MATH_COMMAND_DEFINITIONS
)

ENVIRONMENT_DEFINITIONS = frozenset(
    {
        "\\newenvironment",
        "\\renewenvironment",
        "\\newtheorem",
        "\\NewDocumentEnvironment",
        "\\ProvideDocumentEnvironment",
        "\\DeclareDocumentEnvironment",
    }
)

CLASS_DEFINITIONS = frozenset({"\\ProvidesClass"})

PACKAGE_DEFINITIONS = frozenset({"\\ProvidesPackage"})

DEFINITIONS = (
    COMMAND_DEFINITIONS | CLASS_DEFINITIONS | PACKAGE_DEFINITIONS | ENVIRONMENT_DEFINITIONS
)

# Packages providing an index
INDEX_PACKAGES = frozenset(
    {
        "makeidx",
        "multind",
        "index",
        "splitidx",
        "splitindex",
        "imakeidx",
        "hvindex",
        "idxlayout",
        "repeatindex",
        "indextools",
    }
)

GLOSSARY_PACKAGES = frozenset({GLOSSARIES.name, GLOSSARIESEXTRA.name})

PACKAGE_LOADS = {
    AMSSYMB: {AMSFONTS},
    MATHTOOLS: {AMSMATH},
    GRAPHICX: {GRAPHICS},
    XCOLOR: {COLOR},
    HYPERREF: {NAMEREF, URL},
    GLOSSARIESEXTRA: {GLOSSARIES},
}

CONFLICTING_PACKAGES = [
    {BIBLATEX, NATBIB},
]

_GRAPHICS_EXTENSIONS = ("pdf", "png", "jpg", "jpeg", "eps")


def _file(name: str, *extensions: str, comma_separated: bool = True) -> RequiredFileArgument:
    return RequiredFileArgument(
        name, comma_separated=comma_separated, extensions=extensions
    )


BUILTIN_COMMANDS = [
    # Kernel
    CommandSchema("sqrt", (OptionalArgument("root"), RequiredArgument("arg"))),
    CommandSchema("frac", (RequiredArgument("num"), RequiredArgument("den"))),
    CommandSchema("textbf", (RequiredArgument("text"),)),
    CommandSchema("textit", (RequiredArgument("text"),)),
    CommandSchema("emph", (RequiredArgument("text"),)),
    CommandSchema("section", (OptionalArgument("shorttitle"), RequiredArgument("title"))),
    CommandSchema("chapter", (OptionalArgument("shorttitle"), RequiredArgument("title"))),
    CommandSchema("label", (RequiredArgument("key"),)),
    CommandSchema("ref", (RequiredArgument("key"),)),
    CommandSchema("pageref", (RequiredArgument("key"),)),
    CommandSchema("cite", (OptionalArgument("extratext"), RequiredArgument("keys"))),
    CommandSchema("nocite", (RequiredArgument("keys"),)),
    CommandSchema("bibitem", (OptionalArgument("label"), RequiredArgument("citekey"))),
    CommandSchema("makeindex", (OptionalArgument("options"),)),
    CommandSchema("input", (_file("sourcefile", "tex"),)),
    CommandSchema("include", (_file("sourcefile", "tex"),)),
    CommandSchema("includeonly", (_file("sourcefiles", "tex"),)),
    CommandSchema("bibliography", (_file("bibliographyfiles", "bib"),)),
    CommandSchema("bibliographystyle", (RequiredArgument("style"),)),
    CommandSchema("documentclass", (OptionalArgument("options"), _file("class", "cls"))),
    CommandSchema("usepackage", (OptionalArgument("options"), _file("package", "sty"))),
    CommandSchema("RequirePackage", (OptionalArgument("options"), _file("package", "sty"))),
    CommandSchema("newcommand", (RequiredArgument("cmd"), OptionalArgument("args"), RequiredArgument("def"))),
    CommandSchema("renewcommand", (RequiredArgument("cmd"), OptionalArgument("args"), RequiredArgument("def"))),
    CommandSchema("newenvironment", (RequiredArgument("name"), OptionalArgument("args"), RequiredArgument("begdef"), RequiredArgument("enddef"))),
    # amsmath and friends
    CommandSchema("eqref", (RequiredArgument("key"),), AMSMATH),
    CommandSchema("text", (RequiredArgument("text"),), AMSMATH),
    CommandSchema("dfrac", (RequiredArgument("num"), RequiredArgument("den")), AMSMATH),
    CommandSchema("binom", (RequiredArgument("n"), RequiredArgument("k")), AMSMATH),
    CommandSchema("DeclareMathOperator", (RequiredArgument("cmd"), RequiredArgument("text")), AMSMATH),
    CommandSchema("mathbb", (RequiredArgument("text"),), AMSFONTS),
    CommandSchema("mathfrak", (RequiredArgument("text"),), AMSFONTS),
    CommandSchema("blacksquare", (), AMSSYMB),
    CommandSchema("coloneqq", (), MATHTOOLS),
    CommandSchema("DeclarePairedDelimiter", (RequiredArgument("cmd"), RequiredArgument("left"), RequiredArgument("right")), MATHTOOLS),
    CommandSchema("mathscr", (RequiredArgument("text"),), MATHRSFS),
    CommandSchema("mathscr", (RequiredArgument("text"),), EUSCRIPT),
    CommandSchema("qedhere", (), AMSTHM),
    # Graphics and colour
    CommandSchema("includegraphics", (OptionalArgument("key-val-list"), _file("imagefile", *_GRAPHICS_EXTENSIONS, comma_separated=False)), GRAPHICX),
    CommandSchema("rotatebox", (RequiredArgument("angle"), RequiredArgument("text")), GRAPHICS),
    CommandSchema("color", (RequiredArgument("color"),), COLOR),
    CommandSchema("textcolor", (RequiredArgument("color"), RequiredArgument("text")), COLOR),
    CommandSchema("colorlet", (RequiredArgument("name"), RequiredArgument("color")), XCOLOR),
    # Cross references and links
    CommandSchema("autoref", (RequiredArgument("key"),), HYPERREF),
    CommandSchema("Autoref", (RequiredArgument("key"),), HYPERREF),
    CommandSchema("nameref", (RequiredArgument("key"),), NAMEREF),
    CommandSchema("href", (RequiredArgument("url"), RequiredArgument("text")), HYPERREF),
    CommandSchema("url", (RequiredArgument("url"),), URL),
    CommandSchema("cref", (RequiredArgument("keys"),), CLEVEREF),
    CommandSchema("Cref", (RequiredArgument("keys"),), CLEVEREF),
    CommandSchema("cpageref", (RequiredArgument("keys"),), CLEVEREF),
    CommandSchema("labelcref", (RequiredArgument("keys"),), CLEVEREF),
    CommandSchema("vref", (RequiredArgument("key"),), VARIOREF),
    CommandSchema("externaldocument", (OptionalArgument("prefix"), _file("file", "tex")), XR),
    # Bibliographies
    CommandSchema("addbibresource", (OptionalArgument("options"), _file("bibliographyfile", "bib")), BIBLATEX),
    CommandSchema("parencite", (OptionalArgument("prenote"), RequiredArgument("keys")), BIBLATEX),
    CommandSchema("autocite", (OptionalArgument("prenote"), RequiredArgument("keys")), BIBLATEX),
    CommandSchema("printbibliography", (OptionalArgument("options"),), BIBLATEX),
    CommandSchema("citep", (OptionalArgument("before"), RequiredArgument("keys")), NATBIB),
    CommandSchema("citet", (OptionalArgument("before"), RequiredArgument("keys")), NATBIB),
    # Glossaries
    CommandSchema("makeglossaries", (), GLOSSARIES),
    CommandSchema("gls", (RequiredArgument("label"),), GLOSSARIES),
    CommandSchema("glsxtrnewsymbol", (RequiredArgument("label"), RequiredArgument("symbol")), GLOSSARIESEXTRA),
    # File inclusion packages
    CommandSchema("import", (RequiredArgument("absolutepath"), _file("filename", "tex")), IMPORT),
    CommandSchema("subimport", (RequiredArgument("relativepath"), _file("filename", "tex")), IMPORT),
    CommandSchema("subfile", (_file("sourcefile", "tex"),), SUBFILES),
    CommandSchema("lstinputlisting", (OptionalArgument("options"), _file("filename", "tex", "py", "java", "c", "txt", comma_separated=False)), LISTINGS),
]

BUILTIN_ENVIRONMENTS = [
    *(
        EnvironmentSchema(name)
        for name in (
            "document",
            "itemize",
            "enumerate",
            "description",
            "figure",
            "table",
            "tabular",
            "array",
            "equation",
            "equation*",
            "verbatim",
            "center",
            "minipage",
            "quote",
            "abstract",
            "thebibliography",
        )
    ),
    *(
        EnvironmentSchema(name, AMSMATH)
        for name in (
            "align",
            "align*",
            "gather",
            "gather*",
            "multline",
            "split",
            "cases",
            "matrix",
            "pmatrix",
            "bmatrix",
        )
    ),
    EnvironmentSchema("dcases", MATHTOOLS),
    EnvironmentSchema("proof", AMSTHM),
    EnvironmentSchema("lstlisting", LISTINGS),
    EnvironmentSchema("tabularx", TABULARX),
    EnvironmentSchema("longtable", LONGTABLE),
]

