"""
Command aliases defined by the user.

A document may wrap a known command in its own macro, for example
`\\newcommand{\\figref}[1]{Figure~\\ref{#1}}`. `\\figref` then behaves like an
alias of `\\ref` and should resolve to labels as well.

`AliasRegistry` is an explicit context object rather than process-wide
state: the host owns one per project, hands it to resolvers, and refreshes it
between analysis runs. The registry is read by many callers but only updated
through `update_aliases` and `refresh`.
"""

import logging
import re
from collections.abc import Iterable

from texlens.syntax.file_set import FileSet
from texlens.syntax.nodes import CommandUsage

logger = logging.getLogger(__name__)


def _invokes(body: str, command: str) -> bool:
    """Check whether `body` contains `command` as a whole command token."""
    return re.search(re.escape(command) + r"(?![a-zA-Z@])", body) is not None


def _definition_body(definition: CommandUsage) -> str:
    return "".join(parameter.content for parameter in definition.required_parameters()[1:])


class AliasRegistry:
    """
    Snapshots of alias sets, keyed by base command set.

    The alias set of a base set holds the base commands plus every user
    command whose definition invokes one of them, directly or through another
    alias. Base sets may overlap; each keeps its own snapshot.
    """

    def __init__(self):
        self._snapshots: dict[frozenset[str], frozenset[str]] = {}
        self._revisions: dict[frozenset[str], int] = {}

    def get_aliases(self, command: str) -> frozenset[str]:
        """
        Alias set of `command`.

        Params:
            command: A base command, including its backslash

        Returns:
            The union of the snapshots of every base set containing `command`,
            or just `command` itself when it was never part of an update
        """
        aliases = {command}
        for key, snapshot in self._snapshots.items():
            if command in key:
                aliases |= snapshot
        return frozenset(aliases)

    def is_stale(self, base_commands: Iterable[str], file_set: FileSet) -> bool:
        return self._revisions.get(frozenset(base_commands)) != file_set.revision

    def update_aliases(self, base_commands: Iterable[str], file_set: FileSet) -> frozenset[str]:
        """
        Recompute the alias set of `base_commands` if the file set changed.

        Params:
            base_commands: Commands whose aliases are wanted
            file_set: File set providing the user definitions

        Returns:
            The (possibly cached) alias set

        Raises:
            IndexNotReadyError: When the file set is still being indexed
        """
        key = frozenset(base_commands)
        if not key:
            return frozenset()
        if not self.is_stale(key, file_set):
            return self._snapshots[key]

        aliases = set(key)
        definitions = [
            definition
            for definition in file_set.definitions_and_redefinitions()
            if definition.defined_command_name() is not None
        ]
        changed = True
        while changed:
            changed = False
            for definition in definitions:
                name = definition.defined_command_name()
                if name in aliases:
                    continue
                body = _definition_body(definition)
                if any(_invokes(body, alias) for alias in aliases):
                    logger.debug("%s is an alias of %s", name, sorted(key)[0])
                    aliases.add(name)
                    changed = True

        snapshot = frozenset(aliases)
        self._snapshots[key] = snapshot
        self._revisions[key] = file_set.revision
        return snapshot

    def refresh(self, file_set: FileSet) -> None:
        """Recompute every alias set known to this registry against `file_set`."""
        for key in list(self._revisions):
            self._revisions.pop(key)
            self.update_aliases(key, file_set)
