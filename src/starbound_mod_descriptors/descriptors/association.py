"""File association capability for descriptors.

A descriptor that was read from (or will be written to) a file keeps a
reference to that file. Some descriptors derive fields from where their file
lives, so changing the association notifies registered hooks.
"""

import os
from pathlib import Path
from typing import Callable

from ..core.types import PathLike

# Called with (previous, current) after the association changes
AssociationHook = Callable[[Path | None, Path | None], None]


def as_path(value: PathLike | None) -> Path | None:
    """Convert ``value`` to a Path, keeping None as None."""
    if value is None:
        return None
    return Path(os.fspath(value))


class FileAssociation:
    """Associates a descriptor with zero or one backing file.

    The association is only a reference: it does not own the file or read
    its contents.

    Example:
        >>> association = FileAssociation(on_change=lambda old, new: print(new))
        >>> association.set("mods/x/item.json")
        mods/x/item.json
    """

    def __init__(
        self,
        path: PathLike | None = None,
        on_change: AssociationHook | None = None,
    ):
        """Initialize the association.

        Hooks are not run for the initial path.

        Args:
            path: Initial associated file, if any
            on_change: Optional hook run after every change
        """
        self._path = as_path(path)
        self._hooks: list[AssociationHook] = []
        if on_change is not None:
            self._hooks.append(on_change)

    @property
    def path(self) -> Path | None:
        """The associated file, or None when unassociated."""
        return self._path

    def add_hook(self, hook: AssociationHook) -> None:
        """Register another hook to run after each change."""
        self._hooks.append(hook)

    def set(self, path: PathLike | None) -> None:
        """Replace the association and run every hook before returning."""
        previous = self._path
        self._path = as_path(path)
        for hook in self._hooks:
            hook(previous, self._path)

    def directory(self) -> Path | None:
        """Return the directory relative paths are resolved against.

        This is the associated path itself when it names a directory, and
        its parent otherwise.
        """
        if self._path is None:
            return None
        if self._path.is_dir():
            return self._path
        return self._path.parent
