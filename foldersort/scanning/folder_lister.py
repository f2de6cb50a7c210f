"""Hierarchical folder listing for building the candidate index.

This module provides the FolderLister class which enumerates a folder store
laid out as letter folders holding one folder per student:

    root/
    ├── A-B/
    │   ├── Abbott Jane 1234/
    │   └── Baker Tom 5678/
    └── C/
        └── Cruz Ana 9012/

The listing is done once per run and cached in a FolderIndex, since listing
is the expensive part and scoring is cheap.

Example:
    >>> from foldersort.scanning import FolderLister
    >>> lister = FolderLister()
    >>> index = lister.build_index(Path("/data/students"))
    >>> print(f"{len(index.all_candidates())} student folders")
"""

from pathlib import Path
from typing import List

from foldersort.models import CandidateFolder, FolderIndex


class FolderLister:
    """Lists folders of a filesystem folder store as CandidateFolder pairs.

    A candidate's id is its resolved path, its name the folder's display
    name. Children are listed in name order so that enumeration order, and
    therefore tie-breaking, is the same on every run. Hidden folders
    (names starting with '.') are skipped.

    Attributes:
        _errors: List of error messages encountered during listing.

    Example:
        >>> lister = FolderLister()
        >>> groups = lister.list_children(Path("/data/students"))
        >>> [g.name for g in groups]
        ['A-B', 'C']
    """

    def __init__(self) -> None:
        """Initialize the FolderLister."""
        self._errors: List[str] = []

    def list_children(self, parent: Path) -> List[CandidateFolder]:
        """List the immediate subfolders of a folder.

        Files are ignored. Folders that cannot be read are recorded in the
        error list and yield an empty listing.

        Args:
            parent: Folder whose children should be listed.

        Returns:
            CandidateFolder for each subfolder, ordered by name.
        """
        result: List[CandidateFolder] = []

        try:
            children = sorted(parent.iterdir(), key=lambda p: p.name)
        except PermissionError:
            self._errors.append(f"Permission denied listing folder: {parent}")
            return result
        except OSError as e:
            self._errors.append(f"Error listing folder {parent}: {e}")
            return result

        for child in children:
            if child.name.startswith("."):
                continue
            try:
                if not child.is_dir():
                    continue
            except OSError as e:
                self._errors.append(f"Error accessing {child}: {e}")
                continue
            result.append(CandidateFolder(id=str(child), name=child.name))

        return result

    def build_index(self, root: Path) -> FolderIndex:
        """Enumerate letter folders and their student folders.

        Args:
            root: The folder store root holding the letter folders.

        Returns:
            FolderIndex with every letter folder and its children.

        Raises:
            ValueError: If root does not exist or is not a directory.
        """
        resolved_root = root.resolve()
        if not resolved_root.exists():
            raise ValueError(f"Folder root does not exist: {root}")
        if not resolved_root.is_dir():
            raise ValueError(f"Folder root is not a directory: {root}")

        index = FolderIndex()
        index.groups = self.list_children(resolved_root)
        for group in index.groups:
            index.children[group.id] = self.list_children(Path(group.id))

        return index

    def get_errors(self) -> List[str]:
        """Get list of errors encountered during listing.

        Returns:
            List of error message strings.
        """
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()
