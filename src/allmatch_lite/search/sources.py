"""Document source: enumerate files under a root and read them whole.

The engine never touches the filesystem. This module walks a
directory tree and hands (identifier, bytes) pairs to the runner.
A file that cannot be read, or that is not valid UTF-8 when text is
required, is skipped and remembered; the walk itself never aborts
because of one bad file.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Document:
    identifier: str
    content: bytes


@dataclass(frozen=True, slots=True)
class SkippedDocument:
    identifier: str
    reason: str


class DocumentWalker:
    """Iterate over every regular file below `root`.

    Args:
        root: directory to walk, or a single file
        follow_symlinks: descend into symlinked directories
        require_text: skip files whose bytes are not valid UTF-8

    Directories and files are visited in sorted order so repeated runs
    report in the same order. With follow_symlinks, a directory reached
    twice (for example through a link back into the tree) is entered only
    once. Skipped files accumulate in `skipped`.
    """

    def __init__(
        self,
        root: str | os.PathLike[str] = ".",
        follow_symlinks: bool = False,
        require_text: bool = True,
    ) -> None:
        self._root = os.fspath(root)
        self._follow_symlinks = follow_symlinks
        self._require_text = require_text
        self.skipped: list[SkippedDocument] = []

    @property
    def root(self) -> str:
        return self._root

    def __iter__(self) -> Iterator[Document]:
        for path in self._paths():
            doc = self._read(path)
            if doc is not None:
                yield doc

    def _paths(self) -> Iterator[str]:
        if os.path.isfile(self._root):
            yield self._root
            return

        # (st_dev, st_ino) of every directory entered, so a symlink back
        # into the tree is not descended twice
        visited: set[tuple[int, int]] = set()
        if self._follow_symlinks:
            self._first_visit(self._root, visited)

        for dirpath, dirnames, filenames in os.walk(
            self._root,
            onerror=self._on_walk_error,
            followlinks=self._follow_symlinks,
        ):
            dirnames.sort()
            if self._follow_symlinks:
                dirnames[:] = [
                    d for d in dirnames
                    if self._first_visit(os.path.join(dirpath, d), visited)
                ]
            for name in sorted(filenames):
                path = os.path.join(dirpath, name)
                # os.walk lists sockets, fifos and dangling links as files
                if os.path.isfile(path):
                    yield path

    @staticmethod
    def _first_visit(path: str, visited: set[tuple[int, int]]) -> bool:
        try:
            st = os.stat(path)
        except OSError:
            # os.walk reports it through onerror
            return True
        key = (st.st_dev, st.st_ino)
        if key in visited:
            log.debug("Skipping already visited directory %s", path)
            return False
        visited.add(key)
        return True

    def _on_walk_error(self, err: OSError) -> None:
        identifier = err.filename or self._root
        log.debug("Skipping unreadable directory %s: %s", identifier, err)
        self.skipped.append(SkippedDocument(str(identifier), str(err)))

    def _read(self, path: str) -> Document | None:
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as err:
            log.debug("Skipping unreadable file %s: %s", path, err)
            self.skipped.append(SkippedDocument(path, str(err)))
            return None

        if self._require_text:
            try:
                content.decode("utf-8")
            except UnicodeDecodeError as err:
                log.debug("Skipping non-UTF-8 file %s: %s", path, err)
                self.skipped.append(SkippedDocument(path, "not valid UTF-8"))
                return None

        return Document(identifier=path, content=content)


def walk_documents(
    root: str | os.PathLike[str] = ".",
    *,
    follow_symlinks: bool = False,
    require_text: bool = True,
) -> Iterator[Document]:
    """Shortcut for iterating a DocumentWalker without keeping it."""
    return iter(DocumentWalker(root, follow_symlinks, require_text))
