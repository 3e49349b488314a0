"""In-memory hierarchical log of action timestamps."""
from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Sequence[Any]]
Tree = Dict[str, Any]

DEFAULT_DELIMITER = "--"


def _segments(path: PathLike) -> List[str]:
    if isinstance(path, str):
        parts = path.split(".")
    else:
        parts = [str(p) for p in path]
    if not parts or any(p == "" for p in parts):
        raise ValueError(f"invalid log path: {path!r}")
    return parts


class ActionLog:
    """Nested mapping of path segment to sub-mapping or ISO-8601 timestamp.

    One instance is meant to be shared by every consumer in a process;
    tests create their own.  Writes are last-write-wins: writing at a path
    replaces whatever leaf or subtree was there, and writing below an
    existing leaf turns that leaf into a mapping.
    """

    def __init__(self) -> None:
        self._tree: Tree = {}
        self._lock = threading.RLock()

    @property
    def tree(self) -> Tree:
        """Deep copy of the current tree."""
        with self._lock:
            return copy.deepcopy(self._tree)

    def write(self, path: PathLike, timestamp: str) -> None:
        """Store ``timestamp`` at ``path``, creating parents as needed."""
        *parents, leaf = _segments(path)
        with self._lock:
            node = self._tree
            for segment in parents:
                child = node.get(segment)
                if not isinstance(child, dict):
                    child = node[segment] = {}
                node = child
            node[leaf] = timestamp
        logger.debug("Logged %s at %s", ".".join(parents + [leaf]), timestamp)

    def _lookup(self, segments: List[str]) -> Any:
        node: Any = self._tree
        for segment in segments:
            if not isinstance(node, dict) or segment not in node:
                return None
            node = node[segment]
        return node

    def read(self, path: PathLike) -> Optional[str]:
        """Return the timestamp at ``path`` or ``None``.

        Paths that end on a subtree are treated as absent.
        """
        value = self._lookup(_segments(path))
        return None if isinstance(value, dict) else value

    def remove(self, path: PathLike) -> None:
        """Delete the leaf or subtree at ``path`` if it exists."""
        *parents, leaf = _segments(path)
        with self._lock:
            parent = self._lookup(parents) if parents else self._tree
            if isinstance(parent, dict) and leaf in parent:
                del parent[leaf]
                logger.debug("Removed %s", ".".join(parents + [leaf]))

    def reset(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._tree = {}

    def _walk(self, node: Tree, prefix: List[str]) -> Iterator[List[str]]:
        for key, value in node.items():
            if isinstance(value, dict):
                yield from self._walk(value, prefix + [key])
            else:
                yield prefix + [key, str(value)]

    def flatten(self, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
        """Return one ``path--timestamp`` string per leaf.

        Siblings come out in insertion order; sort the result when a stable
        order matters.
        """
        with self._lock:
            return [delimiter.join(parts) for parts in self._walk(self._tree, [])]

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for _ in self._walk(self._tree, []))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, list, tuple)):
            return False
        return self.read(path) is not None
