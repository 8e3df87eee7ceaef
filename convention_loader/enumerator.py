"""
Directory enumeration for convention-laid-out definition trees.

A definition lives in a directory named after its leaf, inside a file with
the same name: ``<base>/lib/greeter/greeter.py``.  The walker below finds
every such file under a starting directory and reports where it sits
relative to the base path, so the resolver can turn it back into a
symbolic name.
"""

from __future__ import annotations

import logging
import os
import pathlib
from typing import Iterator, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def iter_definitions(
    base_path: PathLike,
    relative_dir: str,
    extension: str,
) -> Iterator[Tuple[str, str, str]]:
    """Yield ``(link, leaf, file_path)`` for each definition under *relative_dir*.

    The walk is depth-first; siblings are visited in sorted order so the
    output is stable across platforms.

    Args:
        base_path:     Root directory of the definition tree.
        relative_dir:  Directory (``/``-separated, relative to *base_path*)
                       to start from.  An empty string starts at the root.
        extension:     Definition file extension without the dot.

    Yields:
        ``link``: ``/``-joined directories between *base_path* and the
        parent of the leaf directory (empty at the root); ``leaf``: the
        leaf directory name; ``file_path``: the definition file found.

    Raises:
        FileNotFoundError: If the start directory does not exist.
    """
    base = pathlib.Path(base_path)
    start = base.joinpath(*[p for p in relative_dir.split("/") if p])
    if not start.is_dir():
        raise FileNotFoundError(f"Directory not found: {start}")

    suffix = f".{extension}"
    # Each entry carries the real paths of its ancestors so that symbolic
    # links pointing back up the tree are not followed forever.
    stack = [(start, frozenset([os.path.realpath(start)]))]

    while stack:
        current, ancestors = stack.pop()

        subdirs = []
        for entry in sorted(current.iterdir(), key=lambda p: p.name):
            if entry.is_dir():
                real = os.path.realpath(entry)
                if real in ancestors:
                    logger.warning("Skipping directory loop at %s", entry)
                    continue
                subdirs.append((entry, ancestors | {real}))
                continue
            if not entry.is_file() or entry.suffix != suffix:
                continue
            # The file must carry the name of the directory holding it,
            # and that directory must sit below the base path.
            if entry.stem != current.name or current == base:
                continue
            link = current.parent.relative_to(base).as_posix()
            if link == ".":
                link = ""
            logger.debug("Found definition %s (link=%r)", entry, link)
            yield link, current.name, str(entry)

        # Reverse so the first sorted child is popped (and walked) first.
        stack.extend(reversed(subdirs))
