"""
Value objects returned by the resolver.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NamePath:
    """Path components derived from a symbolic name.

    Attributes:
        prefix:     Lower-cased namespace segment (first segment).
        path:       Directory path between the base path and the leaf
                    directory.  Always starts and ends with ``os.sep``;
                    a bare ``os.sep`` means the root.
        file:       Lower-cased leaf segment (no extension).
        extension:  Definition file extension, without the dot.
    """

    prefix: str
    path: str
    file: str
    extension: str

    @property
    def file_name(self) -> str:
        """Leaf file name with its extension, e.g. ``greeter.py``."""
        return f"{self.file}.{self.extension}"
