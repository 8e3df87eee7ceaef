"""
Loader settings.

A :class:`LoaderSettings` instance carries the few knobs that shape the
name <-> path convention.  Defaults reproduce the legacy behaviour: the
``_`` separator, ``.py`` definition files and the loose (substring)
ownership test.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_SEPARATOR = "_"
DEFAULT_EXTENSION = "py"

ENV_SEPARATOR = "CONVENTION_LOADER_SEPARATOR"
ENV_EXTENSION = "CONVENTION_LOADER_EXTENSION"
ENV_STRICT = "CONVENTION_LOADER_STRICT"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LoaderSettings:
    """Immutable configuration shared by resolvers.

    Attributes:
        separator:  Single character splitting a symbolic name into
                    segments.
        extension:  Extension (without the dot) of definition files.
        strict_ownership:  When ``True`` a name is owned only if it
                           *starts with* ``prefix + separator``.  The
                           default ``False`` keeps the legacy substring
                           match, which also accepts names that merely
                           contain the signature.
    """

    separator: str = DEFAULT_SEPARATOR
    extension: str = DEFAULT_EXTENSION
    strict_ownership: bool = False

    def __post_init__(self) -> None:
        if len(self.separator) != 1:
            raise ValueError(
                f"Separator must be a single character, got {self.separator!r}."
            )

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None,
    ) -> "LoaderSettings":
        """Build settings from ``CONVENTION_LOADER_*`` environment variables.

        Unset variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        strict = env.get(ENV_STRICT, "").strip().lower() in _TRUE_VALUES
        return cls(
            separator=env.get(ENV_SEPARATOR) or DEFAULT_SEPARATOR,
            extension=(env.get(ENV_EXTENSION) or DEFAULT_EXTENSION).lstrip("."),
            strict_ownership=strict,
        )
