"""
Exception hierarchy for the convention loader.

Only conditions the loader itself detects get a dedicated type.  A missing
definition file or a module that fails while executing is reported by the
import machinery (``FileNotFoundError``, ``SyntaxError``, ...) and is
propagated unchanged.
"""


class ConventionLoaderError(Exception):
    """Base class for every error raised by this package."""


class NameNotOwnedError(ConventionLoaderError, LookupError):
    """A symbolic name does not belong to the resolver's namespace."""

    def __init__(self, name: str, prefix: str):
        super().__init__(
            f"Name {name!r} is not owned by namespace prefix {prefix!r}."
        )
        self.name = name
        self.prefix = prefix


class DefinitionNotFoundError(ConventionLoaderError, LookupError):
    """A definition file was loaded but does not define the requested class."""

    def __init__(self, name: str, file_path: str):
        super().__init__(
            f"Module {file_path!r} was loaded but defines no {name!r}."
        )
        self.name = name
        self.file_path = file_path
