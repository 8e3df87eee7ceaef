"""
Name resolver: maps symbolic names to definition files.

A symbolic name is a list of segments joined by a separator (``_`` by
default).  The first segment is the namespace prefix, the last one is the
*leaf*, and everything in between is a directory path::

    Demo_Lib_Widgets_Button  ->  <base>/lib/widgets/button/button.py

The leaf is used twice: once as the innermost directory and once as the
file name, so each definition lives in a directory of its own next to any
resources it ships.  Path derivation is a pure string computation; it never
touches the filesystem and never fails, even for malformed names.

Usage::

    from convention_loader.resolver import Resolver

    resolver = Resolver('/srv/plugin', 'Demo')
    resolver.owns_name('Demo_Lib_Greeter')        # True
    resolver.resolve_file('Demo_Lib_Greeter')     # '/srv/plugin/lib/greeter/greeter.py'
    greeter = resolver.instantiate('Demo_Lib_Greeter', {'greeting': 'hi'})
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
import os
import sys
from types import ModuleType
from typing import Any, List, Mapping, Optional, TYPE_CHECKING

from .enumerator import iter_definitions
from .errors import DefinitionNotFoundError, NameNotOwnedError
from .factory import Factory, factory_for
from .models import NamePath
from .settings import LoaderSettings

if TYPE_CHECKING:
    from .finder import ResolutionChain

logger = logging.getLogger(__name__)


def _ucfirst(text: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def _symbolic_name(name_or_instance: Any) -> str:
    """Return the symbolic name of a string, a class or an instance."""
    if isinstance(name_or_instance, str):
        return name_or_instance
    if isinstance(name_or_instance, type):
        return name_or_instance.__name__
    return type(name_or_instance).__name__


class Resolver:
    """Resolve symbolic names under one base path and namespace prefix.

    Any number of resolvers may coexist, each jailed to its own base path
    and prefix.  Resolvers are usually obtained through a
    :class:`~convention_loader.registry.ResolverRegistry`, which hands out
    one instance per logical name.

    Args:
        base_path:  Absolute root directory of the definition tree.  Not
                    validated; a bad value surfaces later as a missing
                    file.
        prefix:     Namespace prefix identifying the names this resolver
                    handles.
        settings:   Separator/extension/ownership configuration.
        chain:      Optional :class:`ResolutionChain` to register with.
    """

    def __init__(
        self,
        base_path: Optional[str],
        prefix: Optional[str],
        settings: Optional[LoaderSettings] = None,
        chain: Optional["ResolutionChain"] = None,
    ) -> None:
        self._base_path = "" if base_path is None else os.fspath(base_path)
        self._prefix = prefix or ""
        self._settings = settings or LoaderSettings()
        if chain is not None:
            chain.register(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(base_path={self._base_path!r}, "
            f"prefix={self._prefix!r})"
        )

    # ------ read-only attributes ------

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def settings(self) -> LoaderSettings:
        return self._settings

    @property
    def signature(self) -> str:
        """The ``prefix + separator`` token searched for in owned names."""
        return self._prefix + self._settings.separator

    # ------ ownership ------

    def owns_name(self, name: str) -> bool:
        """Return ``True`` if *name* belongs to this resolver's namespace.

        By default this is a substring test: ``XDemo_Lib`` is owned by the
        ``Demo`` prefix.  Enable ``strict_ownership`` in the settings to
        require the signature at the start of the name.
        """
        if self._settings.strict_ownership:
            return name.startswith(self.signature)
        return self.signature in name

    def resolve(self, name: str) -> str:
        """Return the definition file for an owned *name*.

        Raises:
            NameNotOwnedError: If :meth:`owns_name` rejects *name*.
        """
        if not self.owns_name(name):
            raise NameNotOwnedError(name, self._prefix)
        return self.resolve_file(name)

    # ------ name <-> path ------

    def resolve_file(self, name: str) -> str:
        """Map *name* to the absolute path of its definition file.

        No check is made that the path exists, nor that *name* carries
        this resolver's prefix.

        Args:
            name: Symbolic name, e.g. ``Demo_Lib_Greeter``.

        Returns:
            ``<base>/lib/greeter/greeter.py`` for the example above.
        """
        # The prefix stands for the base path itself.
        components = name.lower().split(self._settings.separator)[1:]
        leaf = components[-1] if components else ""
        class_folder = os.sep.join(components)
        class_file = f"{class_folder}{os.sep}{leaf}.{self._settings.extension}"
        return f"{self._base_path}{os.sep}{class_file}"

    def build_name(self, type_path: str, name: Optional[str] = None) -> str:
        """Build a symbolic name from a relative directory and a leaf.

        ``/`` in *type_path* is only a path marker here; it is replaced with
        the separator.  Each segment gets its first letter upper-cased::

            resolver.build_name('database/mysql', 'table')
            # -> 'Demo_Database_Mysql_Table'
        """
        sep = self._settings.separator
        components = [self._prefix]
        if type_path:
            components.extend(
                _ucfirst(part)
                for part in type_path.replace("/", sep).split(sep)
            )
        if name:
            components.append(_ucfirst(name))
        return sep.join(components)

    def describe_name(self, name_or_instance: Any) -> NamePath:
        """Split a symbolic name (or an object's class name) into parts.

        Args:
            name_or_instance: Symbolic name, class, or instance.

        Returns:
            A :class:`NamePath`.  For a two-segment name such as
            ``Demo_Greeter`` the ``path`` is the bare ``os.sep``.
        """
        raw = _symbolic_name(name_or_instance).split(self._settings.separator)
        path = os.sep + "".join(part.lower() + os.sep for part in raw[1:-1])
        return NamePath(
            prefix=raw[0].lower(),
            path=path,
            file=raw[-1].lower(),
            extension=self._settings.extension,
        )

    def relative_file(self, name_or_instance: Any, relative_path: str) -> str:
        """Absolute path of a file inside a definition's own directory.

        Args:
            name_or_instance: Symbolic name, class, or instance owning
                              the file.
            relative_path:    ``/``-separated path below the leaf
                              directory, e.g. ``templates/hello.txt``.
        """
        components = self.describe_name(name_or_instance)
        file_path = f"{components.file}{os.sep}{self.os_based_path(relative_path)}"
        return f"{self._base_path}{components.path}{file_path}"

    @staticmethod
    def os_based_path(path: str) -> str:
        """Replace ``/`` with the platform directory separator."""
        return path.replace("/", os.sep)

    # ------ enumeration ------

    def list_names(self, relative_dir: str = "") -> List[str]:
        """List the symbolic names of every definition below *relative_dir*.

        Only names that resolve back to the file they were found at are
        listed.  Definitions in directories with upper-case letters or with
        the separator in their name cannot be addressed and are skipped.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """
        names = []
        for link, leaf, file_path in iter_definitions(
            self._base_path, relative_dir, self._settings.extension,
        ):
            name = self.build_name(link, leaf)
            resolved = self.resolve_file(name)
            if os.path.normpath(resolved) != os.path.normpath(file_path):
                logger.warning(
                    "Skipping %s: name %r resolves to %s",
                    file_path, name, resolved,
                )
                continue
            names.append(name)
        logger.debug(
            "Found %d definition(s) under %r: %s",
            len(names), relative_dir, ", ".join(names) or "(none)",
        )
        return names

    # ------ loading ------

    def load_module(self, name: str) -> ModuleType:
        """Import the definition file of *name* as module *name*.

        Loading happens once; later calls return the module cached in
        ``sys.modules``.  Errors from the import machinery (missing file,
        syntax error, exception in the module body) are propagated.
        """
        module = sys.modules.get(name)
        if module is not None:
            return module

        file_path = self.resolve_file(name)
        loader = importlib.machinery.SourceFileLoader(name, file_path)
        spec = importlib.util.spec_from_file_location(
            name, file_path, loader=loader,
        )
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            loader.exec_module(module)
        except BaseException:
            sys.modules.pop(name, None)
            raise

        logger.info("Loaded %s from %s", name, file_path)
        return module

    def load_class(self, name: str) -> type:
        """Load *name* and return the class of the same name it defines.

        Raises:
            DefinitionNotFoundError: If the module has no attribute *name*.
        """
        module = self.load_module(name)
        cls = getattr(module, name, None)
        if cls is None:
            raise DefinitionNotFoundError(name, self.resolve_file(name))
        return cls

    def instantiate(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        factory: Optional[Factory] = None,
    ) -> Any:
        """Create (or fetch the shared) instance of definition *name*.

        Args:
            name:     Symbolic name of the class.
            params:   Parameters for the class; defaults to ``{}``.
            factory:  Explicit :class:`Factory`.  When omitted, classes
                      providing a shared instance go through
                      ``get_instance``; others are constructed with
                      *params* as their single argument.
        """
        if params is None:
            params = {}
        cls = self.load_class(name)
        factory = factory or factory_for(cls)
        return factory.create(cls, params)

    def instance_of(
        self,
        type_path: str,
        name: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
        factory: Optional[Factory] = None,
    ) -> Any:
        """Instantiate the class at *type_path*/*name*.

        Shortcut for ``instantiate(build_name(type_path, name), ...)``.
        """
        return self.instantiate(
            self.build_name(type_path, name), params, factory,
        )
