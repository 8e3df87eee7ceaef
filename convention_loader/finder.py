"""
Import-system integration.

:class:`ResolutionChain` keeps an ordered list of handlers (normally
:class:`~convention_loader.resolver.Resolver` instances) and plugs them into
Python's import machinery as a meta path finder.  Once installed, importing
a symbolic name loads its definition file::

    chain = ResolutionChain()
    Resolver('/srv/plugin', 'Demo', chain=chain)
    chain.install()

    import Demo_Lib_Greeter          # /srv/plugin/lib/greeter/greeter.py

Names no handler owns are left to the rest of ``sys.meta_path``.  An owned
name whose file is missing or broken is *not* treated as "not found": the
import fails with the original error.
"""

from __future__ import annotations

import importlib.abc
import importlib.machinery
import importlib.util
import logging
import sys
from typing import List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)


class NameHandler(Protocol):
    """Interface a handler must provide to join a :class:`ResolutionChain`."""

    def owns_name(self, name: str) -> bool: ...

    def resolve(self, name: str) -> str: ...

    def load_module(self, name: str): ...


class ResolutionChain(importlib.abc.MetaPathFinder):
    """Ordered set of name handlers acting as a meta path finder."""

    def __init__(self) -> None:
        self._handlers: List[NameHandler] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handlers={len(self._handlers)})"

    # ------ handler management ------

    @property
    def handlers(self) -> Tuple[NameHandler, ...]:
        """Registered handlers in registration order."""
        return tuple(self._handlers)

    def register(self, handler: NameHandler) -> None:
        """Append *handler*; registering the same object twice is a no-op."""
        if any(h is handler for h in self._handlers):
            return
        self._handlers.append(handler)
        logger.debug("Registered handler %r", handler)

    def unregister(self, handler: NameHandler) -> None:
        self._handlers = [h for h in self._handlers if h is not handler]

    # ------ resolution ------

    def find_handler(self, name: str) -> Optional[NameHandler]:
        """Return the first handler owning *name*, or ``None``."""
        for handler in self._handlers:
            if handler.owns_name(name):
                return handler
        return None

    def resolve(self, name: str) -> Optional[str]:
        """Return the definition file for *name*, or ``None`` if unowned."""
        handler = self.find_handler(name)
        if handler is None:
            return None
        return handler.resolve(name)

    def load(self, name: str) -> bool:
        """Load *name* through its owning handler.

        Returns ``False`` when no handler owns the name.  Load errors are
        propagated.
        """
        handler = self.find_handler(name)
        if handler is None:
            logger.debug("No handler owns %r", name)
            return False
        handler.load_module(name)
        return True

    # ------ MetaPathFinder protocol ------

    def find_spec(
        self,
        fullname: str,
        path: Optional[Sequence[str]] = None,
        target=None,
    ) -> Optional[importlib.machinery.ModuleSpec]:
        file_path = self.resolve(fullname)
        if file_path is None:
            return None
        logger.debug("Resolved import %r to %s", fullname, file_path)
        loader = importlib.machinery.SourceFileLoader(fullname, file_path)
        return importlib.util.spec_from_file_location(
            fullname, file_path, loader=loader,
        )

    # ------ installation ------

    def install(self, meta_path: Optional[list] = None) -> None:
        """Append this chain to *meta_path* (``sys.meta_path`` by default)."""
        meta_path = sys.meta_path if meta_path is None else meta_path
        if self not in meta_path:
            meta_path.append(self)
            logger.info("Installed %r on the meta path", self)

    def uninstall(self, meta_path: Optional[list] = None) -> None:
        meta_path = sys.meta_path if meta_path is None else meta_path
        if self in meta_path:
            meta_path.remove(self)

    @property
    def installed(self) -> bool:
        return self in sys.meta_path
