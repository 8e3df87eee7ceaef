"""
Resolver registry.

A :class:`ResolverRegistry` hands out at most one
:class:`~convention_loader.resolver.Resolver` per logical name.  The first
call for a name decides the resolver's base path and prefix; later calls
with different arguments get the existing instance back.  ``None`` is a
valid name and addresses a single anonymous slot.

The registry owns a :class:`~convention_loader.finder.ResolutionChain`
that every resolver it creates joins, so installing the chain makes all
of them importable.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Hashable, List, Optional

from .finder import ResolutionChain
from .resolver import Resolver
from .settings import LoaderSettings

logger = logging.getLogger(__name__)


class ResolverRegistry:
    """Process- or application-wide cache of resolvers keyed by name.

    Args:
        chain:     Resolution chain new resolvers register with.  A fresh
                   one is created when omitted.
        settings:  Settings given to every resolver this registry builds.
    """

    def __init__(
        self,
        chain: Optional[ResolutionChain] = None,
        settings: Optional[LoaderSettings] = None,
    ) -> None:
        self._chain = chain if chain is not None else ResolutionChain()
        self._settings = settings or LoaderSettings()
        self._resolvers: Dict[Optional[Hashable], Resolver] = {}
        self._lock = threading.Lock()

    @property
    def chain(self) -> ResolutionChain:
        return self._chain

    @property
    def settings(self) -> LoaderSettings:
        return self._settings

    def __contains__(self, name: Optional[Hashable]) -> bool:
        return name in self._resolvers

    def __len__(self) -> int:
        return len(self._resolvers)

    def get(self, name: Optional[Hashable] = None) -> Optional[Resolver]:
        """Return the resolver registered under *name*, or ``None``."""
        return self._resolvers.get(name)

    def names(self) -> List[Optional[Hashable]]:
        """Registered logical names, in registration order."""
        return list(self._resolvers)

    def get_or_create(
        self,
        name: Optional[Hashable] = None,
        base_path: Optional[str] = None,
        prefix: str = "",
    ) -> Resolver:
        """Return the resolver for *name*, creating it on first request.

        Args:
            name:       Logical name; ``None`` selects the anonymous slot.
            base_path:  Base path used only if the resolver is created now.
            prefix:     Prefix used only if the resolver is created now.

        Returns:
            The one :class:`Resolver` stored under *name*.
        """
        with self._lock:
            existing = self._resolvers.get(name)
            if existing is not None:
                base_differs = (
                    base_path is not None and existing.base_path != base_path
                )
                prefix_differs = bool(prefix) and existing.prefix != prefix
                if base_differs or prefix_differs:
                    logger.debug(
                        "Resolver %r already registered as %r; ignoring "
                        "base_path=%r prefix=%r",
                        name, existing, base_path, prefix,
                    )
                return existing

            resolver = Resolver(
                base_path, prefix, settings=self._settings, chain=self._chain,
            )
            self._resolvers[name] = resolver
            logger.info("Registered resolver %r as %r", name, resolver)
            return resolver


_default_registry: Optional[ResolverRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> ResolverRegistry:
    """Return the shared registry used when none is injected."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = ResolverRegistry()
        return _default_registry


def reset_default_registry() -> None:
    """Drop the shared registry (its chain is uninstalled first)."""
    global _default_registry
    with _default_lock:
        if _default_registry is not None:
            _default_registry.chain.uninstall()
        _default_registry = None
