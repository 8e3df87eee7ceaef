"""
Instance factories.

A loaded definition is turned into an object by a :class:`Factory`.  Two
are provided:

- :class:`SharedInstanceFactory` for classes implementing
  :class:`SharedInstanceProvider` (the class decides whether to hand out
  a cached object or a new one).
- :class:`ConstructorFactory` for everything else: the class is called
  with the whole parameter mapping as its only argument.

:func:`factory_for` picks between them from the class itself, so callers
that do not care can pass no factory at all.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class SharedInstanceProvider(ABC):
    """Capability for classes that manage their own shared instance."""

    @classmethod
    @abstractmethod
    def get_instance(cls, **params: Any) -> Any:
        """Return the shared instance, creating it on first use."""
        ...


class Factory(ABC):
    """Creates an object from a loaded class and a parameter mapping."""

    @abstractmethod
    def create(self, cls: type, params: Mapping[str, Any]) -> Any:
        ...


class SharedInstanceFactory(Factory):
    """Delegate to ``cls.get_instance(**params)``."""

    def create(self, cls: type, params: Mapping[str, Any]) -> Any:
        return cls.get_instance(**params)


class ConstructorFactory(Factory):
    """Construct a fresh object, passing *params* as a single argument."""

    def create(self, cls: type, params: Mapping[str, Any]) -> Any:
        return cls(params)


def factory_for(cls: type) -> Factory:
    """Return the default factory for *cls*."""
    if isinstance(cls, type) and issubclass(cls, SharedInstanceProvider):
        return SharedInstanceFactory()
    return ConstructorFactory()
