"""
Base class for objects that know where their own definition lives.

Subclasses must follow the naming convention: the class name is its
symbolic name (``Demo_Lib_Greeter``).  The resolver comes from the
anonymous slot of a :class:`~convention_loader.registry.ResolverRegistry`,
the shared default one unless ``loader_registry`` is set on the class.

Example::

    class Demo_Lib_Greeter(ConventionObject):
        def template(self):
            return self.relative_file('templates/hello.txt')

    Demo_Lib_Greeter().class_file_name   # 'greeter.py'
"""

from __future__ import annotations

from typing import ClassVar, Optional

from .models import NamePath
from .registry import ResolverRegistry, default_registry
from .resolver import Resolver


class ConventionObject:
    """Mixin exposing an object's derived name and path."""

    loader_registry: ClassVar[Optional[ResolverRegistry]] = None
    """Registry to take the resolver from; ``None`` uses the default."""

    @property
    def loader(self) -> Resolver:
        registry = self.loader_registry
        if registry is None:
            registry = default_registry()
        return registry.get_or_create()

    @property
    def name_path(self) -> NamePath:
        return self.loader.describe_name(self)

    @property
    def class_file_name(self) -> str:
        """Definition file name, extension included."""
        return self.name_path.file_name

    @property
    def class_leaf_name(self) -> str:
        """Definition file name without the extension."""
        return self.name_path.file

    def relative_file(self, relative_path: str) -> str:
        """Absolute path of a resource inside this class's directory."""
        return self.loader.relative_file(self, relative_path)
