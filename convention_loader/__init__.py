"""
Convention Loader - naming-convention based class loading for plugins.

A symbolic class name doubles as a path: ``Demo_Lib_Greeter`` lives in
``<base>/lib/greeter/greeter.py``.  Resolvers map names to files, a
registry keeps one resolver per logical name, and a resolution chain hooks
them into Python's import system so definitions load on first reference.

Usage:
    from convention_loader import ResolverRegistry

    registry = ResolverRegistry()
    resolver = registry.get_or_create('demo', '/srv/plugin', 'Demo')
    registry.chain.install()

    # Path derivation
    resolver.resolve_file('Demo_Lib_Greeter')   # /srv/plugin/lib/greeter/greeter.py
    resolver.describe_name('Demo_Lib_Greeter')  # NamePath(prefix='demo', path='/lib/', ...)
    resolver.build_name('lib/widgets', 'button')   # 'Demo_Lib_Widgets_Button'

    # Enumeration
    resolver.list_names('lib')

    # Loading
    import Demo_Lib_Greeter
    greeter = resolver.instantiate('Demo_Lib_Greeter', {'greeting': 'hi'})
"""

__version__ = '0.1.0'

_EXPORTS = {
    'Resolver': 'resolver',
    'ResolverRegistry': 'registry',
    'default_registry': 'registry',
    'ResolutionChain': 'finder',
    'ConventionObject': 'descriptor',
    'NamePath': 'models',
    'LoaderSettings': 'settings',
    'Factory': 'factory',
    'SharedInstanceProvider': 'factory',
    'SharedInstanceFactory': 'factory',
    'ConstructorFactory': 'factory',
    'ConventionLoaderError': 'errors',
    'NameNotOwnedError': 'errors',
    'DefinitionNotFoundError': 'errors',
}


def __getattr__(name):
    """Lazy import of the public names."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    import importlib
    module = importlib.import_module(f".{module_name}", __name__)
    return getattr(module, name)


__all__ = list(_EXPORTS)
