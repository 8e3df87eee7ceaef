"""
MCP Server for the convention loader.

Exposes the name <-> path convention as Model Context Protocol tools so an
MCP client can ask where a definition lives, what a directory tree
contains, or which symbolic name a file would have.

Configuration comes from the ``configure_loader`` tool or from the
environment at startup:

    CONVENTION_LOADER_BASE_PATH   root of the definition tree
    CONVENTION_LOADER_PREFIX      namespace prefix
    CONVENTION_LOADER_SEPARATOR / _EXTENSION / _STRICT
                                  see :mod:`convention_loader.settings`

Usage:
    python -m convention_loader.mcp_server
    # or
    convention-loader-mcp
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
import sys
from typing import Optional
from urllib.parse import unquote, urlparse

from mcp.server.fastmcp import FastMCP

from .registry import ResolverRegistry
from .resolver import Resolver
from .settings import LoaderSettings

# ---------------------------------------------------------------------------
# Logging (stderr only -- stdout is reserved for MCP protocol)
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger("convention-loader-mcp")

ENV_BASE_PATH = "CONVENTION_LOADER_BASE_PATH"
ENV_PREFIX = "CONVENTION_LOADER_PREFIX"

# ---------------------------------------------------------------------------
# MCP Server
# ---------------------------------------------------------------------------
mcp = FastMCP(
    "Convention Loader",
    instructions=(
        "Tools for locating plugin class definitions by naming convention. "
        "A symbolic name like Demo_Lib_Greeter maps to "
        "<base>/lib/greeter/greeter.py.\n\n"
        "Call configure_loader first unless the server was started with "
        "CONVENTION_LOADER_BASE_PATH and CONVENTION_LOADER_PREFIX set."
    ),
)

# ---------------------------------------------------------------------------
# Server state
# ---------------------------------------------------------------------------
_registry = ResolverRegistry(settings=LoaderSettings.from_env())
_resolver: Optional[Resolver] = None


def _require_resolver() -> Resolver:
    """Return the configured resolver or raise an error."""
    if _resolver is None:
        raise RuntimeError(
            "No loader configured. Call configure_loader first."
        )
    return _resolver


def _normalize_path(raw_path: str) -> str:
    """Turn a client-supplied path or ``file://`` URI into an absolute path."""
    path = raw_path.strip().strip('"').strip("'")
    if path.startswith("file://"):
        path = unquote(urlparse(path).path)
    return os.path.abspath(path)


def _loader_info(resolver: Resolver) -> dict:
    settings = resolver.settings
    return {
        'base_path': resolver.base_path,
        'prefix': resolver.prefix,
        'separator': settings.separator,
        'extension': settings.extension,
        'strict_ownership': settings.strict_ownership,
    }


def configure(base_path: str, prefix: str) -> Resolver:
    """Select (creating on first use) the resolver for *base_path*/*prefix*."""
    global _resolver
    base_path = _normalize_path(base_path)
    _resolver = _registry.get_or_create(
        f"{prefix}@{base_path}", base_path, prefix,
    )
    log.info("Using %r", _resolver)
    return _resolver


# ===================================================================
# Tools
# ===================================================================

@mcp.tool()
def configure_loader(base_path: str, prefix: str) -> str:
    """Point the server at a definition tree.

    Args:
        base_path: Absolute path to the root of the definition tree.
        prefix: Namespace prefix of the symbolic names (e.g. "Demo").
    """
    try:
        if not prefix:
            return "Error: prefix must not be empty."
        resolver = configure(base_path, prefix)
        info = _loader_info(resolver)
        info['exists'] = os.path.isdir(resolver.base_path)
        return json.dumps(info, indent=2)
    except Exception as e:
        return f"Error configuring loader: {e}"


@mcp.tool()
def get_loader_info() -> str:
    """Show the active base path, prefix and naming settings."""
    try:
        return json.dumps(_loader_info(_require_resolver()), indent=2)
    except Exception as e:
        return f"Error: {e}"


@mcp.tool()
def resolve_name(name: str) -> str:
    """Find the definition file for a symbolic name.

    Args:
        name: Symbolic name, e.g. "Demo_Lib_Greeter".
    """
    try:
        resolver = _require_resolver()
        file_path = resolver.resolve_file(name)
        return json.dumps({
            'name': name,
            'owned': resolver.owns_name(name),
            'file': file_path,
            'exists': os.path.isfile(file_path),
        }, indent=2)
    except Exception as e:
        return f"Error resolving name: {e}"


@mcp.tool()
def describe_name(name: str) -> str:
    """Split a symbolic name into prefix, directory path and file name."""
    try:
        components = _require_resolver().describe_name(name)
        result = dataclasses.asdict(components)
        result['file_name'] = components.file_name
        return json.dumps(result, indent=2)
    except Exception as e:
        return f"Error describing name: {e}"


@mcp.tool()
def build_name(type_path: str, name: str = "") -> str:
    """Build a symbolic name from a relative directory and a leaf name.

    Args:
        type_path: Directory path using "/" (e.g. "lib/widgets").
        name: Leaf name (e.g. "button").  Optional.
    """
    try:
        return _require_resolver().build_name(type_path, name or None)
    except Exception as e:
        return f"Error building name: {e}"


@mcp.tool()
def list_names(relative_dir: str = "") -> str:
    """List every definition below a directory of the tree.

    Args:
        relative_dir: Directory relative to the base path, "/"-separated.
                      Empty for the whole tree.
    """
    try:
        names = _require_resolver().list_names(relative_dir)
        return json.dumps({'names': names, 'total': len(names)}, indent=2)
    except Exception as e:
        return f"Error listing names: {e}"


@mcp.tool()
def relative_file(name: str, relative_path: str) -> str:
    """Locate a resource file inside a definition's own directory.

    Args:
        name: Symbolic name owning the resource.
        relative_path: "/"-separated path below the definition directory.
    """
    try:
        file_path = _require_resolver().relative_file(name, relative_path)
        return json.dumps({
            'file': file_path,
            'exists': os.path.exists(file_path),
        }, indent=2)
    except Exception as e:
        return f"Error: {e}"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    """Run the MCP server on stdio transport."""
    base_path = os.environ.get(ENV_BASE_PATH)
    prefix = os.environ.get(ENV_PREFIX)
    if base_path and prefix:
        configure(base_path, prefix)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
