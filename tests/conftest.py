"""Shared fixtures for the convention loader tests."""

from __future__ import annotations

import sys
import textwrap

import pytest

from convention_loader.registry import reset_default_registry

# Module names created by the tests; purged from sys.modules after each test.
_TEST_PREFIXES = ("Tst_", "Demo_", "Alt_")


def write_definition(root, rel_dir: str, body: str, extension: str = "py"):
    """Write ``<root>/<rel_dir>/<leaf>.<extension>`` and return its path."""
    directory = root.joinpath(*rel_dir.split("/"))
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{directory.name}.{extension}"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolate_loader_state():
    yield
    for name in list(sys.modules):
        if name.startswith(_TEST_PREFIXES):
            del sys.modules[name]
    reset_default_registry()


@pytest.fixture
def plugin_tree(tmp_path):
    """A small definition tree using the ``Tst`` prefix.

    Layout::

        plugin/
          lib/greeter/greeter.py            Tst_Lib_Greeter
          lib/greeter/templates/hello.txt
          lib/widgets/button/button.py      Tst_Lib_Widgets_Button
          lib/widgets/notes/todo.py         (name differs from directory)
          lib/data/data.txt                 (wrong extension)
          lib/misnamed/other.py             (name differs from directory)
    """
    root = tmp_path / "plugin"
    write_definition(root, "lib/greeter", """\
        class Tst_Lib_Greeter:
            def __init__(self, params):
                self.params = params
    """)
    (root / "lib" / "greeter" / "templates").mkdir()
    (root / "lib" / "greeter" / "templates" / "hello.txt").write_text("hi")
    write_definition(root, "lib/widgets/button", """\
        class Tst_Lib_Widgets_Button:
            def __init__(self, params):
                self.label = params.get("label", "")
    """)
    notes = root / "lib" / "widgets" / "notes"
    notes.mkdir(parents=True)
    (notes / "todo.py").write_text("ITEMS = []\n")
    data = root / "lib" / "data"
    data.mkdir()
    (data / "data.txt").write_text("not python")
    misnamed = root / "lib" / "misnamed"
    misnamed.mkdir()
    (misnamed / "other.py").write_text("X = 1\n")
    return root
