"""Tests for the self-describing base class."""

from __future__ import annotations

import os

from convention_loader.descriptor import ConventionObject
from convention_loader.registry import ResolverRegistry, default_registry

SEP = os.sep
BASE = f"{SEP}srv{SEP}plugin"

_registry = ResolverRegistry()
_registry.get_or_create(None, BASE, "Tst")


class Tst_Lib_Widgets_Button(ConventionObject):
    loader_registry = _registry


class Tst_Greeter(ConventionObject):
    loader_registry = _registry


class Alt_Lib_Thing(ConventionObject):
    pass


class TestInjectedRegistry:
    def test_loader_is_anonymous_slot(self):
        assert Tst_Greeter().loader is _registry.get()

    def test_class_file_name(self):
        assert Tst_Lib_Widgets_Button().class_file_name == "button.py"

    def test_class_leaf_name(self):
        assert Tst_Lib_Widgets_Button().class_leaf_name == "button"

    def test_name_path(self):
        desc = Tst_Lib_Widgets_Button().name_path
        assert desc.prefix == "tst"
        assert desc.path == f"{SEP}lib{SEP}widgets{SEP}"

    def test_root_level_class(self):
        greeter = Tst_Greeter()
        assert greeter.class_file_name == "greeter.py"
        assert greeter.name_path.path == SEP

    def test_relative_file(self):
        assert Tst_Lib_Widgets_Button().relative_file("img/icon.png") == SEP.join(
            [BASE, "lib", "widgets", "button", "img", "icon.png"]
        )


class TestDefaultRegistry:
    def test_uses_default_anonymous_slot(self):
        resolver = default_registry().get_or_create(None, "/alt", "Alt")
        thing = Alt_Lib_Thing()
        assert thing.loader is resolver
        assert thing.class_file_name == "thing.py"

    def test_works_before_configuration(self):
        # An unconfigured slot still derives names; only paths are degenerate.
        assert Alt_Lib_Thing().class_leaf_name == "thing"
