"""Tests for the resolver registry."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from convention_loader.finder import ResolutionChain
from convention_loader.registry import (
    ResolverRegistry,
    default_registry,
    reset_default_registry,
)
from convention_loader.resolver import Resolver
from convention_loader.settings import LoaderSettings


class TestGetOrCreate:
    def test_creates_resolver(self):
        reg = ResolverRegistry()
        resolver = reg.get_or_create("plugin", "/srv/plugin", "Demo")
        assert isinstance(resolver, Resolver)
        assert resolver.base_path == "/srv/plugin"
        assert resolver.prefix == "Demo"

    def test_first_registration_wins(self):
        reg = ResolverRegistry()
        first = reg.get_or_create("plugin", "/srv/plugin", "Demo")
        second = reg.get_or_create("plugin", "/somewhere/else", "Other")
        assert second is first
        assert second.base_path == "/srv/plugin"
        assert second.prefix == "Demo"

    def test_lookup_without_arguments(self):
        reg = ResolverRegistry()
        first = reg.get_or_create("plugin", "/srv/plugin", "Demo")
        assert reg.get_or_create("plugin") is first

    def test_distinct_names_distinct_resolvers(self):
        reg = ResolverRegistry()
        a = reg.get_or_create("a", "/a", "A")
        b = reg.get_or_create("b", "/b", "B")
        assert a is not b
        assert reg.names() == ["a", "b"]
        assert len(reg) == 2

    def test_anonymous_slot_is_reused(self):
        reg = ResolverRegistry()
        first = reg.get_or_create(None, "/srv/plugin", "Demo")
        assert reg.get_or_create() is first
        assert None in reg
        assert reg.get() is first

    def test_collision_with_other_prefix_is_logged(self, caplog):
        reg = ResolverRegistry()
        first = reg.get_or_create("plugin", "/srv/plugin", "Demo")
        with caplog.at_level("DEBUG", logger="convention_loader.registry"):
            assert reg.get_or_create("plugin", prefix="Other") is first
        assert "ignoring" in caplog.text
        assert first.prefix == "Demo"

    def test_plain_lookup_is_not_logged(self, caplog):
        reg = ResolverRegistry()
        reg.get_or_create("plugin", "/srv/plugin", "Demo")
        with caplog.at_level("DEBUG", logger="convention_loader.registry"):
            reg.get_or_create("plugin")
        assert "ignoring" not in caplog.text

    def test_get_unknown_name(self):
        assert ResolverRegistry().get("missing") is None

    def test_settings_passed_to_resolvers(self):
        settings = LoaderSettings(separator=".")
        reg = ResolverRegistry(settings=settings)
        assert reg.get_or_create("x", "/x", "X").settings is settings


class TestChainRegistration:
    def test_resolvers_join_chain_in_order(self):
        chain = ResolutionChain()
        reg = ResolverRegistry(chain=chain)
        a = reg.get_or_create("a", "/a", "A")
        b = reg.get_or_create("b", "/b", "B")
        reg.get_or_create("a", "/other", "Other")
        assert chain.handlers == (a, b)

    def test_registry_creates_its_own_chain(self):
        reg = ResolverRegistry()
        resolver = reg.get_or_create("a", "/a", "A")
        assert reg.chain.handlers == (resolver,)


class TestConcurrency:
    def test_one_resolver_per_name_under_contention(self):
        reg = ResolverRegistry()
        barrier = threading.Barrier(16)

        def _create(i):
            barrier.wait()
            return reg.get_or_create("shared", f"/base/{i}", f"P{i}")

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(_create, range(16)))

        assert len({id(r) for r in results}) == 1
        assert len(reg) == 1
        assert len(reg.chain.handlers) == 1


class TestDefaultRegistry:
    def test_same_instance(self):
        assert default_registry() is default_registry()

    def test_reset(self):
        first = default_registry()
        reset_default_registry()
        assert default_registry() is not first

    def test_reset_uninstalls_chain(self):
        import sys
        reg = default_registry()
        reg.chain.install()
        assert reg.chain in sys.meta_path
        reset_default_registry()
        assert reg.chain not in sys.meta_path
