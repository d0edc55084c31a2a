"""Tests for template sources, resolution and resource loading."""

import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from msgbuild.exceptions import MissingPayloadTemplate, TemplateResourceUnreadable, UnresolvedVariable
from msgbuild.resources.loader import ResourceLoader
from msgbuild.templates import UNSET, Literal, Resource, TemplateResolver


class TestTemplateResolver:
    """Literal/resource/unset resolution."""

    def test_literal(self, resource_loader):
        resolver = TemplateResolver(resource_loader)
        assert resolver.resolve(Literal("Hi ${who}"), {"who": "there"}) == "Hi there"

    def test_unset_resolves_to_none(self, resource_loader):
        assert TemplateResolver(resource_loader).resolve(UNSET, {}) is None

    def test_resource_substituted_after_load(self):
        loader = Mock()
        loader.load.return_value = "Hi ${who}"
        resolver = TemplateResolver(loader)

        result = resolver.resolve(Resource("classpath:x.txt", "latin-1"), {"who": "there"})

        assert result == "Hi there"
        loader.load.assert_called_once_with("classpath:x.txt", encoding="latin-1")

    def test_resource_is_read_on_every_call(self):
        loader = Mock()
        loader.load.side_effect = ["first", "second"]
        resolver = TemplateResolver(loader)

        assert resolver.resolve(Resource("r"), {}) == "first"
        assert resolver.resolve(Resource("r"), {}) == "second"

    def test_load_failure_names_locator(self):
        loader = Mock()
        loader.load.side_effect = PermissionError("denied")
        resolver = TemplateResolver(loader)

        with pytest.raises(TemplateResourceUnreadable) as exc_info:
            resolver.resolve(Resource("file:/secret.txt"), {}, field="header_data[0]")

        assert exc_info.value.locator == "file:/secret.txt"
        assert exc_info.value.field == "header_data[0]"
        assert "file:/secret.txt" in str(exc_info.value)

    def test_payload_is_mandatory(self, resource_loader):
        with pytest.raises(MissingPayloadTemplate):
            TemplateResolver(resource_loader).resolve_payload(UNSET, {})

    def test_header_data_skips_unset_blocks(self, resource_loader):
        resolver = TemplateResolver(resource_loader)
        sources = [Literal("a"), UNSET, Resource("classpath:templates/header-data-resource.txt")]

        assert resolver.resolve_header_data(sources, {}) == ["a", "MessageHeaderData"]

    def test_unresolved_variable_in_resource(self, resource_loader):
        resolver = TemplateResolver(resource_loader)
        with pytest.raises(UnresolvedVariable):
            resolver.resolve(Resource("classpath:templates/variable-data-resource.txt"), {})

    def test_sources_are_immutable(self):
        with pytest.raises(AttributeError):
            Literal("a").text = "b"


class TestResourceLoader:
    """Locator forms understood by the loader."""

    def test_classpath_search_order(self):
        with tempfile.TemporaryDirectory() as first, tempfile.TemporaryDirectory() as second:
            Path(second, "t.txt").write_text("from second")
            loader = ResourceLoader(search_paths=[first, second])
            assert loader.load("classpath:t.txt") == "from second"

            Path(first, "t.txt").write_text("from first")
            assert loader.load("classpath:/t.txt") == "from first"

    def test_classpath_missing(self):
        with tempfile.TemporaryDirectory() as root:
            loader = ResourceLoader(search_paths=[root])
            with pytest.raises(FileNotFoundError):
                loader.load("classpath:missing.txt")

    def test_file_locators(self):
        with tempfile.TemporaryDirectory() as root:
            Path(root, "data.txt").write_text("content")
            loader = ResourceLoader(search_paths=[], base_dir=root)

            assert loader.load("file:data.txt") == "content"
            assert loader.load("data.txt") == "content"
            assert loader.load(f"file:{Path(root, 'data.txt')}") == "content"

    def test_encoding(self):
        with tempfile.TemporaryDirectory() as root:
            Path(root, "latin.txt").write_bytes("caf\xe9".encode("latin-1"))
            loader = ResourceLoader(base_dir=root, encoding="latin-1")
            assert loader.load("latin.txt") == "caf\xe9"

            strict = ResourceLoader(base_dir=root, encoding="utf-8")
            with pytest.raises(UnicodeDecodeError):
                strict.load("latin.txt")
            assert strict.load("latin.txt", encoding="latin-1") == "caf\xe9"

    def test_directory_is_not_a_resource(self):
        with tempfile.TemporaryDirectory() as root:
            Path(root, "sub").mkdir()
            with pytest.raises(FileNotFoundError):
                ResourceLoader(base_dir=root).load("sub")


def test_undecodable_resource_is_unreadable():
    with tempfile.TemporaryDirectory() as root:
        Path(root, "bin.txt").write_bytes(b"\xff\xfe\xfa")
        resolver = TemplateResolver(ResourceLoader(base_dir=root, encoding="utf-8"))
        with pytest.raises(TemplateResourceUnreadable):
            resolver.resolve(Resource("bin.txt"), {})


def test_unknown_encoding_is_unreadable():
    with tempfile.TemporaryDirectory() as root:
        Path(root, "p.txt").write_text("payload")
        resolver = TemplateResolver(ResourceLoader(base_dir=root))

        with pytest.raises(TemplateResourceUnreadable) as exc_info:
            resolver.resolve(Resource("p.txt", encoding="no-such-codec"), {})

        assert exc_info.value.locator == "p.txt"
        assert isinstance(exc_info.value.__cause__, LookupError)
