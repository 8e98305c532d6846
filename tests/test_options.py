"""Tests for ConversionOptions and the hook contracts."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from semantic_markdown.options import ConversionOptions
from semantic_markdown.plugins import CustomNodeRenderer, ElementProcessor, NodeRenderer


class TestConversionOptions:
    def test_defaults(self):
        opts = ConversionOptions()
        assert opts.include_meta_data is False
        assert opts.dom_parser == "lxml"
        assert opts.url_map == {}
        assert opts.max_depth == 256

    def test_true_metadata_is_basic(self):
        assert ConversionOptions(include_meta_data=True).include_meta_data == "basic"

    def test_extended_flag(self):
        assert ConversionOptions(include_meta_data="extended").extended_metadata is True
        assert ConversionOptions(include_meta_data="basic").extended_metadata is False

    def test_invalid_metadata_mode(self):
        with pytest.raises(ValidationError):
            ConversionOptions(include_meta_data="everything")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ConversionOptions(extract_main=True)

    def test_max_depth_positive(self):
        with pytest.raises(ValidationError):
            ConversionOptions(max_depth=0)

    def test_url_maps_not_shared(self):
        a, b = ConversionOptions(), ConversionOptions()
        a.url_map["ref0"] = "https://example.com"
        assert b.url_map == {}


class TestHookProtocols:
    def test_plain_functions_satisfy_protocols(self):
        def hook(node, options, indent_level):
            return None

        assert isinstance(hook, ElementProcessor)
        assert isinstance(hook, NodeRenderer)
        assert isinstance(hook, CustomNodeRenderer)

    def test_non_callable_rejected(self):
        assert not isinstance("not a hook", NodeRenderer)
