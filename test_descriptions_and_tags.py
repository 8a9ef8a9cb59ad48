"""Tests for description text rules and tag expansion."""

import collections
import decimal

from specmeta.metadata.description import (
    build_description_from,
    description_separator,
    description_text,
    is_namespace,
)
from specmeta.metadata.tags import Tag, build_tags, split_args


class Widget:
    class Part:
        pass


def test_namespace_detection():
    assert is_namespace(Widget)
    assert is_namespace(collections)
    assert not is_namespace("Widget")
    assert not is_namespace(None)
    assert not is_namespace(Widget())


def test_description_text():
    assert description_text(Widget) == "Widget"
    assert description_text(Widget.Part) == "Widget.Part"
    assert description_text(collections) == "collections"
    assert description_text(None) == ""
    assert description_text(42) == "42"


def test_single_argument_description():
    assert build_description_from("adds numbers") == "adds numbers"
    assert build_description_from(decimal.Decimal) == "Decimal"
    assert build_description_from() == ""


def test_method_prefixes_join_without_space_after_a_class():
    assert build_description_from(Widget, "#render") == "Widget#render"
    assert build_description_from(Widget, ".build") == "Widget.build"
    assert build_description_from(Widget, "::Part") == "Widget::Part"
    assert build_description_from(collections, ".namedtuple") == "collections.namedtuple"


def test_text_parents_always_join_with_a_space():
    assert build_description_from("Widget", "#render") == "Widget #render"
    assert build_description_from(Widget, "renders") == "Widget renders"
    assert description_separator("Widget", ".build") == " "


def test_description_is_deterministic():
    first = build_description_from(Widget, "#render")
    second = build_description_from(Widget, "#render")
    assert first == second == "Widget#render"


def test_build_tags_from_names_and_values():
    assert build_tags(["slow", "ui"], {"timeout": 5}) == {"slow": True, "ui": True, "timeout": 5}


def test_build_tags_bare_names_win():
    assert build_tags(["slow"], {"slow": False}) == {"slow": True}


def test_build_tags_does_not_mutate_input():
    tags = {"timeout": 5}
    build_tags(["slow"], tags)
    assert tags == {"timeout": 5}


def test_split_args_expands_trailing_tags():
    args, tags = split_args([Tag("slow"), Tag("ui"), {"timeout": 5}])
    assert args == []
    assert tags == {"slow": True, "ui": True, "timeout": 5}


def test_split_args_keeps_description_arguments():
    args, tags = split_args([Widget, "#render", Tag("slow")])
    assert args == [Widget, "#render"]
    assert tags == {"slow": True}


def test_split_args_stops_at_first_non_tag():
    args, tags = split_args([Tag("early"), "text", Tag("late")])
    assert args == [Tag("early"), "text"]
    assert tags == {"late": True}


def test_split_args_without_tags():
    assert split_args(["just text"]) == (["just text"], {})
    assert split_args([]) == ([], {})


def test_tag_is_a_string():
    assert Tag("slow") == "slow"
    assert repr(Tag("slow")) == "Tag('slow')"
