import pytest

from errors import TagContainsWhitespaceError
from tags import (
    Metadata,
    Tag,
    classify,
    is_metadata_token,
    scan_metadata,
    scan_tags,
    split_description,
)


@pytest.mark.parametrize("name", ["a ", "b\n", "c\t", "two words"])
def test_tag_constructors_reject_whitespace(name):
    with pytest.raises(TagContainsWhitespaceError):
        Tag.project(name)
    with pytest.raises(TagContainsWhitespaceError):
        Tag.context(name)


def test_tag_equality_and_text():
    assert Tag.project("x") == Tag.project("x")
    assert Tag.project("x") != Tag.context("x")
    assert len({Tag.project("x"), Tag.project("x"), Tag.context("x")}) == 2
    assert str(Tag.project("b-c")) == "+b-c"
    assert str(Tag.context("def@ghi")) == "@def@ghi"


def test_scan_tags_only_counts_sigils_at_token_start():
    tags = scan_tags("+1 @2 3+4 @a +b-c @def@ghi jk@lm")
    assert Tag.project("1") in tags
    assert Tag.context("2") in tags
    assert Tag.context("a") in tags
    assert Tag.project("b-c") in tags
    assert Tag.context("def@ghi") in tags
    assert Tag.project("4") not in tags
    assert Tag.context("lm") not in tags
    assert len(tags) == 5


def test_classify():
    assert classify("+proj") == Tag.project("proj")
    assert classify("@home") == Tag.context("home")
    assert classify("+") == "+"
    assert classify("@") == "@"
    assert classify("word") == "word"
    assert classify("+tab\there") == "+tab\there"


def test_split_description_drops_empty_tokens():
    assert split_description("call  +mom ") == ["call", Tag.project("mom")]


@pytest.mark.parametrize("token,expected", [
    ("key:value", True),
    ("a:b", True),
    ("key:", False),
    (":value", False),
    ("a:b:c", False),
    ("plain", False),
])
def test_is_metadata_token(token, expected):
    assert is_metadata_token(token) is expected


def test_metadata_keeps_insertion_order_and_replaces_in_place():
    meta = Metadata()
    meta.set("b", "1")
    meta.set("a", "2")
    meta.set("b", "3")
    assert meta.encode() == "b:3 a:2"
    assert meta.get("b") == "3"
    assert meta.get("zzz") is None
    assert "a" in meta and len(meta) == 2
    meta.delete("b")
    meta.delete("missing")
    assert meta.encode() == "a:2"
    assert list(meta) == [("a", "2")]


def test_metadata_copy_is_independent():
    meta = Metadata([("k", "v")])
    other = meta.copy()
    other.set("k", "w")
    assert meta.get("k") == "v"
    assert meta != other


def test_scan_metadata_last_key_wins():
    meta = scan_metadata("pay k:1 rent x:y k:2 a:b:c")
    assert meta.encode() == "k:2 x:y"
    assert Metadata().encode() == ""
