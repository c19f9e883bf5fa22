"""Tests for suffix-based classification."""

import pytest

from phonedrop.dashboard.classifier import Category, classify, extension


@pytest.mark.parametrize(
    "name, expected",
    [
        ("photo.JPG", Category.IMAGE),
        ("1714000000000-shot.webp", Category.IMAGE),
        ("diagram.svg", Category.IMAGE),
        ("notes.md", Category.TEXT),
        ("build.LOG", Category.TEXT),
        ("server.py", Category.CODE),
        ("index.html", Category.CODE),
        ("deploy.sh", Category.CODE),
        ("archive.zip", Category.FILE),
        ("README", Category.FILE),
        ("", Category.FILE),
        ("trailing.", Category.FILE),
    ],
)
def test_classify(name, expected):
    assert classify(name) is expected


def test_only_last_suffix_counts():
    assert classify("backup.py.zip") is Category.FILE
    assert classify("archive.tar.md") is Category.TEXT


def test_path_segments_are_not_suffixes():
    # '.' inside a directory segment, none in the file name
    assert classify("v1.2/README") is Category.FILE


def test_deterministic():
    assert {classify("Notes.Md") for _ in range(5)} == {Category.TEXT}


def test_extension_no_dot():
    assert extension("README") == ""
    assert extension("a.B") == "b"
