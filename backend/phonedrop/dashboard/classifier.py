"""Content categories derived from a file's name suffix."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    IMAGE = "image"
    TEXT = "text"
    CODE = "code"
    FILE = "file"


IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp", "svg"})
TEXT_EXTENSIONS = frozenset({"txt", "md", "log"})
CODE_EXTENSIONS = frozenset({"js", "ts", "py", "json", "html", "css", "sh"})

# Categories whose body is fetched and shown inline
READABLE = frozenset({Category.TEXT, Category.CODE})


def extension(display_name: str) -> str:
    """Lower-cased text after the last '.', or '' when there is none."""
    if "." not in display_name:
        return ""
    return display_name.rsplit(".", 1)[-1].lower()


def classify(display_name: str) -> Category:
    ext = extension(display_name)
    if ext in IMAGE_EXTENSIONS:
        return Category.IMAGE
    if ext in TEXT_EXTENSIONS:
        return Category.TEXT
    if ext in CODE_EXTENSIONS:
        return Category.CODE
    return Category.FILE
