"""Placeholder tokens and the scanner that finds them.

Two token shapes appear in template text:

* ``[@name@]`` references an include.
* ``[{name}]`` references a page property (or the ``relative_path`` built-in).

Matching is non-greedy: a token ends at the first closing marker after its
opening marker. Names never contain whitespace, so a token cannot span lines.
"""

from __future__ import annotations

from typing import Iterator

INCLUDE_OPEN, INCLUDE_CLOSE = "[@", "@]"
PROPERTY_OPEN, PROPERTY_CLOSE = "[{", "}]"

RELATIVE_PATH = "relative_path"
BUILTIN_PROPERTIES = frozenset({RELATIVE_PATH})


def include_token(name: str) -> str:
    return f"{INCLUDE_OPEN}{name}{INCLUDE_CLOSE}"


def property_token(name: str) -> str:
    return f"{PROPERTY_OPEN}{name}{PROPERTY_CLOSE}"


def iter_tokens(text: str, opener: str, closer: str) -> Iterator[str]:
    """Yield the name of every ``opener`` name ``closer`` token in ``text``.

    A candidate that reaches whitespace or the end of the text before the
    closer is abandoned, and scanning restarts one character past the
    candidate's opener. After a match, scanning resumes past the closer.
    """
    pos = 0
    while True:
        start = text.find(opener, pos)
        if start < 0:
            return
        cursor = start + len(opener)
        while cursor < len(text):
            if text.startswith(closer, cursor):
                yield text[start + len(opener) : cursor]
                pos = cursor + len(closer)
                break
            if text[cursor].isspace():
                pos = start + 1
                break
            cursor += 1
        else:
            pos = start + 1


def _distinct(names: Iterator[str]) -> list[str]:
    return list(dict.fromkeys(names))


def find_include_names(text: str) -> list[str]:
    """Distinct include names in order of first appearance."""
    return _distinct(iter_tokens(text, INCLUDE_OPEN, INCLUDE_CLOSE))


def find_property_names(text: str) -> list[str]:
    """Distinct property names in order of first appearance."""
    return _distinct(iter_tokens(text, PROPERTY_OPEN, PROPERTY_CLOSE))
