"""Text shaping for the panes"""

import json
import textwrap
from typing import Any


def single_line(text: str) -> str:
    """Escape line breaks and tabs so the text fits one row"""
    return text.replace("\n", "\\n").replace("\r", "\\r").replace("\t", " ")


def pretty_json_lines(value: Any) -> list[str]:
    """Get a value as indented JSON, one string per line"""
    return json.dumps(value, indent=2, ensure_ascii=False).splitlines()


def wrap_lines(lines: list[str], width: int) -> list[str]:
    """Hard-wrap every line to the width, keeping empty lines and indentation"""
    width = max(1, width)
    wrapped: list[str] = []
    for line in lines:
        wrapped.extend(
            textwrap.wrap(
                line.replace("\t", " "),
                width,
                drop_whitespace=False,
                replace_whitespace=False,
            )
            or [""]
        )
    return wrapped


def slice_line(line: str, offset: int, width: int) -> str:
    """Get the part of a line visible through a horizontal window"""
    return line[offset : offset + max(0, width)]
