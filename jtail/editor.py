"""Open a record or a field value in an external editor"""

import dataclasses
import json
import logging
import os
import re
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Any

from jtail.models.field_explorer import FieldNode
from jtail.models.log_record import Record

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


@dataclasses.dataclass(frozen=True)
class EditorRequest:
    """A suggested file name and the text to put in it"""

    filename: str
    content: str


def _sanitize(text: str) -> str:
    return _UNSAFE_CHARS.sub("_", text)


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def request_for_record(record: Record) -> EditorRequest:
    """Build the editor request for a whole record"""
    return EditorRequest(
        f"jtail-{_sanitize(record.timestamp)}.json", _pretty_json(record.payload)
    )


def request_for_field(node: FieldNode) -> EditorRequest:
    """Build the editor request for one field value"""
    name = f"jtail-field-{_sanitize(node.path)}"
    if isinstance(node.value, str):
        return EditorRequest(f"{name}.txt", node.value)
    return EditorRequest(f"{name}.json", _pretty_json(node.value))


def open_in_editor(request: EditorRequest) -> str | None:
    """Write the request to a temporary file and run $EDITOR on it.

    Returns None on success or a message describing the failure.
    """
    path = Path(tempfile.gettempdir()) / request.filename
    try:
        path.write_text(request.content, encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        return f"Failed to write {path}: {e}"

    editor = os.environ.get("EDITOR") or DEFAULT_EDITOR
    logger.info("Opening %s with %s", path, editor)
    try:
        result = subprocess.run([*shlex.split(editor), str(path)], check=False)
    except (OSError, ValueError) as e:
        logger.error("Failed to launch editor %s: %s", editor, e)
        return f"Failed to launch editor {editor}: {e}"

    if result.returncode != 0:
        logger.warning("Editor exited with status %d", result.returncode)
        return f"Editor exited with status {result.returncode}"
    return None
