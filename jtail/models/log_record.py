"""The normalized log record and the line parser that produces it"""

import dataclasses
import functools
import json
from datetime import datetime, timezone
from typing import Any

MISSING = object()

NO_TIMESTAMP = "-"
UNKNOWN_LEVEL = "UNKNOWN"
TEXT_LEVEL = "TEXT"
PARSE_LEVEL = "PARSE"

RESERVED_FIELDS = ("timestamp", "level", "message")


def format_value(value: Any) -> str:
    """Get a value formatted as a single string"""
    if value is MISSING:
        return ""
    if value is None:
        return "null"
    if isinstance(value, (dict, list)):
        return compact_json(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compact_json(value: Any) -> str:
    """Serialize a value as single-line JSON"""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


@dataclasses.dataclass(frozen=True)
class Record:
    """A single normalized log line"""

    timestamp: str
    level: str
    message: str
    payload: Any

    @functools.cached_property
    def haystack(self) -> str:
        """The text the main filter is matched against"""
        return " ".join(
            [self.timestamp, self.level, self.message, compact_json(self.payload)]
        )

    def column_value(self, path: tuple[str, ...]) -> str:
        """Get the display text for a column path"""
        if len(path) == 1 and path[0] in RESERVED_FIELDS:
            return getattr(self, path[0])

        value: Any = self.payload
        for key in path:
            if not isinstance(value, dict):
                return ""
            value = value.get(key, MISSING)
        return format_value(value)


def parse_line(line: str) -> Record | None:
    """Normalize one input line into a Record, or None for blank lines"""
    line = line.rstrip("\r\n")
    if not line.strip():
        return None

    try:
        payload = json.loads(line)
    except ValueError as e:
        if line.lstrip().startswith(("{", "[")):
            return error_record(f"Failed to parse line: {e}", line=line)
        return Record(NO_TIMESTAMP, TEXT_LEVEL, line, line)

    data = payload.get("data") if isinstance(payload, dict) else None

    timestamp = _extract_timestamp(payload)
    if timestamp == NO_TIMESTAMP:
        timestamp = _extract_timestamp(data)

    level = _find_str(payload, "level") or _find_str(data, "level") or UNKNOWN_LEVEL
    message = _find_str(payload, "message") or _find_str(data, "message") or ""
    return Record(timestamp, level, message, payload)


def error_record(message: str, **details: Any) -> Record:
    """Create a synthetic record describing an ingestion failure"""
    payload = {"error": message} | {
        key: value for key, value in details.items() if value is not None
    }
    return Record(NO_TIMESTAMP, PARSE_LEVEL, message, payload)


def _find_str(value: Any, key: str) -> str | None:
    if not isinstance(value, dict):
        return None
    found = value.get(key)
    return found if isinstance(found, str) else None


def _extract_timestamp(value: Any) -> str:
    if not isinstance(value, dict):
        return NO_TIMESTAMP

    timestamp = _find_str(value, "timestamp")
    if timestamp is not None:
        return timestamp

    instant = value.get("instant")
    if isinstance(instant, dict):
        seconds = instant.get("epochSecond")
        nanos = instant.get("nanoOfSecond")
        if _is_int(seconds) and _is_int(nanos) and 0 <= nanos < 1_000_000_000:
            try:
                moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                return NO_TIMESTAMP
            millis = nanos // 1_000_000
            return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"

    return NO_TIMESTAMP


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
