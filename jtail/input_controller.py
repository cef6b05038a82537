"""Input controller: keyboard input and the background record reader"""

import contextlib
import curses
import functools
import io
import logging
import os
import queue
import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterator, TextIO

from jtail.models.log_record import Record, error_record, parse_line

logger = logging.getLogger(__name__)

KEY_TIMEOUT_MS = 100
POLL_INTERVAL_SECONDS = 0.2
STDIN_NAME = "<stdin>"


class RecordReader(threading.Thread):
    """Reads lines from a stream and hands parsed records to a queue.

    In follow mode the reader keeps polling after end of file, the way
    `tail -f` does, until it is stopped. Otherwise end of file ends it.
    """

    def __init__(
        self,
        stream: TextIO,
        records: "queue.SimpleQueue[Record]",
        follow: bool,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        super().__init__(name="record-reader", daemon=True)
        self._stream = stream
        self._records = records
        self._follow = follow
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._finished = threading.Event()

    @property
    def finished(self) -> bool:
        """Whether the stream has ended or the reader was stopped"""
        return self._finished.is_set()

    def stop(self) -> None:
        """Ask the reader to stop at the next poll"""
        self._stop_event.set()

    def run(self) -> None:
        try:
            self._read_lines()
        except OSError as e:
            logger.exception("Failed to read input")
            self._records.put(error_record(f"Failed to read input: {e}"))
        finally:
            self._finished.set()
            logger.info("Record reader finished")

    def _read_lines(self) -> None:
        pending = ""
        while not self._stop_event.is_set():
            line = self._stream.readline()
            if line:
                pending += line
                if pending.endswith("\n"):
                    self._put(pending)
                    pending = ""
                continue

            if not self._follow:
                break
            self._stop_event.wait(self._poll_interval)

        if pending:
            self._put(pending)

    def _put(self, line: str) -> None:
        record = parse_line(line)
        if record is not None:
            self._records.put(record)


class InputController(ABC):
    """Abstract input controller interface"""

    @abstractmethod
    def get_input(self) -> int:
        """Wait briefly for a key; -1 if none arrived"""

    @abstractmethod
    def drain(self) -> list[Record]:
        """Get every record read so far, without blocking"""

    @abstractmethod
    def get_input_name(self) -> str:
        """Get the name of the input source"""


class CursesInputController(InputController):
    """Input controller reading keys from a curses window"""

    def __init__(
        self,
        stdscr: curses.window,
        records: "queue.SimpleQueue[Record]",
        input_name: str,
    ) -> None:
        self._stdscr = stdscr
        self._records = records
        self._input_name = input_name
        self._stdscr.timeout(KEY_TIMEOUT_MS)

    def get_input(self) -> int:
        return self._stdscr.getch()

    def drain(self) -> list[Record]:
        drained = []
        while True:
            try:
                drained.append(self._records.get_nowait())
            except queue.Empty:
                return drained

    def get_input_name(self) -> str:
        return self._input_name


def _reattach_stdin_to_tty() -> int:
    """Move piped stdin to a new descriptor and give fd 0 back to the terminal"""
    data_fd = os.dup(sys.stdin.fileno())
    tty_fd = os.open("/dev/tty", os.O_RDONLY)
    try:
        os.dup2(tty_fd, sys.stdin.fileno())
    finally:
        os.close(tty_fd)
    return data_fd


def _open_source(
    log_file: str | None, records: "queue.SimpleQueue[Record]"
) -> tuple[TextIO, bool, str]:
    if log_file is None:
        data_fd = _reattach_stdin_to_tty()
        stdin_stream = os.fdopen(data_fd, encoding="utf-8", errors="replace")
        return stdin_stream, False, STDIN_NAME

    name = Path(log_file).name
    try:
        stream = open(  # pylint: disable=consider-using-with
            log_file, encoding="utf-8", errors="replace"
        )
    except OSError as e:
        logger.error("Failed to open %s: %s", log_file, e)
        records.put(error_record(f"Failed to open {log_file}: {e}", path=log_file))
        return io.StringIO(), False, name
    return stream, True, name


@contextlib.contextmanager
def create_input_controller(
    log_file: str | None,
) -> Iterator[Callable[[curses.window], InputController]]:
    """Open the log source, start reading it, and yield an input controller factory"""
    records: "queue.SimpleQueue[Record]" = queue.SimpleQueue()
    stream, follow, name = _open_source(log_file, records)
    reader = RecordReader(stream, records, follow)
    reader.start()
    try:
        yield functools.partial(CursesInputController, records=records, input_name=name)
    finally:
        reader.stop()
        reader.join(timeout=POLL_INTERVAL_SECONDS * 2)
        # A reader blocked on a pipe holds the stream; the daemon thread dies with us
        if not reader.is_alive():
            stream.close()
