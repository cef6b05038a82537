"""Regular-expression filter over record haystacks"""

import logging
import re
from typing import Callable

from jtail.models.log_record import Record

logger = logging.getLogger(__name__)


class InvalidFilterError(ValueError):
    """Raised when a filter pattern cannot be compiled"""


class FilterEngine:
    """Holds the active filter pattern and matches records against it"""

    def __init__(self) -> None:
        self._query: str = ""
        self._regex: re.Pattern[str] | None = None

    @property
    def query(self) -> str:
        """The active pattern text, empty when everything matches"""
        return self._query

    @property
    def is_active(self) -> bool:
        """Whether a pattern is narrowing the view"""
        return self._regex is not None

    def compile(self, pattern: str) -> Callable[[Record], bool]:
        """Make pattern the active filter and return the predicate.

        An invalid pattern raises InvalidFilterError and leaves the previous
        filter active.
        """
        if not pattern:
            self._query = ""
            self._regex = None
            return self.matches

        try:
            regex = re.compile(pattern)
        except re.error as e:
            logger.debug("Rejected filter pattern %r: %s", pattern, e)
            raise InvalidFilterError(str(e)) from e

        self._query = pattern
        self._regex = regex
        return self.matches

    def matches(self, record: Record) -> bool:
        """Check if the record passes the active filter"""
        if self._regex is None:
            return True
        return self._regex.search(record.haystack) is not None
