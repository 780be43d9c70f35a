"""
Client-side state for the search page.

One request at a time: the page is idle, waiting on a request, showing an
error panel, or showing results. Follow-up items expand independently.
"""

from enum import Enum
import logging
from typing import Protocol

from src.client.api_client import SearchRequestFailed
from src.domains.search.schemas import AnswerItem, SearchResponse

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to get search results. Please try again."


class SubmitterState(str, Enum):
    IDLE = "IDLE"
    PENDING = "PENDING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


class SearchTransport(Protocol):
    async def search(self, query: str) -> SearchResponse: ...


class QuerySubmitter:
    def __init__(self, client: SearchTransport):
        self.client = client
        self.query = ""
        self.state = SubmitterState.IDLE
        self.results: SearchResponse | None = None
        self.error: str | None = None
        self._expanded: set[int] = set()

    @property
    def is_pending(self) -> bool:
        return self.state == SubmitterState.PENDING

    @property
    def can_submit(self) -> bool:
        return not self.is_pending and bool(self.query.strip())

    async def submit(self) -> bool:
        """
        Send the current query. Returns False without doing anything when the
        query is blank or a request is already in flight.
        """
        if not self.can_submit:
            return False

        self.state = SubmitterState.PENDING
        try:
            results = await self.client.search(self.query.strip())
        except SearchRequestFailed as e:
            logger.warning(f"Search failed: {e}")
            self._fail(str(e))
            return False
        except Exception as e:
            logger.error(f"Search failed unexpectedly: {e!r}", exc_info=True)
            self._fail("")
            return False
        finally:
            # Cancellation leaves no outcome; the page goes back to idle
            if self.state == SubmitterState.PENDING:
                self.state = SubmitterState.IDLE

        self.results = results
        self.error = None
        self._expanded.clear()
        self.state = SubmitterState.SUCCESS
        return True

    def _fail(self, message: str):
        self.results = None
        self.error = message or DEFAULT_ERROR_MESSAGE
        self.state = SubmitterState.ERROR

    async def retry(self) -> bool:
        return await self.submit()

    def dismiss_error(self):
        if self.state == SubmitterState.ERROR:
            self.error = None
            self.state = SubmitterState.IDLE

    def _item(self, index: int) -> AnswerItem:
        if self.results is None:
            raise IndexError("no results to select from")
        if index < 0:
            raise IndexError(f"invalid follow-up index {index}")
        return self.results.people_also_ask[index]

    def select_question(self, index: int) -> str:
        """Copy follow-up ``index`` into the input. Does not submit."""
        self.query = self._item(index).question
        return self.query

    def toggle_expansion(self, index: int) -> bool:
        self._item(index)
        if index in self._expanded:
            self._expanded.remove(index)
            return False
        self._expanded.add(index)
        return True

    def is_expanded(self, index: int) -> bool:
        return index in self._expanded

    def visible_answer(self, index: int) -> str | None:
        """The stored answer for an expanded item, None while collapsed."""
        if not self.is_expanded(index):
            return None
        return self._item(index).answer
