import asyncio
from dataclasses import dataclass
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import ClientSession


@dataclass(frozen=True)
class Item:
    id: int
    name: str

    @property
    def key(self) -> str:
        return str(self.id)


def make_items(count):
    return [Item(id=i, name=f"Item {i}") for i in range(1, count + 1)]


@pytest.fixture
def items_factory():
    """Factory fixture returning items with ids 1..count and string keys."""
    return make_items


@pytest.fixture
def logger():
    """Create a mock logger for testing."""
    return MagicMock()


@pytest.fixture
def numbered_fetch_factory():
    """
    Factory fixture for numbered fetch functions over an in-memory dataset.

    The returned function records each ``(page_number, page_size)`` call in its
    ``calls`` attribute. When a gate is given, every fetch waits for it.
    """

    def _create_fetch(total=100, gate=None):
        items = make_items(total)
        calls = []

        async def fetch(page_number, page_size):
            calls.append((page_number, page_size))
            if gate is not None:
                await gate.wait()
            else:
                await asyncio.sleep(0)
            start = (page_number - 1) * page_size
            return items[start : start + page_size]

        fetch.calls = calls
        return fetch

    return _create_fetch


@pytest.fixture
def keyset_fetch_factory():
    """
    Factory fixture for keyset fetch functions over an in-memory dataset.

    Items after ``last_key`` are returned; a None key starts from the beginning.
    """

    def _create_fetch(total=100, gate=None):
        items = make_items(total)
        calls = []

        async def fetch(last_key, page_size):
            calls.append((last_key, page_size))
            if gate is not None:
                await gate.wait()
            else:
                await asyncio.sleep(0)
            if last_key is None:
                start = 0
            else:
                start = next(i for i, item in enumerate(items) if item.key == last_key) + 1
            return items[start : start + page_size]

        fetch.calls = calls
        return fetch

    return _create_fetch


@pytest.fixture
def gate():
    """An event that gated fetch functions wait on before returning."""
    return asyncio.Event()


@pytest.fixture
def mock_response_factory():
    """Factory fixture to create mock aiohttp responses with a JSON body."""

    def _create_response(status=200, json_data=None, json_error=None, raise_error=None):
        mock_response = MagicMock()
        mock_response.status = status

        if json_error is not None:
            mock_response.json = AsyncMock(side_effect=json_error)
        else:
            mock_response.json = AsyncMock(return_value=json_data)

        if raise_error is not None:
            mock_response.raise_for_status = MagicMock(side_effect=raise_error)
        else:
            mock_response.raise_for_status = MagicMock(return_value=None)

        return mock_response

    return _create_response


@pytest.fixture
def mock_client_session():
    def _create_session(response=None, side_effect=None):
        mock_session = MagicMock(spec=ClientSession)
        mock_session.closed = False

        if side_effect:
            mock_session.request = AsyncMock(side_effect=side_effect)
        else:
            mock_session.request = AsyncMock(return_value=response)

        return mock_session

    return _create_session
