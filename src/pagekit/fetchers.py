"""
Fetch functions backed by a REST endpoint.

``RestPageFetcher`` turns an aiohttp session and an endpoint into the fetch
functions expected by the numbered and keyset strategies:

    async with ClientSession() as session:
        fetcher = RestPageFetcher(session, "https://api.example.com", endpoint="/events")
        controller = PaginationController.numbered(20, fetcher.fetch_numbered_page)
        first_page = await controller.load()
"""

from typing import Any, Callable, Dict, List, Optional

from aiohttp import ClientSession

from .exceptions import FetchError
from .logging import DefaultLogger, Logger

DEFAULT_HEADERS = {
    "Accept": "application/json",
}


class RestPageFetcher:
    """Builds numbered and keyset fetch functions for a JSON REST endpoint."""

    def __init__(
        self,
        session: ClientSession,
        url: str,
        endpoint: str = "",
        items_key: Optional[str] = "items",
        page_param: str = "page",
        size_param: str = "size",
        key_param: str = "after",
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        item_factory: Optional[Callable[[Any], Any]] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            session: Session used for every request; owned by the caller
            url: Base URL of the API
            endpoint: Endpoint appended to the base URL
            items_key: Dot-separated path to the item list (e.g. "_embedded.events");
                None if the response body is the list itself
            page_param: Query parameter carrying the page number
            size_param: Query parameter carrying the page size
            key_param: Query parameter carrying the last seen key
            params: Extra query parameters sent with every request
            headers: Extra headers sent with every request
            item_factory: Optional callable applied to each raw item
            logger: Optional logger instance
        """
        self.session = session
        self.url = url.strip("/")
        self.endpoint = endpoint.strip("/")
        self.items_key = items_key
        self.page_param = page_param
        self.size_param = size_param
        self.key_param = key_param
        self.params = dict(params or {})
        self.headers = DEFAULT_HEADERS.copy()
        if headers:
            self.headers.update(headers)
        self.item_factory = item_factory
        self.logger = logger or DefaultLogger(name="pagekit-fetcher")

    @property
    def request_url(self) -> str:
        return f"{self.url}/{self.endpoint}" if self.endpoint else self.url

    async def fetch_numbered_page(self, page_number: int, page_size: int) -> List[Any]:
        """Fetch the page with the given number."""
        return await self._fetch_page({self.page_param: page_number, self.size_param: page_size})

    async def fetch_keyset_page(self, last_key: Optional[str], page_size: int) -> List[Any]:
        """Fetch the page after ``last_key``, or the first page when it is None."""
        page_params: Dict[str, Any] = {self.size_param: page_size}
        if last_key is not None:
            page_params[self.key_param] = last_key
        return await self._fetch_page(page_params)

    def extract_items(self, payload: Any) -> List[Any]:
        """
        Extract the item list from a decoded response body.

        Args:
            payload: The decoded JSON response

        Returns:
            The items, passed through item_factory when one is configured

        Raises:
            FetchError: If no list is found at items_key
        """
        data = payload
        if self.items_key:
            for key in self.items_key.split("."):
                if not isinstance(data, dict) or key not in data:
                    raise FetchError(f"Response has no '{self.items_key}' collection")
                data = data[key]

        if not isinstance(data, list):
            raise FetchError(
                f"Expected a list of items at '{self.items_key}', got {type(data).__name__}"
            )

        if self.item_factory is not None:
            return [self.item_factory(item) for item in data]
        return data

    async def _fetch_page(self, page_params: Dict[str, Any]) -> List[Any]:
        merged_params = self.params.copy()
        merged_params.update(page_params)

        self.logger.debug(f"Fetching page from {self.request_url}", params=merged_params)

        response = await self.session.request(
            method="GET",
            url=self.request_url,
            params=merged_params,
            headers=self.headers,
        )
        response.raise_for_status()

        try:
            payload = await response.json()
        except Exception as e:
            raise FetchError(f"Failed to parse JSON response: {e}") from e

        items = self.extract_items(payload)
        self.logger.debug(f"Fetched {len(items)} items", status=response.status)
        return items
