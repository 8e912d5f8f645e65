"""Pagination controller that sequences page loads for a single owner."""

import asyncio
import weakref
from typing import Any, AsyncIterator, List, Optional, Sequence, Union

from .config import KeysetPaginationConfig, NumberedPaginationConfig
from .exceptions import AlreadyLoadingError, EndReachedError, PaginationCancelledError
from .logging import DefaultLogger, Logger
from .pagination_strategies import (
    KeyFunction,
    KeysetFetchFunction,
    NumberedFetchFunction,
)
from .pagination_strategy_protocol import PaginationStrategy

PaginationConfig = Union[NumberedPaginationConfig, KeysetPaginationConfig]


class PageOperation:
    """
    Handle for a single in-flight page fetch.

    The operation fetches from the strategy snapshot it was created with. Its
    ``cancelled`` flag is checked once the fetch returns, so a fetch function
    that ignores task cancellation still cannot publish a stale page.
    """

    def __init__(self, kind: str, strategy: PaginationStrategy):
        self.kind = kind
        self.strategy = strategy
        self.cancelled = False
        self.task: Optional[asyncio.Task] = None

    def cancel(self) -> None:
        """Flag the operation as cancelled and cancel its task."""
        self.cancelled = True
        if self.task is not None and not self.task.done():
            self.task.cancel()

    def done(self) -> bool:
        return self.task is not None and self.task.done()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "done" if self.done() else "pending"
        return f"PageOperation(kind={self.kind!r}, cursor={self.strategy.cursor!r}, {state})"


async def _run_operation(
    controller_ref: "weakref.ref[PaginationController]",
    operation: PageOperation,
    page_size: int,
) -> Sequence[Any]:
    # Holds the controller weakly so an abandoned controller can be collected
    # while its fetch is still pending.
    try:
        try:
            items = await operation.strategy.fetch(page_size)
        except Exception as exc:
            controller = controller_ref()
            if controller is not None:
                controller.logger.warning(
                    f"Fetch failed during {operation.kind}", error=repr(exc)
                )
            raise

        controller = controller_ref()
        if controller is None or operation.cancelled:
            raise PaginationCancelledError()
        controller._complete(operation, items)
        return items
    finally:
        controller = controller_ref()
        if controller is not None:
            controller._conclude(operation)


class PaginationController:
    """
    Sequences ``load()`` and ``load_more()`` calls over a pagination strategy.

    At most one page operation is in flight. ``load()`` supersedes any running
    operation, while ``load_more()`` is refused while one is running or after a
    short page has signalled end-of-data.

    The controller is owned by a single asyncio event loop. Its state is only
    touched from that loop, so it uses no locks; calls from another running
    loop raise ``RuntimeError``.
    """

    def __init__(
        self,
        page_size: int,
        strategy: PaginationStrategy,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the controller.

        Args:
            page_size: Number of items requested per page
            strategy: The numbered or keyset strategy to paginate with
            logger: Optional logger instance for logging events

        Raises:
            ValueError: If page_size is not a positive integer
            TypeError: If strategy does not implement the PaginationStrategy protocol
        """
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise ValueError("page_size must be a positive integer")
        if not isinstance(strategy, PaginationStrategy):
            raise TypeError(
                f"{type(strategy).__name__} does not implement the PaginationStrategy protocol"
            )

        self._page_size = page_size
        self._strategy = strategy
        self._is_loading = False
        self._did_reach_end = False
        self._active_operation: Optional[PageOperation] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self.logger = logger or DefaultLogger(name="pagekit-pagination")

    @classmethod
    def numbered(
        cls,
        page_size: int,
        fetch_numbered_page: NumberedFetchFunction,
        initial_page: int = 1,
        logger: Optional[Logger] = None,
    ) -> "PaginationController":
        """Create a controller that requests pages by number, starting at ``initial_page``."""
        config = NumberedPaginationConfig(
            page_size=page_size,
            fetch_numbered_page=fetch_numbered_page,
            initial_page=initial_page,
        )
        return cls.from_config(config, logger=logger)

    @classmethod
    def keyset(
        cls,
        page_size: int,
        fetch_keyset_page: KeysetFetchFunction,
        initial_key: Optional[str] = None,
        key_func: Optional[KeyFunction] = None,
        logger: Optional[Logger] = None,
    ) -> "PaginationController":
        """Create a controller that requests pages after the last seen key."""
        config = KeysetPaginationConfig(
            page_size=page_size,
            fetch_keyset_page=fetch_keyset_page,
            initial_key=initial_key,
            key_func=key_func,
        )
        return cls.from_config(config, logger=logger)

    @classmethod
    def from_config(
        cls, config: PaginationConfig, logger: Optional[Logger] = None
    ) -> "PaginationController":
        return cls(config.page_size, config.build_strategy(), logger=logger)

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def did_reach_end(self) -> bool:
        return self._did_reach_end

    @property
    def strategy(self) -> PaginationStrategy:
        return self._strategy

    async def load(self) -> Sequence[Any]:
        """
        Load the first page, discarding any previous pagination progress.

        Any operation still in flight is cancelled; whoever awaits it receives
        ``PaginationCancelledError``.

        Returns:
            The items of the first page

        Raises:
            PaginationCancelledError: If this load is superseded before it completes
            Exception: Any error raised by the fetch function, unmodified
        """
        self._bind_loop()

        if self._active_operation is not None:
            self.logger.debug(
                "Superseding in-flight operation", operation=self._active_operation
            )
            self._active_operation.cancel()
            self._active_operation = None

        self._strategy = self._strategy.reset()
        self._did_reach_end = False
        return await self._start("load")

    async def load_more(self) -> Sequence[Any]:
        """
        Load the page after the last one loaded.

        Returns:
            The items of the next page

        Raises:
            AlreadyLoadingError: If a page is currently loading
            EndReachedError: If the last page was shorter than page_size
            PaginationCancelledError: If a later ``load()`` supersedes this call
            Exception: Any error raised by the fetch function, unmodified
        """
        self._bind_loop()

        if self._is_loading:
            self.logger.debug("Refused load_more while a page is loading")
            raise AlreadyLoadingError()
        if self._did_reach_end:
            self.logger.debug("Refused load_more after end of data")
            raise EndReachedError()

        return await self._start("load_more")

    def cancel(self) -> None:
        """Cancel the in-flight operation, if any, keeping the current position."""
        operation = self._active_operation
        if operation is None:
            return

        self.logger.debug("Cancelling in-flight operation", operation=operation)
        operation.cancel()
        self._active_operation = None
        self._is_loading = False

    async def iter_pages(self, max_pages: Optional[int] = None) -> AsyncIterator[Sequence[Any]]:
        """
        Iterate over pages, starting with a fresh ``load()``.

        Args:
            max_pages: Maximum number of pages to yield (None for all)

        Yields:
            Each page of items until end of data
        """
        page_count = 0
        while max_pages is None or page_count < max_pages:
            page = await (self.load() if page_count == 0 else self.load_more())
            page_count += 1
            yield page

            if self._did_reach_end:
                return

        self.logger.info("Reached maximum page count", max_pages=max_pages)

    async def fetch_all(self, max_pages: Optional[int] = None) -> List[Any]:
        """
        Fetch every page and collect the items.

        Args:
            max_pages: Maximum number of pages to fetch (None for all)

        Returns:
            List of all items from all fetched pages
        """
        all_items: List[Any] = []
        page_count = 0
        async for page in self.iter_pages(max_pages=max_pages):
            all_items.extend(page)
            page_count += 1

        self.logger.info(f"Fetched {len(all_items)} items from {page_count} pages")
        return all_items

    async def _start(self, kind: str) -> Sequence[Any]:
        operation = PageOperation(kind, self._strategy)
        self._is_loading = True
        operation.task = asyncio.get_running_loop().create_task(
            _run_operation(weakref.ref(self), operation, self._page_size)
        )
        self._active_operation = operation
        self.logger.debug(f"Started {kind}", cursor=operation.strategy.cursor)

        try:
            return await operation.task
        except asyncio.CancelledError:
            if operation.cancelled:
                raise PaginationCancelledError() from None
            # The awaiting task was cancelled, which cancelled the operation too
            operation.cancel()
            self._conclude(operation)
            raise

    def _complete(self, operation: PageOperation, items: Sequence[Any]) -> None:
        if self._active_operation is not operation:
            raise PaginationCancelledError()

        next_strategy = operation.strategy.advance(items)
        self._did_reach_end = len(items) < self._page_size
        self._strategy = next_strategy
        self.logger.debug(
            f"Completed {operation.kind}",
            items=len(items),
            next_cursor=next_strategy.cursor,
            did_reach_end=self._did_reach_end,
        )

    def _conclude(self, operation: PageOperation) -> None:
        # A superseded operation must not clear the flags of its successor
        if self._active_operation is operation:
            self._active_operation = None
            self._is_loading = False

    def _bind_loop(self) -> None:
        loop = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
        elif self._loop is not loop:
            raise RuntimeError("PaginationController is bound to a different event loop")
