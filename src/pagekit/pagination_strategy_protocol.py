from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class PaginationKey(Protocol):
    """Protocol for items that can be used as keyset pagination cursors."""

    @property
    def key(self) -> str:
        """The item's position in the dataset, passed back as ``last_key``."""
        ...


@runtime_checkable
class PaginationStrategy(Protocol):
    """Protocol defining the interface for pagination strategies.

    Strategies are immutable: ``reset`` and ``advance`` return new instances
    and never modify the strategy they are called on.
    """

    @property
    def cursor(self) -> Any:
        """The page number or key the next fetch will request."""
        ...

    def reset(self) -> "PaginationStrategy":
        """
        Return a strategy positioned at the initial cursor.

        Returns:
            A new strategy sharing this strategy's fetch function
        """
        ...

    async def fetch(self, page_size: int) -> Sequence[Any]:
        """
        Fetch the page at the current cursor.

        Args:
            page_size: The number of items requested

        Returns:
            The items returned by the fetch function, unfiltered
        """
        ...

    def advance(self, items: Sequence[Any]) -> "PaginationStrategy":
        """
        Return a strategy positioned after the given page.

        Args:
            items: The items returned by the last fetch

        Returns:
            A new strategy whose cursor points at the next page
        """
        ...
