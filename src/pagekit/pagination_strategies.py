"""
Pagination strategies describing where the next page is fetched from.

Both strategies are frozen pydantic models. ``reset`` and ``advance`` return
new instances, so an in-flight fetch always runs against a stable snapshot.
"""

from typing import Any, Awaitable, Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, PositiveInt, model_validator

from .pagination_strategy_protocol import PaginationKey

NumberedFetchFunction = Callable[[int, int], Awaitable[Sequence[Any]]]
KeysetFetchFunction = Callable[[Optional[str], int], Awaitable[Sequence[Any]]]
KeyFunction = Callable[[Any], str]


class NumberedPaginationStrategy(BaseModel):
    """
    Strategy for page number based pagination.

    The fetch function receives ``(page_number, page_size)``. Each advance moves
    to the next page number regardless of how many items the page held.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fetch_page: NumberedFetchFunction
    initial_page: PositiveInt = 1
    current_page: PositiveInt

    @model_validator(mode="before")
    @classmethod
    def _start_at_initial_page(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("current_page") is None:
            data = {**data, "current_page": data.get("initial_page", 1)}
        return data

    @property
    def cursor(self) -> int:
        return self.current_page

    def reset(self) -> "NumberedPaginationStrategy":
        return self.model_copy(update={"current_page": self.initial_page})

    async def fetch(self, page_size: int) -> Sequence[Any]:
        return await self.fetch_page(self.current_page, page_size)

    def advance(self, items: Sequence[Any]) -> "NumberedPaginationStrategy":
        return self.model_copy(update={"current_page": self.current_page + 1})


class KeysetPaginationStrategy(BaseModel):
    """
    Strategy for keyset (cursor) based pagination.

    The fetch function receives ``(last_key, page_size)``, where ``last_key`` is
    the key of the last item seen, or the initial key before the first page.
    Keys come from ``key_func`` when given, otherwise from the item's ``key``
    attribute (see ``PaginationKey``).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fetch_page: KeysetFetchFunction
    initial_key: Optional[str] = None
    last_key: Optional[str] = None
    key_func: Optional[KeyFunction] = None

    @model_validator(mode="before")
    @classmethod
    def _start_at_initial_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and "last_key" not in data:
            data = {**data, "last_key": data.get("initial_key")}
        return data

    @property
    def cursor(self) -> Optional[str]:
        return self.last_key

    def reset(self) -> "KeysetPaginationStrategy":
        return self.model_copy(update={"last_key": self.initial_key})

    async def fetch(self, page_size: int) -> Sequence[Any]:
        return await self.fetch_page(self.last_key, page_size)

    def advance(self, items: Sequence[Any]) -> "KeysetPaginationStrategy":
        if not items:
            return self
        return self.model_copy(update={"last_key": self.extract_key(items[-1])})

    def extract_key(self, item: Any) -> str:
        """
        Extract the pagination key from an item.

        Args:
            item: An item returned by the fetch function

        Returns:
            The item's key

        Raises:
            TypeError: If the item provides no string key
        """
        if self.key_func is not None:
            key = self.key_func(item)
        elif isinstance(item, PaginationKey):
            key = item.key
        else:
            raise TypeError(
                f"{type(item).__name__} does not provide a pagination key; "
                "implement PaginationKey or pass key_func"
            )

        if not isinstance(key, str):
            raise TypeError(f"Pagination key must be a string, got {type(key).__name__}")
        return key
