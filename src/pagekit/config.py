"""Configuration models for the two pagination modes."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, PositiveInt

from .pagination_strategies import (
    KeyFunction,
    KeysetFetchFunction,
    KeysetPaginationStrategy,
    NumberedFetchFunction,
    NumberedPaginationStrategy,
)


class NumberedPaginationConfig(BaseModel):
    """Settings for a controller that requests pages by number."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    page_size: PositiveInt
    fetch_numbered_page: NumberedFetchFunction
    initial_page: PositiveInt = 1

    def build_strategy(self) -> NumberedPaginationStrategy:
        return NumberedPaginationStrategy(
            fetch_page=self.fetch_numbered_page, initial_page=self.initial_page
        )


class KeysetPaginationConfig(BaseModel):
    """Settings for a controller that requests pages after the last seen key."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    page_size: PositiveInt
    fetch_keyset_page: KeysetFetchFunction
    initial_key: Optional[str] = None
    key_func: Optional[KeyFunction] = None

    def build_strategy(self) -> KeysetPaginationStrategy:
        return KeysetPaginationStrategy(
            fetch_page=self.fetch_keyset_page,
            initial_key=self.initial_key,
            key_func=self.key_func,
        )
