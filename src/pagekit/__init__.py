"""Async pagination controller with numbered and keyset strategies."""

__version__ = "0.1.0"

from .config import KeysetPaginationConfig, NumberedPaginationConfig
from .exceptions import (
    AlreadyLoadingError,
    EndReachedError,
    FetchError,
    PaginationCancelledError,
    PaginationError,
)
from .fetchers import RestPageFetcher
from .logging import DefaultLogger, Logger
from .pagination import PageOperation, PaginationController
from .pagination_strategies import KeysetPaginationStrategy, NumberedPaginationStrategy
from .pagination_strategy_protocol import PaginationKey, PaginationStrategy

__all__ = [
    "AlreadyLoadingError",
    "DefaultLogger",
    "EndReachedError",
    "FetchError",
    "KeysetPaginationConfig",
    "KeysetPaginationStrategy",
    "Logger",
    "NumberedPaginationConfig",
    "NumberedPaginationStrategy",
    "PageOperation",
    "PaginationCancelledError",
    "PaginationController",
    "PaginationError",
    "PaginationKey",
    "PaginationStrategy",
    "RestPageFetcher",
    "__version__",
]
