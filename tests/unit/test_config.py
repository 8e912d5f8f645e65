from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from pagekit.config import KeysetPaginationConfig, NumberedPaginationConfig
from pagekit.pagination import PaginationController
from pagekit.pagination_strategies import KeysetPaginationStrategy, NumberedPaginationStrategy


class TestNumberedPaginationConfig:
    def test_defaults(self):
        fetch = AsyncMock()
        config = NumberedPaginationConfig(page_size=10, fetch_numbered_page=fetch)

        assert config.initial_page == 1
        strategy = config.build_strategy()
        assert isinstance(strategy, NumberedPaginationStrategy)
        assert strategy.current_page == 1
        assert strategy.fetch_page is fetch

    def test_initial_page(self):
        config = NumberedPaginationConfig(
            page_size=10, fetch_numbered_page=AsyncMock(), initial_page=5
        )
        assert config.build_strategy().current_page == 5

    @pytest.mark.parametrize("page_size", [0, -1])
    def test_rejects_non_positive_page_size(self, page_size):
        with pytest.raises(ValidationError):
            NumberedPaginationConfig(page_size=page_size, fetch_numbered_page=AsyncMock())

    def test_requires_fetch_function(self):
        with pytest.raises(ValidationError):
            NumberedPaginationConfig(page_size=10)


class TestKeysetPaginationConfig:
    def test_build_strategy(self):
        fetch = AsyncMock()

        def key_func(item):
            return item["id"]

        config = KeysetPaginationConfig(
            page_size=25, fetch_keyset_page=fetch, initial_key="abc", key_func=key_func
        )
        strategy = config.build_strategy()

        assert isinstance(strategy, KeysetPaginationStrategy)
        assert strategy.last_key == "abc"
        assert strategy.initial_key == "abc"
        assert strategy.key_func is key_func

    def test_rejects_non_string_initial_key(self):
        with pytest.raises(ValidationError):
            KeysetPaginationConfig(page_size=10, fetch_keyset_page=AsyncMock(), initial_key=12)


class TestControllerFromConfig:
    def test_numbered(self, logger):
        config = NumberedPaginationConfig(
            page_size=10, fetch_numbered_page=AsyncMock(), initial_page=2
        )
        controller = PaginationController.from_config(config, logger=logger)

        assert controller.page_size == 10
        assert controller.strategy.cursor == 2
        assert controller.logger is logger

    def test_keyset(self, logger):
        config = KeysetPaginationConfig(page_size=30, fetch_keyset_page=AsyncMock())
        controller = PaginationController.from_config(config, logger=logger)

        assert controller.page_size == 30
        assert isinstance(controller.strategy, KeysetPaginationStrategy)
        assert controller.strategy.cursor is None
