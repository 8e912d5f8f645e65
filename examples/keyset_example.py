import asyncio

from aiohttp import ClientSession

from pagekit import PaginationController, RestPageFetcher

BASE_URL = "https://api.example.com"
ENDPOINT = "/v1/events"


async def main():
    async with ClientSession() as session:
        fetcher = RestPageFetcher(
            session, BASE_URL, endpoint=ENDPOINT, items_key="_embedded.events", key_param="after"
        )
        controller = PaginationController.keyset(
            page_size=50,
            fetch_keyset_page=fetcher.fetch_keyset_page,
            key_func=lambda event: event["id"],
        )

        async for page in controller.iter_pages(max_pages=5):
            for event in page:
                print(event["id"], event.get("name"))


asyncio.run(main())
