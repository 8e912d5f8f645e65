import asyncio

from pagekit import PaginationController

TODOS = [{"id": i, "title": f"Todo {i}"} for i in range(1, 48)]


async def fetch_todos(page_number, page_size):
    await asyncio.sleep(0.05)
    start = (page_number - 1) * page_size
    return TODOS[start : start + page_size]


async def main():
    controller = PaginationController.numbered(page_size=20, fetch_numbered_page=fetch_todos)

    first_page = await controller.load()
    print(f"Loaded {len(first_page)} todos")

    while not controller.did_reach_end:
        page = await controller.load_more()
        print(f"Loaded {len(page)} more todos")


asyncio.run(main())
