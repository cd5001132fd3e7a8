"""Document order resolution."""

from collections.abc import Iterable

from schemas.page import Page


def order_pages(pages: Iterable[Page]) -> list[Page]:
    """Sort pages by page number, ascending.

    The sort is stable: pages sharing a number keep their discovery order.
    """
    return sorted(pages, key=lambda page: page.page_number)
