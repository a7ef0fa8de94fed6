from pydantic import BaseModel
import math

from app.config import settings
from app.schemas.student import parse_int


def resolve_page_size(value) -> int:
    """Selected page size, or the default when it is missing or not a positive integer"""
    size = parse_int(value)
    if size is None or size < 1:
        return settings.DEFAULT_PAGE_SIZE
    return size


def count_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


class PageState(BaseModel):
    """Transient pagination state of one page view"""
    current_page: int = 1
    total_pages: int = 1
    page_size: int = settings.DEFAULT_PAGE_SIZE

    @property
    def info(self) -> str:
        return f"Page {self.current_page} of {self.total_pages}"

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def prev_page(self) -> int:
        """Target of the prev control; stays put on the first page"""
        return self.current_page - 1 if self.has_prev else self.current_page

    @property
    def next_page(self) -> int:
        """Target of the next control; stays put on the last page"""
        return self.current_page + 1 if self.has_next else self.current_page
