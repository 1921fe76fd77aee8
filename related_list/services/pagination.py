"""Page bookkeeping for the related list."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(slots=True)
class PaginationState:
    """Current page plus the unpaged total reported by the last fetch."""

    page_size: int
    page_number: int = 1
    total_records: int = 0

    @property
    def total_pages(self) -> int:
        if self.total_records <= 0:
            return 0
        return math.ceil(self.total_records / self.page_size)

    @property
    def is_first_page(self) -> bool:
        return self.page_number == 1

    @property
    def is_last_page(self) -> bool:
        return self.page_number >= self.total_pages

    @property
    def can_go_previous(self) -> bool:
        return self.page_number > 1

    @property
    def can_go_next(self) -> bool:
        return self.page_number < self.total_pages

    def reset(self) -> None:
        self.page_number = 1
