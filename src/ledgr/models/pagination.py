"""Pagination window description for list endpoints."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationMeta:
    """Server-computed window over a filtered collection.

    Every field is an int; missing server values are replaced with safe
    defaults before an instance is built.
    """

    current_page: int = 1
    last_page: int = 1
    per_page: int = 15
    total: int = 0
    from_: int = 0
    to: int = 0

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.last_page

    def window_label(self, noun: str = "items") -> str:
        return f"Showing {self.from_} to {self.to} of {self.total} {noun}"

    def page_numbers(self, span: int = 5) -> list[int]:
        """Up to ``span`` page buttons centred on the current page."""

        last = max(1, self.last_page)
        if last <= span:
            return list(range(1, last + 1))
        half = span // 2
        if self.current_page <= half + 1:
            start = 1
        elif self.current_page >= last - half:
            start = last - span + 1
        else:
            start = self.current_page - half
        return list(range(start, start + span))
