"""Domain models for cc_cashcard — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CashCard:
    id: int | None       # None until the store assigns one
    amount: float
    owner: str


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Fields a listing may be ordered by
SORTABLE_FIELDS: frozenset[str] = frozenset({"id", "amount"})

DEFAULT_SORT_FIELD = "amount"


@dataclass(frozen=True)
class PageSpec:
    """A bounded, ordered slice of one owner's cards.

    Ordering is always total: ties on sort_field fall back to id ascending.
    """

    page_index: int = 0
    page_size: int = 20
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if self.page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {self.page_index}")
        if self.page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {self.page_size}")
        if self.sort_field not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field: {self.sort_field}")

    @property
    def offset(self) -> int:
        return self.page_index * self.page_size
