"""Pydantic schemas for cc_cashcard API requests and responses.

Sort parameter format: "<field>[,<asc|desc>]", e.g. "amount,desc".
Direction defaults to asc; field and direction are case-insensitive.
"""

from pydantic import BaseModel

from src.cc_cashcard.domain.models import (
    DEFAULT_SORT_FIELD,
    SORTABLE_FIELDS,
    CashCard,
    SortDirection,
)
from src.cc_common.errors import InvalidSortError

# ---------------------------------------------------------------------------
# Sort parameter
# ---------------------------------------------------------------------------


def parse_sort(raw: str | None) -> tuple[str, SortDirection]:
    """Parse a sort query parameter -> (field, direction)."""
    if raw is None or not raw.strip():
        return DEFAULT_SORT_FIELD, SortDirection.ASC

    parts = [p.strip() for p in raw.split(",")]
    if len(parts) > 2:
        raise InvalidSortError(raw)

    field = parts[0].lower()
    if field not in SORTABLE_FIELDS:
        raise InvalidSortError(f"unknown field '{parts[0]}'")

    if len(parts) == 1 or not parts[1]:
        return field, SortDirection.ASC
    try:
        direction = SortDirection(parts[1].lower())
    except ValueError:
        raise InvalidSortError(f"unknown direction '{parts[1]}'") from None
    return field, direction


# ---------------------------------------------------------------------------
# Request / response bodies
# ---------------------------------------------------------------------------


class CashCardRequest(BaseModel):
    """Create/update payload. Any id or owner sent by the client is ignored."""

    amount: float


class CashCardResponse(BaseModel):
    id: int
    amount: float

    @classmethod
    def from_domain(cls, card: CashCard) -> "CashCardResponse":
        return cls(id=card.id, amount=card.amount)
