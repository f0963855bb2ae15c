"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Cash card
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid username or password", 401)


class CardOwnerRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Card owner role required", 403)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Account is disabled", 403)


# --- 2xxx: Cash card ---

class CashCardNotFoundError(AppError):
    """Raised both for missing cards and for cards owned by someone else.

    The two cases must stay indistinguishable to the caller so that card ids
    belonging to other users cannot be enumerated.
    """

    def __init__(self, card_id: int) -> None:
        super().__init__(2001, f"Cash card not found: {card_id}", 404)


class InvalidSortError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2002, f"Invalid sort parameter: {detail}", 400)


# --- 9xxx: System ---

class StoreUnavailableError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Storage unavailable", 500)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
