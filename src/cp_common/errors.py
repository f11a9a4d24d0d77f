"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Card store
  3xxx: Change history
  4xxx: Admin
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

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


class InsufficientRoleError(AppError):
    def __init__(self, required: str) -> None:
        super().__init__(1006, f"Unauthorized: {required} role required", 403)


class UserNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(1007, f"User not found: {user_id}", 404)


class ProfileAccessDeniedError(AppError):
    def __init__(self) -> None:
        super().__init__(1008, "Unauthorized: can only view your own profile", 403)


# --- 2xxx: Card store ---

class CardNotFoundError(AppError):
    def __init__(self, card_id: int) -> None:
        super().__init__(2001, f"Card not found: {card_id}", 404)


class CardOwnershipError(AppError):
    def __init__(self, card_id: int) -> None:
        super().__init__(2002, f"Unauthorized: card {card_id} belongs to another user", 403)


class InvalidCardTransitionError(AppError):
    def __init__(self, card_id: int, current: str, target: str) -> None:
        super().__init__(
            2003,
            f"Card {card_id} in state {current} cannot move to {target}",
            422,
        )


class NoValidTradeCardsError(AppError):
    def __init__(self) -> None:
        super().__init__(2004, "None of the given cards can be traded", 404)


class InvalidTradeError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2005, f"Invalid trade: {detail}", 422)


class InvalidCardAttributesError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2006, f"Invalid card attributes: {detail}", 422)


class UnsupportedSuggestionFieldError(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(2007, f"No suggestions available for field: {field}", 422)


# --- 3xxx: Change history ---

class InvalidHistoryPageError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3001, f"Invalid history page: {detail}", 422)


# --- 4xxx: Admin ---

class InvalidAdminOperationError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Invalid admin operation: {detail}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class UserBusyError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(9003, f"Another update for user {user_id} is in progress", 409)


class InvalidRequestError(AppError):
    """Request body or query failed schema validation."""

    def __init__(self, detail: str) -> None:
        super().__init__(9004, f"Invalid request: {detail}", 422)
