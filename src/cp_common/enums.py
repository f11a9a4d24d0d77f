"""Global enums: must match DB CHECK constraints exactly.

Values are the wire values used by the client, so they stay camelCase.
"""

from enum import Enum


class TransactionType(str, Enum):
    """Card lifecycle state."""
    FOR_SALE = "forSale"
    SOLD = "sold"
    TRADED_GIVEN = "tradedGiven"
    TRADED_RECEIVED = "tradedReceived"


class PaymentMethod(str, Enum):
    CASH = "cash"
    ETH = "eth"
    ESSENCE = "essence"   # crafted/earned, non-monetary
    TRADE = "trade"


class Position(str, Enum):
    TORWART = "torwart"
    VERTEIDIGER = "verteidiger"
    MITTELFELD = "mittelfeld"
    STURM = "sturm"


class ChangeAction(str, Enum):
    ADD_CARD = "addCard"
    EDIT_CARD = "editCard"
    DELETE_CARD = "deleteCard"
    UPDATE_SALE_PRICE = "updateSalePrice"
    MARK_SOLD = "markSold"
    TRADE = "trade"
    REVERT_TRADE = "revertTrade"


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"
