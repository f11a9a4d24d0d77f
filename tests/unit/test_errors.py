"""Tests for cp_common.errors and cp_common.response."""

import pytest

from src.cp_common.errors import (
    AppError,
    CardNotFoundError,
    CardOwnershipError,
    InsufficientRoleError,
    InvalidCardTransitionError,
    InvalidHistoryPageError,
    InvalidRequestError,
    InvalidTradeError,
    NoValidTradeCardsError,
    UserBusyError,
)
from src.cp_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500
        assert isinstance(err, Exception)


class TestSpecificErrors:
    @pytest.mark.parametrize(
        ("err", "code", "status"),
        [
            (InsufficientRoleError("user"), 1006, 403),
            (CardNotFoundError(5), 2001, 404),
            (CardOwnershipError(5), 2002, 403),
            (InvalidCardTransitionError(5, "sold", "forSale"), 2003, 422),
            (NoValidTradeCardsError(), 2004, 404),
            (InvalidTradeError("overlap"), 2005, 422),
            (InvalidHistoryPageError("limit"), 3001, 422),
            (UserBusyError("u1"), 9003, 409),
            (InvalidRequestError("body.age: bad"), 9004, 422),
        ],
    )
    def test_codes_and_statuses(self, err: AppError, code: int, status: int) -> None:
        assert err.code == code
        assert err.http_status == status

    def test_unauthorized_messages(self) -> None:
        assert CardOwnershipError(5).message.startswith("Unauthorized")
        assert InsufficientRoleError("admin").message.startswith("Unauthorized")

    def test_transition_message_names_states(self) -> None:
        err = InvalidCardTransitionError(12, "sold", "tradedGiven")
        assert "12" in err.message
        assert "sold" in err.message
        assert "tradedGiven" in err.message


class TestApiResponse:
    def test_success_envelope(self) -> None:
        resp = success_response({"card_id": 1})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"card_id": 1}
        assert resp.request_id.startswith("req_")
        assert resp.timestamp

    def test_success_with_request_id(self) -> None:
        assert success_response(None, request_id="req_abc").request_id == "req_abc"

    def test_error_envelope(self) -> None:
        resp = error_response(2001, "Card not found: 5")
        assert isinstance(resp, ApiResponse)
        assert resp.code == 2001
        assert resp.data is None
