"""
Presentation層例外ハンドラーの単体テスト
"""

import asyncio
import json
from typing import Any
from unittest.mock import MagicMock

from keygate.domain.exceptions import AuthenticationError, ErrorCode, ValidationError
from keygate.presentation.exception_handlers.handlers import (
    classify_validation_errors,
    domain_error_handler,
)
from tests.helpers import make_settings


def make_request(debug: bool) -> MagicMock:
    request = MagicMock()
    request.app.state.settings = make_settings(IS_DEBUG=debug)
    return request


def error(loc: tuple[Any, ...], type_: str, msg: str = "error") -> dict[str, Any]:
    return {"loc": loc, "type": type_, "msg": msg}


class TestDomainErrorHandler:
    """domain_error_handler関数のテスト"""

    def test_debug_response(self) -> None:
        """デバッグ時は内部メッセージとカテゴリを返すこと"""
        exc = ValidationError(
            "Username validation failed",
            code=ErrorCode.USERNAME_VALIDATION_FAILED,
            details={"username": ["Username must start with a letter"]},
        )

        response = asyncio.run(domain_error_handler(make_request(True), exc))

        assert response.status_code == 400
        content = json.loads(response.body.decode())
        assert content["status"] == "error"
        assert content["errorCode"] == "0x108"
        assert content["error"] == "Username validation failed"
        assert content["category"] == "validation"
        assert content["details"] == {
            "username": ["Username must start with a letter"]
        }

    def test_production_response(self) -> None:
        """デバッグ無効時は汎用メッセージのみを返すこと"""
        exc = AuthenticationError("Invalid credentials")

        response = asyncio.run(domain_error_handler(make_request(False), exc))

        assert response.status_code == 401
        content = json.loads(response.body.decode())
        assert content == {
            "status": "error",
            "errorCode": "0x001",
            "error": "Unauthorized",
        }


class TestClassifyValidationErrors:
    """classify_validation_errors関数のテスト"""

    def test_invalid_json(self) -> None:
        api_error = classify_validation_errors([error(("body", 1), "json_invalid")])
        assert api_error.error_code == ErrorCode.JSON_PARSE_ERROR
        assert api_error.status_code == 400

    def test_missing_fields(self) -> None:
        api_error = classify_validation_errors(
            [error(("body", "username"), "missing"), error(("body", "prefix"), "missing")]
        )
        assert api_error.error_code == ErrorCode.MISSING_FIELDS
        assert api_error.error_message == "Missing required fields: username, prefix"

    def test_amount_range(self) -> None:
        api_error = classify_validation_errors(
            [error(("body", "amount"), "less_than_equal")]
        )
        assert api_error.error_code == ErrorCode.INVALID_AMOUNT_VALUE

    def test_length_range(self) -> None:
        api_error = classify_validation_errors(
            [error(("body", "length"), "greater_than_equal")]
        )
        assert api_error.error_code == ErrorCode.INVALID_LENGTH_VALUE

    def test_key_type(self) -> None:
        api_error = classify_validation_errors([error(("body", "key"), "string_type")])
        assert api_error.error_code == ErrorCode.INVALID_KEY_TYPE

    def test_field_type(self) -> None:
        api_error = classify_validation_errors(
            [error(("body", "amount"), "float_type")]
        )
        assert api_error.error_code == ErrorCode.INVALID_FIELD_TYPE

    def test_missing_takes_priority_over_type(self) -> None:
        """欠落と型不一致が混在する場合は欠落を優先すること"""
        api_error = classify_validation_errors(
            [error(("body", "amount"), "float_type"), error(("body", "length"), "missing")]
        )
        assert api_error.error_code == ErrorCode.MISSING_FIELDS
