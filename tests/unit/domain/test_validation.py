"""
登録入力ルールの単体テスト
"""

import pytest

from keygate.domain.validation import (
    validate_password,
    validate_prefix,
    validate_username,
)


class TestValidateUsername:
    """validate_username関数のテスト"""

    def test_valid(self) -> None:
        assert validate_username("alice_01").valid

    def test_must_start_with_letter(self) -> None:
        """先頭が英字でない場合はエラーになること"""
        result = validate_username("1alice")
        assert result.errors == ["Username must start with a letter"]

    def test_reports_every_failed_rule(self) -> None:
        """該当するすべてのメッセージが返ること"""
        result = validate_username("_!")
        assert "Username must be at least 3 characters" in result.errors
        assert (
            "Username can only contain letters, numbers, underscore and dash"
            in result.errors
        )
        assert "Username must start with a letter" in result.errors

    def test_too_long(self) -> None:
        result = validate_username("a" * 51)
        assert result.errors == ["Username must not exceed 50 characters"]

    def test_trailing_newline_rejected(self) -> None:
        """末尾の改行も使えない文字として扱われること"""
        assert validate_username("alice\n").errors == [
            "Username can only contain letters, numbers, underscore and dash"
        ]

    def test_not_a_string(self) -> None:
        assert validate_username(123).errors == ["Username must be a string"]


class TestValidatePassword:
    """validate_password関数のテスト"""

    def test_valid(self) -> None:
        assert validate_password("secret1").valid

    @pytest.mark.parametrize(
        ("password", "message"),
        [
            ("abc1", "Password must be at least 6 characters"),
            ("abcdefg", "Password must contain at least one number"),
            ("1234567", "Password must contain at least one letter"),
            ("a1" * 65, "Password must not exceed 128 characters"),
        ],
    )
    def test_rules(self, password: str, message: str) -> None:
        assert message in validate_password(password).errors

    def test_weak_password(self) -> None:
        """弱いパスワード一覧に含まれる場合はエラーになること"""
        result = validate_password("password")
        assert "Password is too weak, please choose a stronger password" in (
            result.errors
        )


class TestValidatePrefix:
    """validate_prefix関数のテスト"""

    def test_valid(self) -> None:
        assert validate_prefix("acme_01").valid

    def test_rejects_dash(self) -> None:
        """ハイフンは使えないこと"""
        assert validate_prefix("ac-me").errors == [
            "Prefix can only contain letters, numbers and underscore"
        ]

    def test_trailing_newline_rejected(self) -> None:
        assert validate_prefix("acme\n").errors == [
            "Prefix can only contain letters, numbers and underscore"
        ]

    def test_length_bounds(self) -> None:
        assert "Prefix must be at least 2 characters" in validate_prefix("a").errors
        assert "Prefix must not exceed 20 characters" in (
            validate_prefix("a" * 21).errors
        )
