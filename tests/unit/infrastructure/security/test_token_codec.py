"""
トークンコーデックの単体テスト
"""

import base64
from unittest.mock import patch

import pytest

from keygate.infrastructure.security import TokenCodec, derive_key

SECRET = "unit-test-secret"


def _flip_byte(token: str, index: int) -> str:
    padding = "=" * (-len(token) % 4)
    raw = bytearray(base64.urlsafe_b64decode(token + padding))
    raw[index] ^= 0x01
    return base64.urlsafe_b64encode(bytes(raw)).rstrip(b"=").decode("ascii")


class TestDeriveKey:
    """derive_key関数のテスト"""

    def test_key_is_256_bits(self) -> None:
        assert len(derive_key("x")) == 32
        assert len(derive_key("a much longer secret " * 10)) == 32

    def test_deterministic(self) -> None:
        assert derive_key(SECRET) == derive_key(SECRET)


class TestEncryptJson:
    """encrypt_json/decrypt_jsonのテスト"""

    def test_round_trip(self) -> None:
        """暗号化したJSONが復号できること"""
        codec = TokenCodec(SECRET)
        data = {"key": "acme_30_abc", "id_device": "dev-1", "n": [1, 2]}
        assert codec.decrypt_json(codec.encrypt_json(data)) == data

    def test_token_is_url_safe_without_padding(self) -> None:
        token = TokenCodec(SECRET).encrypt_json({"a": 1})
        assert "=" not in token
        assert "+" not in token and "/" not in token

    def test_nonce_is_random(self) -> None:
        """同じ入力でも毎回異なるトークンになること"""
        codec = TokenCodec(SECRET)
        assert codec.encrypt_json({"a": 1}) != codec.encrypt_json({"a": 1})

    def test_wrong_secret(self) -> None:
        token = TokenCodec(SECRET).encrypt_json({"a": 1})
        assert TokenCodec("other-secret").decrypt_json(token) is None

    @pytest.mark.parametrize("index", [0, 11, 12, -1])
    def test_flipped_byte(self, index: int) -> None:
        """nonce・暗号文・タグのどのバイトが変わっても復号できないこと"""
        codec = TokenCodec(SECRET)
        token = codec.encrypt_json({"a": 1})
        assert codec.decrypt_json(_flip_byte(token, index)) is None

    @pytest.mark.parametrize(
        "token", ["", "not base64 !!!", "abc", "é", "AAAA", None]
    )
    def test_malformed(self, token: str) -> None:
        """不正な入力は例外ではなくNoneになること"""
        assert TokenCodec(SECRET).decrypt_json(token) is None

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ValueError):
            TokenCodec("")


class TestSessionToken:
    """encode_session/decode_sessionのテスト"""

    def test_round_trip_within_ttl(self) -> None:
        codec = TokenCodec(SECRET)
        payload = codec.decode_session(codec.encode_session("alice", "acme", 60))
        assert payload is not None
        assert (payload.username, payload.prefix) == ("alice", "acme")

    def test_expired(self) -> None:
        """有効期限を過ぎたトークンはNoneになること"""
        codec = TokenCodec(SECRET)
        with patch("keygate.infrastructure.security.token_codec.time.time") as now:
            now.return_value = 1_000_000
            token = codec.encode_session("alice", "acme", 60)

            now.return_value = 1_000_060
            assert codec.decode_session(token) is not None

            now.return_value = 1_000_061
            assert codec.decode_session(token) is None

    @pytest.mark.parametrize("junk", ["!!*~", " ", "=", "\n", "."])
    def test_junk_characters_rejected(self, junk: str) -> None:
        """アルファベット外の文字が混ざったトークンはNoneになること"""
        codec = TokenCodec(SECRET)
        token = codec.encode_session("alice", "acme", 3600)
        middle = len(token) // 2
        mangled = token[:middle] + junk + token[middle:]
        assert codec.decode_session(mangled) is None

    def test_standard_alphabet_rejected(self) -> None:
        """標準base64の +/ に置き換えたトークンはNoneになること"""
        codec = TokenCodec(SECRET)
        token = codec.encode_session("alice", "acme", 3600)
        while "-" not in token and "_" not in token:
            token = codec.encode_session("alice", "acme", 3600)

        standard = token.replace("-", "+").replace("_", "/")
        assert codec.decode_session(token) is not None
        assert codec.decode_session(standard) is None

    def test_payload_shape_checked(self) -> None:
        """セッション形式でないJSONはNoneになること"""
        codec = TokenCodec(SECRET)
        assert codec.decode_session(codec.encrypt_json({"username": "alice"})) is None
