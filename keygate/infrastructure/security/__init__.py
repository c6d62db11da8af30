from .token_codec import TokenCodec, derive_key

__all__ = ["TokenCodec", "derive_key"]
