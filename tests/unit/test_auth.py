"""Unit tests for bearer token minting and caching."""

from __future__ import annotations

import jwt
import pytest

from zai_sdk import AuthenticationError, TokenCache, TokenProvider
from zai_sdk._constants import TOKEN_TTL
from zai_sdk.auth import mint_token, split_api_key


class TestSplitApiKey:
    """Tests for split_api_key()."""

    def test_valid_key(self) -> None:
        assert split_api_key("abc.def") == ("abc", "def")

    @pytest.mark.parametrize("key", ["nodot", ".secret", "id.", "a.b.c", ""])
    def test_malformed_key(self, key: str) -> None:
        with pytest.raises(AuthenticationError):
            split_api_key(key)


class TestMintToken:
    """Tests for mint_token()."""

    def test_token_header_and_claims(self, api_key: str) -> None:
        token = mint_token(api_key, now=1_700_000_000.0)

        header = jwt.get_unverified_header(token.token)
        assert header["alg"] == "HS256"
        assert header["sign_type"] == "SIGN"

        claims = jwt.decode(
            token.token,
            "test-key-secret",
            algorithms=["HS256"],
            options={"verify_exp": False},
        )
        assert claims["api_key"] == "test-key-id"
        assert claims["timestamp"] == 1_700_000_000_000
        assert claims["exp"] == int((1_700_000_000.0 + TOKEN_TTL) * 1000)

    def test_same_inputs_yield_same_token(self, api_key: str) -> None:
        first = mint_token(api_key, now=1_700_000_000.0)
        second = mint_token(api_key, now=1_700_000_000.0)

        assert first.token == second.token

    def test_signature_uses_secret(self, api_key: str) -> None:
        token = mint_token(api_key, now=1_700_000_000.0)

        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(
                token.token,
                "wrong-secret",
                algorithms=["HS256"],
                options={"verify_exp": False},
            )

    def test_usable_window(self, api_key: str) -> None:
        token = mint_token(api_key, now=1000.0)

        assert token.is_usable(1000.0)
        assert token.is_usable(1000.0 + TOKEN_TTL - 30.0)
        assert not token.is_usable(1000.0 + TOKEN_TTL - 29.0)


class TestTokenCache:
    """Tests for TokenCache."""

    def test_reuses_token_while_usable(self, api_key: str) -> None:
        now = [1000.0]
        cache = TokenCache(clock=lambda: now[0])

        first = cache.get_or_mint(api_key)
        now[0] += 60.0
        second = cache.get_or_mint(api_key)

        assert second is first

    def test_mints_new_token_near_expiry(self, api_key: str) -> None:
        now = [1000.0]
        cache = TokenCache(clock=lambda: now[0])

        first = cache.get_or_mint(api_key)
        now[0] += TOKEN_TTL - 10.0
        second = cache.get_or_mint(api_key)

        assert second.token != first.token
        assert second.expires_at > first.expires_at

    def test_evicts_oldest_entry(self) -> None:
        cache = TokenCache(max_size=2)

        cache.get_or_mint("one.secret")
        cache.get_or_mint("two.secret")
        cache.get_or_mint("three.secret")

        assert len(cache) == 2
        assert "one" not in cache
        assert "two" in cache
        assert "three" in cache

    def test_invalidate(self, api_key: str) -> None:
        cache = TokenCache()
        cache.get_or_mint(api_key)

        cache.invalidate("test-key-id")

        assert "test-key-id" not in cache


class TestTokenProvider:
    """Tests for TokenProvider."""

    def test_rejects_malformed_key(self, token_cache: TokenCache) -> None:
        with pytest.raises(AuthenticationError):
            TokenProvider("malformed", cache=token_cache)

    def test_uncached_provider_leaves_cache_empty(
        self, api_key: str, token_cache: TokenCache
    ) -> None:
        provider = TokenProvider(api_key, use_cache=False, cache=token_cache)

        token = provider.get_token()

        assert jwt.get_unverified_header(token)["sign_type"] == "SIGN"
        assert len(token_cache) == 0

    def test_cached_provider_shares_token(
        self, api_key: str, token_cache: TokenCache
    ) -> None:
        first = TokenProvider(api_key, use_cache=True, cache=token_cache)
        second = TokenProvider(api_key, use_cache=True, cache=token_cache)

        assert first.get_token() == second.get_token()
        assert "test-key-id" in token_cache

    def test_invalidate_forces_new_token(self, api_key: str) -> None:
        now = [1000.0]
        cache = TokenCache(clock=lambda: now[0])
        provider = TokenProvider(api_key, use_cache=True, cache=cache)

        first = provider.get_token()
        now[0] += 1.0
        provider.invalidate()
        second = provider.get_token()

        assert first != second

    def test_repr_hides_secret(self, api_key: str, token_cache: TokenCache) -> None:
        provider = TokenProvider(api_key, cache=token_cache)

        assert "test-key-secret" not in repr(provider)
        assert "test-key-id" in repr(provider)
