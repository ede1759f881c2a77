"""Bearer token minting and caching.

API keys have the form ``<api-key-id>.<api-secret>``. Requests are not sent
with the raw key; instead a short-lived HS256 JWT is signed with the secret
and carries the key id:

    header:  {"alg": "HS256", "typ": "JWT", "sign_type": "SIGN"}
    payload: {"api_key": <id>, "exp": <ms>, "timestamp": <ms>}

Tokens can be cached per key id in a process-wide :class:`TokenCache`.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

import jwt

from zai_sdk._constants import (
    TOKEN_CACHE_MAX_SIZE,
    TOKEN_SAFETY_MARGIN,
    TOKEN_TTL,
)
from zai_sdk.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SIGN_TYPE = "SIGN"


@dataclass(frozen=True)
class BearerToken:
    """A signed bearer token and its expiry (epoch seconds)."""

    token: str
    key_id: str
    expires_at: float

    def is_usable(self, now: float, margin: float = TOKEN_SAFETY_MARGIN) -> bool:
        """Check the token still has at least ``margin`` seconds to live."""
        return self.expires_at - now >= margin


def split_api_key(api_key: str) -> tuple[str, str]:
    """Split an API key into ``(key_id, secret)``.

    Raises:
        AuthenticationError: If the key is not exactly ``<id>.<secret>``
    """
    parts = api_key.split(".")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise AuthenticationError(
            "Invalid API key format, expected '<api-key-id>.<api-secret>'"
        )
    return parts[0], parts[1]


def mint_token(api_key: str, now: float | None = None) -> BearerToken:
    """Sign a new bearer token for ``api_key``.

    The result only depends on the key and ``now``, so minting twice with the
    same arguments yields identical tokens.

    Args:
        api_key: Credential in ``<id>.<secret>`` form
        now: Epoch seconds to mint at (defaults to the current time)

    Raises:
        AuthenticationError: If the key is malformed
    """
    key_id, secret = split_api_key(api_key)
    issued_at = time.time() if now is None else now
    expires_at = issued_at + TOKEN_TTL

    payload = {
        "api_key": key_id,
        "exp": int(expires_at * 1000),
        "timestamp": int(issued_at * 1000),
    }
    token = jwt.encode(
        payload,
        secret,
        algorithm=ALGORITHM,
        headers={"sign_type": SIGN_TYPE},
    )
    return BearerToken(token=token, key_id=key_id, expires_at=expires_at)


class TokenCache:
    """Thread-safe mapping from key id to its current bearer token.

    Holds at most ``max_size`` ids; the oldest entry is evicted first.
    """

    def __init__(
        self,
        max_size: int = TOKEN_CACHE_MAX_SIZE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_size = max_size
        self.clock = clock
        self._tokens: OrderedDict[str, BearerToken] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)

    def __contains__(self, key_id: object) -> bool:
        with self._lock:
            return key_id in self._tokens

    def get_or_mint(self, api_key: str) -> BearerToken:
        """Return the cached token for the key's id, minting if needed.

        Minting happens under the cache lock, so concurrent callers for the
        same id share a single token.
        """
        key_id, _ = split_api_key(api_key)
        with self._lock:
            now = self.clock()
            cached = self._tokens.get(key_id)
            if cached is not None and cached.is_usable(now):
                return cached

            token = mint_token(api_key, now=now)
            self._tokens.pop(key_id, None)
            self._tokens[key_id] = token
            while len(self._tokens) > self.max_size:
                evicted, _ = self._tokens.popitem(last=False)
                logger.debug("Evicted cached token for key id %s", evicted)
            return token

    def invalidate(self, key_id: str) -> None:
        """Drop the cached token for ``key_id``, if any."""
        with self._lock:
            self._tokens.pop(key_id, None)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()


_default_cache = TokenCache()


def default_token_cache() -> TokenCache:
    """Return the process-wide token cache."""
    return _default_cache


class TokenProvider:
    """Produce the bearer token for one API key.

    With caching enabled tokens come from a shared :class:`TokenCache`;
    otherwise every call mints a fresh token.
    """

    def __init__(
        self,
        api_key: str,
        *,
        use_cache: bool = False,
        cache: TokenCache | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._key_id, _ = split_api_key(api_key)
        self._api_key = api_key
        self.use_cache = use_cache
        self._cache = cache if cache is not None else default_token_cache()
        self._clock = clock

    @property
    def key_id(self) -> str:
        return self._key_id

    def get_token(self) -> str:
        """Return a bearer token string for the next request."""
        if self.use_cache:
            return self._cache.get_or_mint(self._api_key).token
        return mint_token(self._api_key, now=self._clock()).token

    def invalidate(self) -> None:
        """Forget the cached token so the next request mints a new one."""
        self._cache.invalidate(self._key_id)

    def __repr__(self) -> str:
        return f"TokenProvider(key_id={self._key_id!r}, use_cache={self.use_cache})"
