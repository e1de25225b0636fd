"""Key set resolution for token validation.

Fetches the vendor's published JSON Web Key Set and finds keys by ``kid``.
Without a cache every lookup performs one fetch, so a rotated or revoked
key stops verifying immediately.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError as PydanticValidationError

from .core.http_executor import HTTPExecutorProtocol
from .core.jwks_base import KeySetCache
from .core.json_codec import JsonCodec
from .errors import FronteggError, KeyFetchError, KeyNotFoundError
from .models import JWK, JWKS
from .telemetry import get_logger, trace_operation

JWKS_MEDIA_TYPE = "application/jwk-set+json"


class KeySetResolver:
    """Fetches the published key set and resolves keys by identifier."""

    def __init__(
        self,
        jwks_url: str,
        executor: HTTPExecutorProtocol,
        *,
        cache: KeySetCache | None = None,
        codec: JsonCodec | None = None,
    ) -> None:
        """Initialize key set resolver.

        Args:
            jwks_url: URL of the published key set.
            executor: HTTP executor used for the fetch.
            cache: Optional bounded cache; every call fetches when omitted.
            codec: JSON codec for the response body.
        """
        self.jwks_url = jwks_url
        self._executor = executor
        self._cache = cache
        self._codec = codec or JsonCodec()
        self._logger = get_logger()

    @property
    def cache(self) -> KeySetCache | None:
        """Get the key set cache, if any."""
        return self._cache

    def fetch(self) -> JWKS:
        """Fetch the key set, consulting the cache first when configured.

        Returns:
            The published key set.

        Raises:
            KeyFetchError: On transport failure, non-200 status or bad body.
        """
        jwks, _ = self._resolve()
        return jwks

    def get_key(self, kid: str) -> JWK:
        """Fetch the key set and return the key with identifier ``kid``.

        A miss against a cached key set drops the entry and fetches once
        more, so a key rotated in after the set was cached is found.

        Raises:
            KeyFetchError: If the key set cannot be fetched.
            KeyNotFoundError: If no key has a matching ``kid``.
        """
        jwks, cached = self._resolve()
        jwk = jwks.get_key(kid)
        if jwk is None and cached and self._cache is not None:
            self._logger.info("Signing key not in cached key set, refetching", kid=kid)
            self._cache.invalidate(self.jwks_url)
            jwks, _ = self._resolve()
            jwk = jwks.get_key(kid)
        if jwk is None:
            self._logger.info("Signing key not found", kid=kid)
            raise KeyNotFoundError(details={"kid": kid})
        return jwk

    def _resolve(self) -> tuple[JWKS, bool]:
        """Return the key set and whether it was served from the cache."""
        if self._cache is not None:
            cached = self._cache.get(self.jwks_url)
            if cached is not None:
                return cached, True

        with trace_operation("jwks_fetch", attributes={"jwks.url": self.jwks_url}):
            jwks = self._fetch_remote()

        if self._cache is not None:
            self._cache.put(self.jwks_url, jwks)
        return jwks, False

    def _fetch_remote(self) -> JWKS:
        try:
            response = self._executor.execute(
                "GET",
                self.jwks_url,
                headers={"Accept": JWKS_MEDIA_TYPE},
            )
        except FronteggError as e:
            raise KeyFetchError(f"Error fetching API Key signature keys: {e}") from e

        if response.status_code != httpx.codes.OK:
            self._logger.warning(
                "Key set fetch failed",
                url=self.jwks_url,
                status=response.status_code,
            )
            raise KeyFetchError(details={"status_code": response.status_code})

        data = self._codec.decode(response.content)
        if not isinstance(data, dict) or not isinstance(data.get("keys"), list):
            raise KeyFetchError("Invalid key set response: missing 'keys' array")

        try:
            jwks = JWKS(keys=[JWK(**key) for key in data["keys"]])
        except (PydanticValidationError, TypeError) as e:
            raise KeyFetchError(f"Invalid key set response: {e}") from e

        self._logger.debug("Fetched key set", url=self.jwks_url, keys=len(jwks.keys))
        return jwks
