"""Firebase ID token verifier.

Fetches and caches Google's public keys for the ``securetoken`` service
(JWKS) and validates ID token signatures and claims with PyJWT.

- Algorithm pinning: RS256 only
- Claim validation: iss, aud, exp, iat, sub
- Key rotation: unknown ``kid`` forces a single JWKS refresh, at most once
  per ``min_refresh_seconds``
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
import jwt
from jwt.algorithms import RSAAlgorithm

from inventory_api.config import GOOGLE_SECURETOKEN_JWKS_URL
from inventory_api.domain.errors import AuthenticationInvalidError

logger = logging.getLogger(__name__)


class FirebaseTokenVerifier:
    """Validates Firebase ID tokens and returns the holder's email."""

    def __init__(
        self,
        project_id: str,
        jwks_url: str = GOOGLE_SECURETOKEN_JWKS_URL,
        cache_ttl_hours: int = 6,
        min_refresh_seconds: int = 300,
        allowed_algorithms: Optional[List[str]] = None,
        http_timeout: float = 5.0,
    ):
        """
        Args:
            project_id: Firebase project id, the expected audience
            jwks_url: URL of the signing keys
            cache_ttl_hours: JWKS cache TTL in hours
            min_refresh_seconds: Minimum gap between forced JWKS refreshes
            allowed_algorithms: Allowed signing algorithms (default: RS256)
            http_timeout: Timeout for the JWKS request in seconds
        """
        self.project_id = project_id
        self.issuer = f"https://securetoken.google.com/{project_id}"
        self.jwks_url = jwks_url
        self.cache_ttl = timedelta(hours=cache_ttl_hours)
        self.min_refresh_interval = timedelta(seconds=min_refresh_seconds)
        self.allowed_algorithms = allowed_algorithms or ["RS256"]
        self.http_timeout = http_timeout

        self._jwks_cache: Optional[Dict[str, Any]] = None
        self._cache_expires_at: Optional[datetime] = None
        self._last_forced_refresh: Optional[datetime] = None

    def _fetch_jwks(self) -> Dict[str, Any]:
        """
        Fetch the JWKS document.

        Raises:
            httpx.HTTPError: If the request fails
        """
        with httpx.Client(timeout=self.http_timeout) as client:
            response = client.get(self.jwks_url)
            response.raise_for_status()
            return response.json()

    def get_jwks(self, force_refresh: bool = False) -> Dict[str, Any]:
        """
        Get the JWKS, served from cache while it is fresh.

        A forced refresh within ``min_refresh_seconds`` of the previous one
        returns the cached keys.
        """
        now = datetime.now(timezone.utc)
        if force_refresh and self._jwks_cache and self._last_forced_refresh is not None:
            if now - self._last_forced_refresh < self.min_refresh_interval:
                logger.warning("JWKS refresh skipped, last forced refresh is too recent")
                return self._jwks_cache
        elif not force_refresh and self._jwks_cache and self._cache_expires_at and now < self._cache_expires_at:
            return self._jwks_cache

        if force_refresh:
            self._last_forced_refresh = now

        self._jwks_cache = self._fetch_jwks()
        self._cache_expires_at = now + self.cache_ttl
        logger.info(f"JWKS fetched and cached until {self._cache_expires_at.isoformat()}")
        return self._jwks_cache

    def _find_key(self, kid: Optional[str], force_refresh: bool = False) -> Optional[Dict[str, Any]]:
        for key in self.get_jwks(force_refresh=force_refresh).get("keys", []):
            if key.get("kid") == kid:
                return key
        return None

    def verify(self, token: str) -> str:
        """
        Validate an ID token and return the verified email.

        Raises:
            AuthenticationInvalidError: If the token is malformed, expired,
                wrongly signed, issued for another project, or carries no email
        """
        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as exc:
            raise AuthenticationInvalidError("Malformed token") from exc

        kid = header.get("kid")
        alg = header.get("alg")
        if alg not in self.allowed_algorithms:
            raise AuthenticationInvalidError(f"Algorithm {alg} not allowed")

        try:
            jwk = self._find_key(kid)
            if jwk is None:
                logger.warning(f"Signing key {kid} not in cached JWKS, refreshing")
                jwk = self._find_key(kid, force_refresh=True)
        except httpx.HTTPError as exc:
            logger.error(f"Failed to fetch JWKS from {self.jwks_url}: {exc}")
            raise AuthenticationInvalidError("Signing keys unavailable") from exc

        if jwk is None:
            raise AuthenticationInvalidError(f"Signing key {kid} not found")

        try:
            signing_key = RSAAlgorithm.from_jwk(jwk)
            claims = jwt.decode(
                token,
                signing_key,
                algorithms=[alg],
                audience=self.project_id,
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise AuthenticationInvalidError(f"Token rejected: {exc}") from exc

        email = claims.get("email")
        if not email:
            raise AuthenticationInvalidError("Token carries no email claim")
        return email
