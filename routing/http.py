#Purpose: the single place where HTTP outcomes become routing errors.
#Status codes are mapped to typed errors here so no caller ever has to
#inspect exception messages:
#  429                -> RateLimitedError (Retry-After honoured)
#  timeout/connection -> TransportBlockedError
#  other non-2xx      -> UnknownProviderError
#  invalid JSON       -> UnknownProviderError

import logging
from typing import Any, Dict, Optional

import requests

from .cancellation import CancelToken, raise_if_cancelled
from .errors import RateLimitedError, TransportBlockedError, UnknownProviderError

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_S = 60.0


def parse_retry_after(headers, default_s: float = DEFAULT_RETRY_AFTER_S) -> float:
    """
    Retry-After in seconds. HTTP-date values and garbage fall back to the default.
    """
    value = (headers or {}).get("Retry-After")
    if value is None:
        return default_s
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return default_s
    return seconds if seconds >= 0 else default_s


def fetch_json(
    session: requests.Session,
    method: str,
    url: str,
    *,
    provider: str,
    timeout: float,
    cancel: Optional[CancelToken] = None,
    default_retry_after_s: float = DEFAULT_RETRY_AFTER_S,
    **kwargs,
) -> Dict[str, Any]:
    """
    Perform one HTTP call with a hard timeout and return the decoded JSON body.
    """
    raise_if_cancelled(cancel)

    try:
        response = session.request(method, url, timeout=timeout, **kwargs)
    except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as exc:
        raise TransportBlockedError(provider, f"{provider} unreachable: {exc}") from exc
    except requests.exceptions.RequestException as exc:
        raise UnknownProviderError(provider, exc) from exc

    # the caller walked away while we were on the wire, drop the body
    raise_if_cancelled(cancel)

    if response.status_code == 429:
        retry_after_s = parse_retry_after(response.headers, default_retry_after_s)
        raise RateLimitedError(provider, retry_after_s)

    if not 200 <= response.status_code < 300:
        raise UnknownProviderError(
            provider,
            message=f"{provider} returned HTTP {response.status_code}",
        )

    try:
        data = response.json()
    except ValueError as exc:
        raise UnknownProviderError(provider, exc, f"{provider} returned invalid JSON") from exc

    if not isinstance(data, dict):
        raise UnknownProviderError(provider, message=f"{provider} returned unexpected payload")

    logger.debug(f"{method} {url} -> {response.status_code}")
    return data
