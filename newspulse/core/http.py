"""Thin ``requests`` wrapper that maps HTTP failures onto the error hierarchy."""

from typing import Any, Dict, Optional

import requests

from newspulse.core.errors import (
    InvalidCredentials,
    RateLimited,
    UpstreamUnavailable,
)
from newspulse.core.logger import logger

_ACCEPT_JSON = {"Accept": "application/json"}


def get_json(
    url: str,
    source_name: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = 15,
) -> Dict[str, Any]:
    """GET ``url`` and return the decoded JSON body.

    Args:
        url: Endpoint URL (may already carry a query string).
        source_name: Provider name used in log lines and raised errors.
        params: Extra query parameters.
        timeout: Socket timeout in seconds.

    Raises:
        InvalidCredentials: HTTP 401 or 403.
        RateLimited: HTTP 429.
        UpstreamUnavailable: Transport failure, any other non-2xx status,
            or a body that is not a JSON object.
    """
    safe_url = url.split("?")[0]
    try:
        resp = requests.get(url, params=params, headers=_ACCEPT_JSON, timeout=timeout)
    except requests.RequestException as exc:
        # requests embeds the full URL (query string included) in its message
        reason = type(exc).__name__
        logger.error(f"{source_name}: INFRA_FAILURE calling {safe_url}: {reason}")
        raise UpstreamUnavailable(
            f"Unable to reach {source_name} ({reason})", source_name=source_name, url=safe_url,
        ) from None

    raise_for_status(resp, source_name, safe_url)

    try:
        body = resp.json()
    except ValueError as exc:
        raise UpstreamUnavailable(
            f"{source_name} returned a non-JSON body", source_name=source_name,
            status_code=resp.status_code, url=safe_url,
        ) from exc

    if not isinstance(body, dict):
        raise UpstreamUnavailable(
            f"{source_name} returned an unexpected payload type: {type(body).__name__}",
            source_name=source_name, status_code=resp.status_code, url=safe_url,
        )
    return body


def raise_for_status(resp: requests.Response, source_name: str, url: str) -> None:
    """Raise the matching :class:`UpstreamError` for a non-2xx response."""
    status = resp.status_code
    if 200 <= status < 300:
        return

    detail = (resp.text or "")[:200]
    logger.error(f"{source_name}: HTTP {status} from {url}: {detail}")

    if status in (401, 403):
        raise InvalidCredentials(
            f"{source_name} rejected the API key (HTTP {status})",
            source_name=source_name, status_code=status, url=url,
            details={"body": detail},
        )
    if status == 429:
        raise RateLimited(
            f"{source_name} rate limit exceeded",
            source_name=source_name, url=url,
            retry_after_seconds=_retry_after(resp),
            details={"body": detail},
        )
    raise UpstreamUnavailable(
        f"{source_name} request failed: HTTP {status} {resp.reason or ''}".strip(),
        source_name=source_name, status_code=status, url=url,
        details={"body": detail},
    )


def _retry_after(resp: requests.Response) -> Optional[int]:
    raw = resp.headers.get("Retry-After") if resp.headers else None
    try:
        return int(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None
