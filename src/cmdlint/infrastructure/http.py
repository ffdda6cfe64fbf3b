"""HTTP status probe used by the help-URI rule."""

from __future__ import annotations

import logging

import requests

from cmdlint.errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "cmdlint-help-check"


def fetch_url_status(uri: str, timeout: float) -> int:
    """Return the final HTTP status of *uri*, following redirects.

    Tries HEAD first and falls back to GET when the server rejects HEAD.

    Raises:
        TransportError: On connection failure, timeout, or an invalid URL.
    """
    headers = {"User-Agent": USER_AGENT}
    try:
        response = requests.head(uri, headers=headers, timeout=timeout, allow_redirects=True)
        if response.status_code in (405, 501):
            response = requests.get(
                uri, headers=headers, timeout=timeout, allow_redirects=True, stream=True
            )
            response.close()
    except requests.RequestException as exc:
        logger.debug("Help URI probe failed for %s: %s", uri, exc)
        raise TransportError(f"{uri}: {exc}") from exc
    return response.status_code
