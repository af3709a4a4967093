from __future__ import annotations

"""
Connector Listing Client.

Fetches a location listing (the nested cabinet/vault/folder records) from
a connector endpoint. Failures are logged and reported as None; the caller
decides how to surface them.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from dmspicker.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def fetch_forest_listing(
        url: str,
        timeout: int = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
) -> Optional[List[Dict[str, Any]]]:
    """
    Download a location listing.

    The payload may be the record array itself or an object wrapping it
    under 'folders' or 'items'.

    Args:
        url: Listing endpoint.
        timeout: Request timeout in seconds.
        headers: Extra request headers (e.g. authorization issued upstream).

    Returns:
        Optional[List[Dict[str, Any]]]: Root records, or None on failure.
    """
    request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    if headers:
        request_headers.update(headers)
    logger.debug(f"Fetching location listing from: {url}")

    try:
        response = requests.get(url, headers=request_headers, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout:
        logger.warning(f"Network: Listing request timed out after {timeout}s.")
        return None
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Communication error while fetching listing: {e}")
        return None
    except ValueError as e:
        logger.error(f"Network: Listing response is not valid JSON: {e}")
        return None

    if isinstance(data, dict):
        data = data.get("folders", data.get("items"))

    if not isinstance(data, list):
        logger.warning("Network: Received malformed listing (expected a list of records).")
        return None

    logger.info(f"Network: Listing received ({len(data)} root record(s)).")
    return data
