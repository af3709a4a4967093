from __future__ import annotations

"""
Forest Source Resolution.

Turns a user supplied source (bundled sample, JSON file or http(s) URL)
into a Forest snapshot. Transport failures are reported as an error
message; malformed listings raise from the builder.
"""

import logging
from typing import Optional, Tuple

from dmspicker.core.forest.builder import build_forest
from dmspicker.core.forest.model import Forest
from dmspicker.domain.samples import sample_records
from dmspicker.infra.fs import is_url, read_json_file
from dmspicker.infra.network import DEFAULT_TIMEOUT, fetch_forest_listing

logger = logging.getLogger(__name__)

_WRAPPER_KEYS = ("folders", "items")


def load_forest(
        source: Optional[str] = None,
        *,
        sample: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
) -> Tuple[Optional[Forest], Optional[str]]:
    """
    Load a forest from a sample name, a file path or a URL.

    Args:
        source: JSON file path or http(s) URL.
        sample: Bundled sample system type; takes precedence over source.
        timeout: Network timeout in seconds for URL sources.

    Returns:
        Tuple[Optional[Forest], Optional[str]]: (Forest, Error message if the
        listing could not be obtained).

    Raises:
        TypeError: If the listing has the wrong shape.
        ValueError: If a record lacks an id or the sample is unknown.
    """
    if sample:
        logger.debug(f"Loading bundled sample forest '{sample}'")
        return build_forest(sample_records(sample)), None

    if not source:
        return None, "No forest source given."

    if is_url(source):
        records = fetch_forest_listing(source, timeout=timeout)
        if records is None:
            return None, f"Listing request failed: {source}"
        return build_forest(records), None

    data, error = read_json_file(source)
    if error:
        return None, error
    return build_forest(_unwrap(data)), None


def _unwrap(data):
    if isinstance(data, dict):
        for key in _WRAPPER_KEYS:
            if isinstance(data.get(key), list):
                return data[key]
    return data
