from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the HTTP clients used to obtain connector data.
"""

from dmspicker.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT
from dmspicker.infra.network.listing_client import fetch_forest_listing

__all__ = [
    "fetch_forest_listing",
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
]
