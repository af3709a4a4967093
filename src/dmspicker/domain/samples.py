from __future__ import annotations

"""
Sample Location Listings.

Static connector listings for the two supported DMS systems, shaped like
the payload a live connector returns. Used by demos, the CLI '--sample'
option and tests.
"""

import copy
from typing import Any, Dict, List

SYSTEM_DOCUWARE = "docuware"
SYSTEM_MFILES = "mfiles"

SYSTEM_TYPES = (SYSTEM_DOCUWARE, SYSTEM_MFILES)

# Top-level container kind exposed by each system
ROOT_KIND: Dict[str, str] = {
    SYSTEM_DOCUWARE: "cabinet",
    SYSTEM_MFILES: "vault",
}

# Picker heading per system
SYSTEM_LABELS: Dict[str, str] = {
    SYSTEM_DOCUWARE: "Cabinets and Folders",
    SYSTEM_MFILES: "Vaults and Folders",
}

# -----------------------------------------------------------------------------
# STATIC LISTINGS
# -----------------------------------------------------------------------------

_DOCUWARE_LISTING: List[Dict[str, Any]] = [
    {
        "id": "cab1",
        "name": "Invoices",
        "type": "cabinet",
        "path": "/Invoices",
        "documentCount": 1250,
        "children": [
            {
                "id": "cab1-f1",
                "name": "2024",
                "type": "folder",
                "path": "/Invoices/2024",
                "parentId": "cab1",
                "documentCount": 450,
                "children": [
                    {
                        "id": "cab1-f1-1",
                        "name": "Q1",
                        "type": "folder",
                        "path": "/Invoices/2024/Q1",
                        "parentId": "cab1-f1",
                        "documentCount": 120,
                    },
                    {
                        "id": "cab1-f1-2",
                        "name": "Q2",
                        "type": "folder",
                        "path": "/Invoices/2024/Q2",
                        "parentId": "cab1-f1",
                        "documentCount": 150,
                    },
                ],
            },
            {
                "id": "cab1-f2",
                "name": "2023",
                "type": "folder",
                "path": "/Invoices/2023",
                "parentId": "cab1",
                "documentCount": 800,
            },
        ],
    },
    {
        "id": "cab2",
        "name": "Contracts",
        "type": "cabinet",
        "path": "/Contracts",
        "documentCount": 450,
        "children": [
            {
                "id": "cab2-f1",
                "name": "Customer Contracts",
                "type": "folder",
                "path": "/Contracts/Customer Contracts",
                "parentId": "cab2",
                "documentCount": 300,
            },
            {
                "id": "cab2-f2",
                "name": "Vendor Contracts",
                "type": "folder",
                "path": "/Contracts/Vendor Contracts",
                "parentId": "cab2",
                "documentCount": 150,
            },
        ],
    },
]

_MFILES_LISTING: List[Dict[str, Any]] = [
    {
        "id": "vault1",
        "name": "Document Vault",
        "type": "vault",
        "path": "/Document Vault",
        "documentCount": 5420,
        "children": [
            {
                "id": "vault1-f1",
                "name": "Projects",
                "type": "folder",
                "path": "/Document Vault/Projects",
                "parentId": "vault1",
                "documentCount": 2100,
                "children": [
                    {
                        "id": "vault1-f1-1",
                        "name": "Project Alpha",
                        "type": "folder",
                        "path": "/Document Vault/Projects/Project Alpha",
                        "parentId": "vault1-f1",
                        "documentCount": 850,
                    },
                    {
                        "id": "vault1-f1-2",
                        "name": "Project Beta",
                        "type": "folder",
                        "path": "/Document Vault/Projects/Project Beta",
                        "parentId": "vault1-f1",
                        "documentCount": 650,
                    },
                ],
            },
            {
                "id": "vault1-f2",
                "name": "Correspondence",
                "type": "folder",
                "path": "/Document Vault/Correspondence",
                "parentId": "vault1",
                "documentCount": 1200,
            },
        ],
    },
    {
        "id": "vault2",
        "name": "Engineering",
        "type": "vault",
        "path": "/Engineering",
        "documentCount": 2100,
        "children": [
            {
                "id": "vault2-f1",
                "name": "Drawings",
                "type": "folder",
                "path": "/Engineering/Drawings",
                "parentId": "vault2",
                "documentCount": 1500,
            },
            {
                "id": "vault2-f2",
                "name": "Specifications",
                "type": "folder",
                "path": "/Engineering/Specifications",
                "parentId": "vault2",
                "documentCount": 600,
            },
        ],
    },
]

_LISTINGS: Dict[str, List[Dict[str, Any]]] = {
    SYSTEM_DOCUWARE: _DOCUWARE_LISTING,
    SYSTEM_MFILES: _MFILES_LISTING,
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def sample_records(system_type: str) -> List[Dict[str, Any]]:
    """
    Return a fresh copy of the sample listing for a DMS system.

    Raises:
        ValueError: If the system type is not supported.
    """
    key = (system_type or "").strip().lower()
    if key not in _LISTINGS:
        raise ValueError(f"Unknown DMS system type '{system_type}'. Expected one of {list(SYSTEM_TYPES)}.")
    return copy.deepcopy(_LISTINGS[key])


def sample_forest(system_type: str):
    """Build the sample listing of a DMS system into a Forest."""
    # Lazy: core imports domain
    from dmspicker.core.forest.builder import build_forest

    return build_forest(sample_records(system_type))
