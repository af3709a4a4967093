from __future__ import annotations

"""
Selective Sync Domain Models.

Declarative description of which DMS containers, document types and
documents a connector sync should include, plus the decision object
returned for each scope check.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

PATTERN_INCLUDE = "include"
PATTERN_EXCLUDE = "exclude"

MATCH_TYPES = ("exact", "prefix", "suffix", "contains", "regex")

FILTER_OPERATORS = ("equals", "contains", "startsWith", "endsWith", "greaterThan", "lessThan")

# -----------------------------------------------------------------------------
# RULE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectiveSyncPattern:
    """
    Name pattern applied to cabinets or vaults.

    Attributes:
        type: 'include' or 'exclude'.
        pattern: Literal text or regular expression.
        match_type: exact, prefix, suffix, contains or regex.
    """
    type: str
    pattern: str
    match_type: str = "contains"


@dataclass(frozen=True)
class ContainerRules:
    """Include/exclude id lists and name patterns for cabinets or vaults."""
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    patterns: List[SelectiveSyncPattern] = field(default_factory=list)


@dataclass(frozen=True)
class ListRules:
    """Plain include/exclude lists (document types, object types, classes)."""
    include: List[Any] = field(default_factory=list)
    exclude: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class DateRange:
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class SizeLimit:
    min: Optional[int] = None
    max: Optional[int] = None


@dataclass(frozen=True)
class CustomFilter:
    field: str
    operator: str
    value: Any = None


@dataclass(frozen=True)
class SelectiveSyncConfig:
    """
    Complete selective sync configuration of a DMS data source.

    Attributes:
        cabinets: DocuWare cabinet rules.
        document_types: DocuWare document type lists.
        vaults: M-Files vault rules.
        object_types: M-Files object type ids.
        classes: M-Files class ids.
        date_range: Accepted document date window.
        file_size_limit: Accepted file size window in bytes.
        file_extensions: Extension include/exclude lists (case-insensitive).
        custom_filters: Property comparisons every document must pass.
    """
    cabinets: Optional[ContainerRules] = None
    document_types: Optional[ListRules] = None
    vaults: Optional[ContainerRules] = None
    object_types: Optional[ListRules] = None
    classes: Optional[ListRules] = None
    date_range: Optional[DateRange] = None
    file_size_limit: Optional[SizeLimit] = None
    file_extensions: Optional[ListRules] = None
    custom_filters: List[CustomFilter] = field(default_factory=list)

# -----------------------------------------------------------------------------
# DECISION MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SyncScope:
    """
    Result of a scope check.

    Attributes:
        is_included: Whether the item belongs to the sync.
        reason: Why the item was excluded (empty when included).
        applied_rules: Identifiers of the rules evaluated on the way.
    """
    is_included: bool
    reason: str = ""
    applied_rules: List[str] = field(default_factory=list)
