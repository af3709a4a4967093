from __future__ import annotations

"""
Selective Sync Scope Manager.

Decides whether DMS containers (DocuWare cabinets, M-Files vaults),
document types, object types, classes and single documents fall inside
the sync scope of a connector. Rules are evaluated in a fixed order:
include list, exclude list, then name patterns; the first failing rule
decides and is reported in the returned SyncScope.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dmspicker.core.forest.model import Forest
from dmspicker.domain.samples import SYSTEM_DOCUWARE, SYSTEM_MFILES
from dmspicker.domain.sync_scope_models import (
    PATTERN_EXCLUDE,
    ContainerRules,
    CustomFilter,
    DateRange,
    ListRules,
    SelectiveSyncConfig,
    SelectiveSyncPattern,
    SizeLimit,
    SyncScope,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SCOPE MANAGER
# -----------------------------------------------------------------------------

class SelectiveSyncManager:
    """
    Evaluates scope checks against one SelectiveSyncConfig.

    Args:
        config: The parsed selective sync configuration.
    """

    def __init__(self, config: SelectiveSyncConfig):
        self._config = config

    @property
    def config(self) -> SelectiveSyncConfig:
        return self._config

    # --- Containers ---

    def should_sync_cabinet(self, cabinet_id: str, cabinet_name: Optional[str] = None) -> SyncScope:
        """Check a DocuWare cabinet against the cabinet rules."""
        return self._check_container("Cabinet", self._config.cabinets, cabinet_id, cabinet_name)

    def should_sync_vault(self, vault_guid: str, vault_name: Optional[str] = None) -> SyncScope:
        """Check an M-Files vault against the vault rules."""
        return self._check_container("Vault", self._config.vaults, vault_guid, vault_name)

    # --- Typed lists ---

    def should_sync_document_type(self, document_type: str) -> SyncScope:
        return self._check_list("Document type", "document_type", self._config.document_types, document_type)

    def should_sync_object_type(self, object_type_id: int) -> SyncScope:
        return self._check_list("Object type", "object_type", self._config.object_types, object_type_id)

    def should_sync_class(self, class_id: int) -> SyncScope:
        return self._check_list("Class", "class", self._config.classes, class_id)

    # --- Documents ---

    def should_sync_document(
            self,
            date: Optional[datetime] = None,
            file_size: Optional[int] = None,
            file_extension: Optional[str] = None,
            properties: Optional[Mapping[str, Any]] = None,
    ) -> SyncScope:
        """
        Check a single document against the common filters.

        Order: date range, file size, file extension, custom filters.
        Missing document attributes skip the matching filter.
        """
        cfg = self._config
        applied: List[str] = []

        if cfg.date_range and date is not None:
            if cfg.date_range.start and _as_utc(date) < _as_utc(cfg.date_range.start):
                applied.append("date_range_from")
                return SyncScope(False, "Document date is before date range", applied)
            if cfg.date_range.end and _as_utc(date) > _as_utc(cfg.date_range.end):
                applied.append("date_range_to")
                return SyncScope(False, "Document date is after date range", applied)

        if cfg.file_size_limit and file_size is not None:
            if cfg.file_size_limit.min and file_size < cfg.file_size_limit.min:
                applied.append("file_size_min")
                return SyncScope(False, "File size below minimum", applied)
            if cfg.file_size_limit.max and file_size > cfg.file_size_limit.max:
                applied.append("file_size_max")
                return SyncScope(False, "File size above maximum", applied)

        if cfg.file_extensions and file_extension:
            extension = file_extension.lower()
            include = [str(e).lower() for e in cfg.file_extensions.include]
            exclude = [str(e).lower() for e in cfg.file_extensions.exclude]

            if include:
                applied.append("extension_include")
                if extension not in include:
                    return SyncScope(False, "File extension not in include list", applied)
            if extension in exclude:
                applied.append("extension_exclude")
                return SyncScope(False, "File extension in exclude list", applied)

        if cfg.custom_filters and properties is not None:
            for flt in cfg.custom_filters:
                if not evaluate_filter(properties.get(flt.field), flt.operator, flt.value):
                    applied.append(f"custom_filter_{flt.field}")
                    return SyncScope(
                        False,
                        f"Custom filter failed: {flt.field} {flt.operator} {flt.value}",
                        applied,
                    )

        return SyncScope(True, "", applied)

    # --- Reporting ---

    def summary(self) -> Dict[str, Any]:
        """Describe the active filters for display."""
        cfg = self._config
        filters: List[str] = []

        if cfg.cabinets and cfg.cabinets.include:
            filters.append(f"{len(cfg.cabinets.include)} cabinets included")
        if cfg.cabinets and cfg.cabinets.exclude:
            filters.append(f"{len(cfg.cabinets.exclude)} cabinets excluded")
        if cfg.vaults and cfg.vaults.include:
            filters.append(f"{len(cfg.vaults.include)} vaults included")
        if cfg.vaults and cfg.vaults.exclude:
            filters.append(f"{len(cfg.vaults.exclude)} vaults excluded")
        if cfg.date_range:
            filters.append("Date range filter")
        if cfg.file_size_limit:
            filters.append("File size filter")
        if cfg.file_extensions and (cfg.file_extensions.include or cfg.file_extensions.exclude):
            filters.append("File extension filter")
        if cfg.custom_filters:
            filters.append(f"{len(cfg.custom_filters)} custom filters")

        return {
            "has_filters": bool(filters),
            "filter_count": len(filters),
            "filters": filters,
        }

    # --- Internals ---

    def _check_container(
            self,
            label: str,
            rules: Optional[ContainerRules],
            container_id: str,
            container_name: Optional[str],
    ) -> SyncScope:
        applied: List[str] = []
        if rules is None:
            return SyncScope(True, "", applied)

        if rules.include:
            applied.append("include_list")
            if container_id not in rules.include:
                return SyncScope(False, f"{label} not in include list", applied)

        if container_id in rules.exclude:
            applied.append("exclude_list")
            return SyncScope(False, f"{label} in exclude list", applied)

        if rules.patterns and container_name:
            for pattern in rules.patterns:
                if not matches_pattern(container_name, pattern):
                    continue
                applied.append(f"pattern_{pattern.type}")
                if pattern.type == PATTERN_EXCLUDE:
                    return SyncScope(
                        False,
                        f"{label} name matches exclude pattern: {pattern.pattern}",
                        applied,
                    )

        return SyncScope(True, "", applied)

    @staticmethod
    def _check_list(label: str, rule_key: str, rules: Optional[ListRules], value: Any) -> SyncScope:
        applied: List[str] = []
        if rules is None:
            return SyncScope(True, "", applied)

        if rules.include:
            applied.append(f"{rule_key}_include")
            if value not in rules.include:
                return SyncScope(False, f"{label} not in include list", applied)

        if value in rules.exclude:
            applied.append(f"{rule_key}_exclude")
            return SyncScope(False, f"{label} in exclude list", applied)

        return SyncScope(True, "", applied)

# -----------------------------------------------------------------------------
# MATCHING PRIMITIVES
# -----------------------------------------------------------------------------

def matches_pattern(value: str, pattern: SelectiveSyncPattern) -> bool:
    """Match a container name against one pattern (case-sensitive)."""
    mt = pattern.match_type
    if mt == "exact":
        return value == pattern.pattern
    if mt == "prefix":
        return value.startswith(pattern.pattern)
    if mt == "suffix":
        return value.endswith(pattern.pattern)
    if mt == "contains":
        return pattern.pattern in value
    if mt == "regex":
        try:
            return re.search(pattern.pattern, value) is not None
        except re.error:
            logger.warning(f"Invalid regex pattern: {pattern.pattern}")
            return False
    return False


def evaluate_filter(value: Any, operator: str, expected: Any) -> bool:
    """Apply one custom filter operator. Unknown operators pass."""
    if operator == "equals":
        return value == expected
    if operator in ("contains", "startsWith", "endsWith"):
        if not isinstance(value, str) or not isinstance(expected, str):
            return False
        if operator == "contains":
            return expected in value
        if operator == "startsWith":
            return value.startswith(expected)
        return value.endswith(expected)
    if operator in ("greaterThan", "lessThan"):
        if not _is_number(value) or not _is_number(expected):
            return False
        return value > expected if operator == "greaterThan" else value < expected
    return True

# -----------------------------------------------------------------------------
# CONFIGURATION PARSING
# -----------------------------------------------------------------------------

def parse_selective_sync_config(raw: Optional[Mapping[str, Any]]) -> SelectiveSyncConfig:
    """
    Parse a data-source configuration mapping into a SelectiveSyncConfig.

    Accepts camelCase (connector payloads) or snake_case keys. Unknown keys
    are ignored.

    Raises:
        TypeError: If the input is not a mapping.
    """
    if raw is None:
        return SelectiveSyncConfig()
    if not isinstance(raw, Mapping):
        raise TypeError(f"Invalid selective sync config: expected a mapping, received {type(raw).__name__}.")

    return SelectiveSyncConfig(
        cabinets=_parse_container(_get(raw, "cabinets")),
        document_types=_parse_list(_get(raw, "documentTypes", "document_types")),
        vaults=_parse_container(_get(raw, "vaults")),
        object_types=_parse_list(_get(raw, "objectTypes", "object_types")),
        classes=_parse_list(_get(raw, "classes")),
        date_range=_parse_date_range(_get(raw, "dateRange", "date_range")),
        file_size_limit=_parse_size(_get(raw, "fileSizeLimit", "file_size_limit")),
        file_extensions=_parse_list(_get(raw, "fileExtensions", "file_extensions")),
        custom_filters=_parse_custom_filters(_get(raw, "customFilters", "custom_filters")),
    )


def scope_from_selection(forest: Forest, selected_ids: Iterable[str], system_type: str) -> SelectiveSyncConfig:
    """
    Derive a sync configuration from a confirmed picker selection.

    Every selected node contributes its top-level container (cabinet or
    vault) to the include list, in selection order and without repeats.

    Raises:
        ValueError: If the system type is not supported.
    """
    containers: List[str] = []
    for node_id in selected_ids:
        node = forest.find_by_id(node_id)
        if node is None:
            continue
        ancestors = forest.ancestor_ids(node)
        root_id = ancestors[-1] if ancestors else node.id
        if root_id not in containers:
            containers.append(root_id)

    rules = ContainerRules(include=containers)
    if system_type == SYSTEM_DOCUWARE:
        return SelectiveSyncConfig(cabinets=rules)
    if system_type == SYSTEM_MFILES:
        return SelectiveSyncConfig(vaults=rules)
    raise ValueError(f"Unknown DMS system type '{system_type}'.")


def create_selective_sync_manager(config: SelectiveSyncConfig) -> SelectiveSyncManager:
    return SelectiveSyncManager(config)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _parse_container(raw: Any) -> Optional[ContainerRules]:
    if not isinstance(raw, Mapping):
        return None
    patterns: List[SelectiveSyncPattern] = []
    for item in _as_list(raw.get("patterns")):
        if not isinstance(item, Mapping) or "pattern" not in item:
            logger.warning(f"Ignoring malformed selective sync pattern: {item!r}")
            continue
        patterns.append(
            SelectiveSyncPattern(
                type=str(item.get("type", "include")),
                pattern=str(item["pattern"]),
                match_type=str(_get(item, "matchType", "match_type") or "contains"),
            )
        )
    return ContainerRules(
        include=[str(x) for x in _as_list(raw.get("include"))],
        exclude=[str(x) for x in _as_list(raw.get("exclude"))],
        patterns=patterns,
    )


def _parse_list(raw: Any) -> Optional[ListRules]:
    if not isinstance(raw, Mapping):
        return None
    return ListRules(include=_as_list(raw.get("include")), exclude=_as_list(raw.get("exclude")))


def _parse_date_range(raw: Any) -> Optional[DateRange]:
    if not isinstance(raw, Mapping):
        return None
    return DateRange(
        start=_parse_datetime(_get(raw, "from", "start")),
        end=_parse_datetime(_get(raw, "to", "end")),
    )


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Ignoring unparseable date in selective sync config: {value!r}")
        return None


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_size(raw: Any) -> Optional[SizeLimit]:
    if not isinstance(raw, Mapping):
        return None
    return SizeLimit(min=raw.get("min"), max=raw.get("max"))


def _parse_custom_filters(raw: Any) -> List[CustomFilter]:
    out: List[CustomFilter] = []
    for item in _as_list(raw):
        if not isinstance(item, Mapping) or "field" not in item:
            logger.warning(f"Ignoring malformed custom filter: {item!r}")
            continue
        out.append(CustomFilter(field=str(item["field"]), operator=str(item.get("operator", "")), value=item.get("value")))
    return out


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
