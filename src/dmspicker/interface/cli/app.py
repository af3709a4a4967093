from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, persistent storage and CLI overrides), forest loading, the
picker session (seed, toggles, search) and result rendering. Acts as the
headless front end of the location picker.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from dmspicker.core.analysis.tree_renderer import render_forest
from dmspicker.core.forest.builder import forest_to_records
from dmspicker.core.scope.selective_sync import create_selective_sync_manager, scope_from_selection
from dmspicker.core.services.forest_source import load_forest
from dmspicker.core.services.session import PickerSession, describe_summary
from dmspicker.core.services.validator import validate_config
from dmspicker.domain.config import get_default_config, load_config
from dmspicker.domain.samples import SYSTEM_LABELS
from dmspicker.infra.logging import LoggingConfig, configure_logging, get_default_log_path, get_logger
from dmspicker.interface.cli import args as cli_args
from dmspicker.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_FOREST_UNAVAILABLE = 2
EXIT_EMPTY_CONFIRM = 3
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 forest unavailable,
             3 empty confirmation, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr)
    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "WARNING", console=True))
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve and validate configuration
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    _apply_runtime_settings(clean_conf)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Forest acquisition
    if not args.forest_source and not args.sample:
        return _fail(i18n.t("cli.errors.no_source"), EXIT_FOREST_UNAVAILABLE)

    source = args.sample or args.forest_source
    try:
        forest, error = load_forest(
            args.forest_source,
            sample=args.sample,
            timeout=clean_conf["listing_timeout"],
        )
    except (TypeError, ValueError) as e:
        return _fail(i18n.t("cli.errors.invalid_forest", error=str(e)), EXIT_FOREST_UNAVAILABLE)
    if forest is None:
        logger.error(error)
        return _fail(i18n.t("cli.errors.forest_unavailable", source=source), EXIT_FOREST_UNAVAILABLE)

    # 5. Session execution
    try:
        session = PickerSession(
            forest,
            seed=cli_args.seed_ids(args),
            attribute=clean_conf["aggregate_attribute"],
        )
        for node_id in args.toggles:
            if forest.find_by_id(node_id) is None:
                logger.warning(i18n.t("cli.status.unknown_toggle", id=node_id))
            session.toggle(node_id)
        session.set_query(args.query)

        summary = session.summary()
        if args.confirm and not summary.has_selection:
            return _fail(i18n.t("cli.errors.empty_confirm"), EXIT_EMPTY_CONFIRM)

        scope = None
        if args.scope:
            scope = scope_from_selection(forest, session.store.ordered_ids(), clean_conf["system_type"])

        # 6. Output rendering phase
        if args.json_output:
            payload = _build_payload(session, clean_conf, confirmed=args.confirm)
            if scope is not None:
                payload["scope"] = asdict(scope)
            print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))
        else:
            _print_human_summary(session, clean_conf, confirmed=args.confirm)
            if scope is not None:
                _print_scope(create_selective_sync_manager(scope).summary())

    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of CLI overrides into the base configuration.

    Only known keys are merged; None values never replace a setting.
    """
    out = dict(base)
    keys_to_merge = [
        "system_type", "render_tree", "show_document_counts", "locale", "log_level",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _apply_runtime_settings(conf: Dict[str, Any]) -> None:
    """Switch locale and log sinks to the validated configuration."""
    if conf["locale"] != i18n.locale:
        i18n.load_locale(conf["locale"])

    if conf["log_level"] != "WARNING" or conf["log_to_file"]:
        log_file = get_default_log_path() if conf["log_to_file"] else None
        configure_logging(
            LoggingConfig(level=conf["log_level"], console=True, log_file=log_file),
            force=True,
        )

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _build_payload(session: PickerSession, conf: Dict[str, Any], *, confirmed: bool) -> Dict[str, Any]:
    summary = session.summary()
    return {
        "query": session.query,
        "selected_ids": summary.selected_ids,
        "selected_count": summary.selected_count,
        "total_documents": summary.total_documents,
        "attribute": summary.attribute,
        "indeterminate_ids": session.indeterminate_ids(),
        "visible_forest": forest_to_records(session.visible_forest()),
        "empty_message": session.empty_message(),
        "system_type": conf["system_type"],
        "confirmed": confirmed,
    }


def _print_human_summary(session: PickerSession, conf: Dict[str, Any], *, confirmed: bool) -> None:
    """
    Print the tree (when enabled) followed by the selection summary.

    Args:
        session: The finished picker session.
        conf: Validated configuration.
        confirmed: Whether the selection is being handed off.
    """
    if conf["render_tree"]:
        system = conf["system_type"]
        print(i18n.t(f"picker.title.{system}", default=f"Select {SYSTEM_LABELS[system]}"))
        lines: List[str] = []
        render_forest(
            session.visible_forest(),
            lines,
            session.store,
            show_counts=conf["show_document_counts"],
            full_forest=session.forest,
        )
        if lines:
            print("\n".join(lines))
        else:
            print(session.empty_message())
        print()

    text = describe_summary(session.summary())
    print(text or i18n.t("summary.none"))

    if confirmed:
        ids = session.confirm()
        print(i18n.t("cli.status.confirmed", ids=", ".join(ids)))


def _print_scope(report: Dict[str, Any]) -> None:
    if not report["has_filters"]:
        return
    print()
    for item in report["filters"]:
        print(f"  - {item}")


def _fail(msg: str, code: int) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return code

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
