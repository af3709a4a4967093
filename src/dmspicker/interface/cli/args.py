from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into configuration overrides and session inputs.
"""

import argparse
from typing import Any, Dict, List, Optional

from dmspicker.domain.samples import SYSTEM_TYPES
from dmspicker.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dmspicker CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dmspicker",
        description=i18n.t("app.description"),
    )

    # --- Forest Source ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-f", "--forest",
        dest="forest_source",
        default=None,
        help=i18n.t("cli.args.forest"),
    )
    source.add_argument(
        "--sample",
        dest="sample",
        choices=SYSTEM_TYPES,
        default=None,
        help=i18n.t("cli.args.sample"),
    )

    # --- Selection ---
    p.add_argument(
        "--seed",
        dest="seed",
        default=None,
        help=i18n.t("cli.args.seed"),
    )
    p.add_argument(
        "-t", "--toggle",
        dest="toggles",
        action="append",
        default=[],
        metavar="ID",
        help=i18n.t("cli.args.toggle"),
    )
    p.add_argument(
        "-s", "--search",
        dest="query",
        default=None,
        help=i18n.t("cli.args.search"),
    )

    # --- Output ---
    p.add_argument("--tree", action="store_true", help=i18n.t("cli.args.tree"))
    p.add_argument(
        "--no-counts",
        action="store_true",
        help=i18n.t("cli.args.no_counts", default="Hide document counts in the tree."),
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )
    p.add_argument("--confirm", action="store_true", help=i18n.t("cli.args.confirm"))
    p.add_argument("--scope", action="store_true", help=i18n.t("cli.args.scope"))

    # --- Configuration and Diagnostic Tools ---
    p.add_argument("--use-defaults", action="store_true", help=i18n.t("cli.args.defaults"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))
    p.add_argument("--locale", dest="locale", default=None, help=i18n.t("cli.args.locale"))
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.sample:
        overrides["system_type"] = args.sample
    if args.tree:
        overrides["render_tree"] = True
    if args.no_counts:
        overrides["show_document_counts"] = False
    if args.locale:
        overrides["locale"] = args.locale
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides


def seed_ids(args: argparse.Namespace) -> List[str]:
    """Ids selected before any toggle is applied."""
    return _split_csv(args.seed) or []

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
