from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by validate_config().
"""

import argparse
from typing import Any, Dict, List, Optional

from drivemap import __version__

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the drivemap CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="drivemap",
        description="Build, validate and render the content hierarchy of a Drive snapshot.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Sources ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-i", "--input",
        dest="snapshot_path",
        default=None,
        help="JSON snapshot file (list of items or {\"items\": [...]}).",
    )
    source.add_argument(
        "--url",
        dest="snapshot_url",
        default=None,
        help="URL returning a JSON snapshot.",
    )
    p.add_argument(
        "--codes-file",
        dest="codes_file",
        default=None,
        help="JSON file with code tables ({\"lang\": {...}, \"file\": {...}}).",
    )
    p.add_argument(
        "--codes-url",
        dest="codes_url",
        default=None,
        help="Codes API endpoint queried with ?type=lang|file|client|campaign.",
    )
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file merged over the defaults.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore configuration files and start from built-in defaults.",
    )

    # --- Build ---
    p.add_argument("--root", dest="root_id", default=None, help="Id of the root item.")
    p.add_argument(
        "--include-hidden",
        action="store_true",
        help="Keep items whose name ends with _hidden.",
    )
    p.add_argument(
        "--delimiters",
        default=None,
        help="Characters separating codes from labels (default: ' -_').",
    )
    p.add_argument(
        "--prefix-lengths",
        dest="prefix_code_lengths",
        default=None,
        help="Comma-separated lengths of leading codes, in priority order (e.g. 4,2).",
    )
    p.add_argument(
        "--suffix-lengths",
        dest="suffix_code_lengths",
        default=None,
        help="Comma-separated lengths of trailing codes, in priority order (e.g. 2,4).",
    )
    p.add_argument(
        "--links",
        action="store_true",
        help="Attach Drive preview/download/embed links to file nodes.",
    )

    # --- Validation ---
    p.add_argument("--validate", action="store_true", help="Run the hierarchy validator.")
    p.add_argument(
        "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help="Depth above which nodes are reported by the validator.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Reject invalid configuration and fail when validation reports errors.",
    )

    # --- Output ---
    p.add_argument("--tags", dest="show_tags", action="store_true", help="Show content-type tags.")
    p.add_argument("--json", dest="json_output", action="store_true", help="Emit JSON.")
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    verbosity = p.add_mutually_exclusive_group()
    verbosity.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options the user did not pass are left out so file-based values survive.
    """
    overrides: Dict[str, Any] = {}

    for key in ("snapshot_path", "snapshot_url", "codes_file", "codes_url", "root_id", "delimiters", "max_depth"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value

    if args.include_hidden:
        overrides["include_hidden"] = True

    for key in ("prefix_code_lengths", "suffix_code_lengths"):
        lengths = _split_csv_ints(getattr(args, key))
        if lengths is not None:
            overrides[key] = lengths

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv_ints(value: Optional[str]) -> Optional[List[Any]]:
    """Split "4,2" into [4, 2]; non-numeric parts are kept for the validator to reject."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",") if x.strip()]
    return [int(x) if x.isdigit() else x for x in parts]
