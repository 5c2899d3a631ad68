from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, JSON file, command-line overrides), snapshot and code-table
loading, hierarchy build, optional validation and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from drivemap.core.builder import build_hierarchy
from drivemap.core.config_validator import options_from_config, validate_config
from drivemap.core.registry import DEFAULT_REGISTRY, CodeRegistry
from drivemap.core.renderer import node_to_dict, render_to_text
from drivemap.core.report import generate_validation_report, has_errors, report_to_dict
from drivemap.core.validator import validate
from drivemap.domain.config import get_default_config, load_config
from drivemap.domain.errors import HierarchyBuildError
from drivemap.domain.hierarchy_models import BuildResult
from drivemap.domain.item_models import RawItem
from drivemap.domain.validation_models import ValidationIssue
from drivemap.infra.fs import load_code_tables, load_snapshot, raw_items_from_records
from drivemap.infra.links import drive_link_transform
from drivemap.infra.logging import LoggingConfig, configure_logging, get_logger, level_from_verbosity
from drivemap.infra.network import fetch_code_tables, fetch_snapshot
from drivemap.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments (sys.argv[1:] if omitted).

    Returns:
        int: 0 on success, 1 on build failure (or validation errors with
        --strict), 2 for unusable input, 130 when interrupted.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig(level=level_from_verbosity(debug=args.debug, quiet=args.quiet)))
    logger.debug("CLI execution initiated. Resolving configuration...")

    # 1. Configuration
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_path or "")
    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args))

    try:
        conf, _warnings = validate_config(raw_conf, strict=args.strict)
    except (TypeError, ValueError) as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    try:
        # 2. Inputs
        registry = _load_registry(conf)
        items = _load_items(conf)
        if items is None:
            return EXIT_BAD_INPUT

        # 3. Build and validate
        options = options_from_config(conf, drive_link_transform if args.links else None)
        try:
            result = build_hierarchy(items, options=options, registry=registry)
        except HierarchyBuildError as e:
            logger.error(f"Hierarchy build failed: {e}")
            print(f"ERROR: {e}", file=sys.stderr)
            return EXIT_FAILURE

        issues = validate(result.root, max_depth=conf["max_depth"]) if args.validate else []

    except KeyboardInterrupt:
        print("Operation interrupted by user.", file=sys.stderr)
        return EXIT_INTERRUPTED

    # 4. Rendering
    if args.json_output:
        print(json.dumps(_result_to_dict(result, issues, args.validate), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, issues, args.validate, args.show_tags)

    if args.strict and has_errors(issues):
        return EXIT_FAILURE
    return EXIT_OK

# -----------------------------------------------------------------------------
# INPUT RESOLUTION
# -----------------------------------------------------------------------------

def _load_registry(conf: Dict[str, Any]) -> CodeRegistry:
    if conf["codes_file"]:
        return load_code_tables(conf["codes_file"])
    if conf["codes_url"]:
        return fetch_code_tables(conf["codes_url"])
    return DEFAULT_REGISTRY


def _load_items(conf: Dict[str, Any]) -> Optional[List[RawItem]]:
    """Load the snapshot from a file or URL, reporting failures on stderr."""
    if conf["snapshot_path"]:
        items = load_snapshot(conf["snapshot_path"])
        if items is None:
            print(f"ERROR: Cannot read snapshot '{conf['snapshot_path']}'.", file=sys.stderr)
        return items

    if conf["snapshot_url"]:
        records = fetch_snapshot(conf["snapshot_url"])
        if records is None:
            print(f"ERROR: Cannot download snapshot from '{conf['snapshot_url']}'.", file=sys.stderr)
            return None
        return raw_items_from_records(records)

    print("ERROR: No snapshot given. Use -i FILE or --url URL.", file=sys.stderr)
    return None

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _result_to_dict(result: BuildResult, issues: List[ValidationIssue], validated: bool) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "stats": asdict(result.stats),
        "root": node_to_dict(result.root),
        "orphans": [
            {"id": o.item.id, "name": o.item.name, "parent_id": o.item.parent_id, "reason": o.reason}
            for o in result.orphans
        ],
        "hidden": list(result.hidden),
        "duplicates": [{"id": d.id, "name": d.name} for d in result.duplicates],
    }
    if validated:
        data["validation"] = report_to_dict(issues)
    return data


def _print_human_summary(
        result: BuildResult,
        issues: List[ValidationIssue],
        validated: bool,
        show_tags: bool,
) -> None:
    print(render_to_text(result.root, show_tags=show_tags))
    print("")

    stats = result.stats
    print(f"Nodes: {stats.total_items} ({stats.total_folders} folders, {stats.total_files} files)")
    print(f"Max depth: {stats.max_depth}")

    if result.orphans:
        print(f"Orphans: {len(result.orphans)}")
        for orphan in result.orphans:
            print(f"  - {orphan.item.name} (id={orphan.item.id}): {orphan.reason}")
    if result.hidden:
        print(f"Hidden items skipped: {len(result.hidden)}")
    if result.duplicates:
        print(f"Duplicate ids ignored: {len(result.duplicates)}")

    if validated:
        print("")
        print(generate_validation_report(issues))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
