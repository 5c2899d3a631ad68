from __future__ import annotations

"""
Validation Reporting.

Turns the flat issue list produced by the validator into counts,
a human-readable text report and a JSON-friendly dictionary.
"""

from typing import Any, Dict, List, Sequence

from drivemap.domain.validation_models import IssueType, ValidationIssue

_RULE = "=" * 60


def summarize(issues: Sequence[ValidationIssue]) -> Dict[str, int]:
    errors = sum(1 for issue in issues if issue.type is IssueType.ERROR)
    warnings = sum(1 for issue in issues if issue.type is IssueType.WARNING)
    return {"errors": errors, "warnings": warnings, "total": len(issues)}


def has_errors(issues: Sequence[ValidationIssue]) -> bool:
    return any(issue.is_error for issue in issues)


def generate_validation_report(issues: Sequence[ValidationIssue]) -> str:
    """
    Build a plain-text report of validation issues.

    Errors are listed before warnings; each group keeps the pre-order of the
    validator and is headed by its count.

    Args:
        issues: Issues as returned by validate().

    Returns:
        str: Multi-line report.
    """
    if not issues:
        return "Validation passed: no issues found."

    counts = summarize(issues)
    lines: List[str] = [
        _RULE,
        "HIERARCHY VALIDATION REPORT",
        _RULE,
        f"Errors: {counts['errors']} | Warnings: {counts['warnings']}",
    ]

    for issue_type, title in ((IssueType.ERROR, "ERRORS"), (IssueType.WARNING, "WARNINGS")):
        group = [issue for issue in issues if issue.type is issue_type]
        if not group:
            continue
        lines.append("")
        lines.append(f"{title} ({len(group)}):")
        for idx, issue in enumerate(group, start=1):
            lines.append(f"  {idx}. [{issue.code}] {issue.message}")
            if issue.node_id is not None:
                lines.append(f"     Node: {issue.node_name or '<unnamed>'} (id={issue.node_id})")

    lines.append(_RULE)
    return "\n".join(lines)


def report_to_dict(issues: Sequence[ValidationIssue]) -> Dict[str, Any]:
    """Serialize validation results for JSON output."""
    return {
        "valid": not has_errors(issues),
        "summary": summarize(issues),
        "issues": [_issue_to_dict(issue) for issue in issues],
    }


def _issue_to_dict(issue: ValidationIssue) -> Dict[str, Any]:
    return {
        "type": issue.type.value,
        "code": issue.code,
        "message": issue.message,
        "node_id": issue.node_id,
        "node_name": issue.node_name,
    }
