# =============================================================================
# GLOS-SITE CMS Tooling Audit Trail
# =============================================================================
"""
Run bookkeeping shared by the administrative CMS scripts.

Every run, dry or live, writes reports/cms/<run_id>.results.json and a
markdown summary next to it.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from core.cms.client import PROJECT_ROOT

REPORTS_DIR = PROJECT_ROOT / "reports" / "cms"


class AbortException(Exception):
    """Raised when a run must abort."""
    pass


def new_run(tool: str, dry_run: bool) -> dict:
    """Empty results document for a tool run."""
    now = datetime.now(timezone.utc)
    return {
        "run_id": f"{tool}-{now.strftime('%Y%m%dT%H%M%SZ')}",
        "tool": tool,
        "execution_mode": "DRY_RUN" if dry_run else "APPLY",
        "start_utc": now.isoformat(),
        "end_utc": None,
        "aborted": False,
        "abort_reason": None,
        "operation_results": [],
        "summary": {"total_operations": 0, "by_status": {}},
    }


def record_operation(results: dict, doc_id: str, status: str, before: Optional[dict] = None,
                     after: Optional[dict] = None, error: Optional[str] = None) -> dict:
    entry = {
        "doc_id": doc_id,
        "status": status,
        "dry_run": results["execution_mode"] == "DRY_RUN",
        "before": before,
        "after": after,
        "error": error,
        "executed_at": datetime.now(timezone.utc).isoformat(),
    }
    results["operation_results"].append(entry)
    return entry


def finalize(results: dict) -> dict:
    """Stamp end time and status counts."""
    results["end_utc"] = datetime.now(timezone.utc).isoformat()

    by_status = {}
    for r in results["operation_results"]:
        status = r.get("status", "UNKNOWN")
        by_status[status] = by_status.get(status, 0) + 1

    results["summary"]["total_operations"] = len(results["operation_results"])
    results["summary"]["by_status"] = by_status
    return results


class ResultsWriter:
    """Writes run results to files."""

    def __init__(self, output_dir: Path = REPORTS_DIR):
        self.output_dir = output_dir

    def write_results(self, results: dict) -> tuple[Path, Path]:
        """Write results to JSON and markdown files."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        run_id = results.get("run_id", "unknown")

        json_path = self.output_dir / f"{run_id}.results.json"
        with open(json_path, "w") as f:
            json.dump(results, f, indent=2, ensure_ascii=False)

        md_path = self.output_dir / f"{run_id}.results.md"
        with open(md_path, "w") as f:
            f.write(self._generate_markdown(results))

        return json_path, md_path

    def _generate_markdown(self, results: dict) -> str:
        lines = []
        lines.append(f"# CMS Run: {results.get('run_id')}")
        lines.append("")
        lines.append("| Field | Value |")
        lines.append("|-------|-------|")
        lines.append(f"| Tool | `{results.get('tool')}` |")
        lines.append(f"| Execution Mode | `{results.get('execution_mode')}` |")
        lines.append(f"| Started | `{results.get('start_utc')}` |")
        lines.append(f"| Finished | `{results.get('end_utc')}` |")
        lines.append("")

        lines.append("## Operation Counts")
        lines.append("")
        lines.append("| Status | Count |")
        lines.append("|--------|-------|")
        for status, count in results.get("summary", {}).get("by_status", {}).items():
            lines.append(f"| {status} | {count} |")
        lines.append("")

        lines.append("## Operations")
        lines.append("")
        for op in results.get("operation_results", []):
            lines.append(f"### {op.get('doc_id')}")
            lines.append("")
            lines.append(f"- **Status:** {op.get('status')}")
            lines.append(f"- **Dry Run:** {op.get('dry_run')}")
            if op.get("after"):
                lines.append(f"- **Fields:** {', '.join(sorted(op['after']))}")
            if op.get("error"):
                lines.append(f"- **Error:** {op['error']}")
            lines.append("")

        if results.get("aborted"):
            lines.append("## ABORTED")
            lines.append("")
            lines.append(f"**Reason:** {results.get('abort_reason', 'Unknown')}")
            lines.append("")

        return "\n".join(lines)
