"""Print a student's balance and audit log for one group from a JSON snapshot.

Examples:
    python scripts/audit_balance.py examples/snapshot.json --student s1 --group g1
    python scripts/audit_balance.py examples/snapshot.json --student s1 --group g1 --today 2024-02-01 --export audit.xlsx
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.lesson_balance.lesson_balance.common.datetime_utils import parse_iso_date
from src.lesson_balance.lesson_balance.container import build_container
from src.lesson_balance.lesson_balance.core.exceptions import DomainError
from src.lesson_balance.lesson_balance.main import load_settings
from src.lesson_balance.lesson_balance.snapshot.store import load_snapshot


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile a student's lesson balance for one group",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("snapshot", type=Path, help="JSON snapshot with lessons, attendance and subscriptions")
    parser.add_argument("--student", required=True, help="Student id")
    parser.add_argument("--group", required=True, help="Group id")
    parser.add_argument("--today", help="Reference date YYYY-MM-DD (default: today in the configured timezone)")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--export", type=Path, help="Write the audit report to an .xlsx file (relative paths land in EXPORT_DIR)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = load_settings()

    try:
        today = parse_iso_date(args.today) if args.today else None
        container = build_container(snapshot=load_snapshot(args.snapshot), settings=settings)
        result = container.balance_service.get_group_audit(student_id=args.student, group_id=args.group, today=today)
    except (DomainError, OSError) as e:
        raise SystemExit(f"Error: {e}")

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        report = container.report_service.build_audit_report(result)
        print(f"Balance: {result.balance}  (owed {result.lessons_owed}, covered {result.lessons_covered})")
        print(container.report_service.to_dataframe(report).to_string(index=False))
        print()
        print(container.report_service.summary_dataframe(report).to_string(index=False))

    if args.export:
        report = container.report_service.build_audit_report(result)
        target = args.export if args.export.is_absolute() else Path(getattr(settings, "EXPORT_DIR", ".")) / args.export
        out = container.report_service.export_excel(report, target)
        print(f"OK: Report written to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
