from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import pandas as pd

from ..balance.model import BalanceAuditResult

AUDIT_COLUMNS = ["lesson_date", "lesson_time", "lesson_id", "attendance", "status", "reason", "pass_id"]
PASS_COLUMNS = ["pass_id", "purchase_date", "expiry_date", "lessons_used", "lessons_total", "lessons_left"]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
    totals: dict


class BalanceReportService:
    """Tabular view of one balance audit (one row per decision, one summary row per pass)."""

    def build_audit_report(self, result: BalanceAuditResult) -> ReportData:
        rows = [
            {
                "lesson_date": e.lesson_date.strftime("%Y-%m-%d"),
                "lesson_time": e.lesson_time.strftime("%H:%M"),
                "lesson_id": e.lesson_id,
                "attendance": e.attendance_status.value if e.attendance_status else "-",
                "status": e.outcome.value,
                "reason": e.reason.value,
                "pass_id": e.covered_by_pass_id or "-",
            }
            for e in result.audit_entries
        ]

        summary = [
            {
                "pass_id": p.pass_id,
                "purchase_date": p.purchase_date.strftime("%Y-%m-%d"),
                "expiry_date": p.expiry_date.strftime("%Y-%m-%d") if p.expiry_date else "-",
                "lessons_used": p.lessons_used,
                "lessons_total": p.lessons_total,
                "lessons_left": p.lessons_total - p.lessons_used,
            }
            for p in result.pass_usage
        ]

        totals = {
            "balance": result.balance,
            "lessons_owed": result.lessons_owed,
            "lessons_covered": result.lessons_covered,
            "lessons_uncovered": len(result.uncovered_lessons),
        }
        return ReportData(rows=rows, summary=summary, totals=totals)

    @staticmethod
    def to_dataframe(report: ReportData) -> pd.DataFrame:
        return pd.DataFrame(report.rows, columns=AUDIT_COLUMNS)

    @staticmethod
    def summary_dataframe(report: ReportData) -> pd.DataFrame:
        return pd.DataFrame(report.summary, columns=PASS_COLUMNS)

    def export_excel(self, report: ReportData, path: Union[str, Path]) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)

        totals = pd.DataFrame([report.totals])
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            totals.to_excel(writer, sheet_name="Balance", index=False)
            self.to_dataframe(report).to_excel(writer, sheet_name="Audit", index=False)
            self.summary_dataframe(report).to_excel(writer, sheet_name="Passes", index=False)
        return out
