# collegeadmin/api/admin.py
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_db, require_capability
from collegeadmin.core.aggregates import attendance_rate, entity_counts, fee_totals
from collegeadmin.core.errors import NotFoundError
from collegeadmin.core.reports import ReportType, build_report, report_filename, to_csv
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.db.models import Attendance, FeeInvoice, Profile
from collegeadmin.schemas.admin import DashboardCounts, ReportStats

router = APIRouter()

view_dashboard = require_capability(Capability.VIEW_DASHBOARD)
view_reports = require_capability(Capability.VIEW_REPORTS)


@router.get("/dashboard", response_model=DashboardCounts)
def dashboard(
    active_only: bool = False,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(view_dashboard),
):
    filters = {"students": "active", "faculty": "active"} if active_only else None
    counts = entity_counts(db, filters)
    return DashboardCounts(
        total_students=counts["students"],
        total_faculty=counts["faculty"],
        total_classes=counts["classes"],
        total_batches=counts["batches"],
    )


@router.get("/stats", response_model=ReportStats)
def report_stats(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(view_reports),
):
    counts = entity_counts(db)
    totals = fee_totals(crud.list_all(db, FeeInvoice))
    return ReportStats(
        total_students=counts["students"],
        total_faculty=counts["faculty"],
        total_courses=counts["courses"],
        attendance_rate=attendance_rate(crud.list_all(db, Attendance)),
        fee_collection=totals.paid_total,
        pending_fees=totals.pending_total,
    )


@router.get("/reports/{report_type}")
def report_table(
    report_type: ReportType,
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(view_reports),
):
    table = build_report(db, report_type, limit)
    return {
        "report_type": table.report_type.value,
        "columns": list(table.columns),
        "rows": [list(row) for row in table.rows],
        "warnings": [{"path": w.path, "message": w.message} for w in table.warnings],
    }


@router.get("/reports/{report_type}/export")
def export_report(
    report_type: ReportType,
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(view_reports),
):
    table = build_report(db, report_type, limit)
    if not table.rows:
        raise NotFoundError("No data to export")
    return Response(
        content=to_csv(table),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{report_filename(report_type)}"'},
    )
