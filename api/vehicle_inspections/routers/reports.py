from fastapi import APIRouter, Depends, Query

from ..db import get_db
from ..schemas import InspectionReport
from ..services import reports as report_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/inspections", response_model=InspectionReport)
def inspection_report(
    recent_limit: int = Query(report_service.RECENT_LIMIT, ge=0, le=100, description="Size of the recent-activity list."),
    conn=Depends(get_db),
):
    return report_service.get_inspection_report(conn, recent_limit=recent_limit)
