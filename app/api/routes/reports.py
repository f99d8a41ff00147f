"""
API routes for run history reports.
"""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from datetime import datetime
from typing import Optional
import logging

from app.core.dependencies import get_report_generator
from app.schemas.report import RunReportResponse
from app.services.reports import ReportGenerator

router = APIRouter()
logger = logging.getLogger(__name__)

DATE_FORMAT_ERROR = "date query param (YYYY-MM-DD) is required"


@router.get("/runs", response_model=RunReportResponse, response_model_by_alias=True)
async def get_runs_report(
    date: Optional[str] = Query(None, description="Day in YYYY-MM-DD format (UTC)"),
    reports: ReportGenerator = Depends(get_report_generator)
):
    """
    Get every run that started on a day, with its duration.

    Args:
        date: Day in YYYY-MM-DD format
        reports: Report generator

    Returns:
        Runs ordered by start time
    """
    if not date or len(date) != 10:
        return JSONResponse(status_code=400, content={"error": DATE_FORMAT_ERROR})
    try:
        day = datetime.strptime(date, "%Y-%m-%d").date()
    except ValueError:
        return JSONResponse(status_code=400, content={"error": DATE_FORMAT_ERROR})

    logger.info(f"Building run report for {day}")
    return RunReportResponse(runs=reports.runs_for_date(day))
