"""
Report endpoints - the Report Service contract.

GET /reports, GET /report/{user_id}, POST /report,
PATCH /report/{report_id}, PUT /report/{report_id}, DELETE /report/{report_id}
"""

import logging

from fastapi import APIRouter, HTTPException, status

from ireporter.core.exceptions import PolicyViolationError, ReportValidationError
from ireporter.models.report import ReportCreateRequest, ReportUpdate, StatusUpdateRequest
from ireporter.services.report_repository import ReportNotFoundError, get_report_repository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reports"])


@router.get("/reports")
async def list_reports():
    """All reports (administrator dashboard)."""
    repository = get_report_repository()
    return {"reports": [r.to_wire() for r in repository.list_all()]}


@router.get("/report/{user_id}")
async def list_user_reports(user_id: str):
    """Reports submitted by one user."""
    repository = get_report_repository()
    return {"reports": [r.to_wire() for r in repository.list_for_user(user_id)]}


@router.post("/report", status_code=status.HTTP_201_CREATED)
async def create_report(payload: ReportCreateRequest):
    """
    Submit a new report.

    Returns the stored report (status PENDING) under newReport.
    """
    logger.info(f"📝 POST /report - type={payload.type.value}, user={payload.user_id}")
    try:
        report = get_report_repository().create(payload)
    except ReportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"message": "Report created successfully", "newReport": report.to_wire()}


@router.patch("/report/{report_id}")
async def update_report(report_id: str, update: ReportUpdate):
    """Edit title, description or incident date of a PENDING report."""
    try:
        report = get_report_repository().update(report_id, update)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PolicyViolationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ReportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"message": "Report updated successfully", "report": report.to_wire()}


@router.put("/report/{report_id}")
async def change_report_status(report_id: str, request: StatusUpdateRequest):
    """Administrator status change along the lifecycle graph."""
    try:
        report = get_report_repository().change_status(report_id, request.status)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PolicyViolationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"message": "Status updated successfully", "report": report.to_wire()}


@router.delete("/report/{report_id}")
async def delete_report(report_id: str):
    """Delete a PENDING report."""
    try:
        get_report_repository().delete(report_id)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PolicyViolationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return {"message": "Report deleted successfully"}
