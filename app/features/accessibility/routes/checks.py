import asyncio
import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.accessibility.schemas.analysis import ExtendedChecks, ViolationDetail
from app.features.accessibility.schemas.check import (
    AnalyzeRequest,
    CheckHistoryItem,
    CheckOut,
    CheckResponse,
    HistoryResponse,
    ReportResponse,
)
from app.features.accessibility.services.analyzer import AccessibilityAnalyzerService
from app.features.accessibility.services.categorizer import build_report
from app.features.accessibility.services.check_service import create_check, get_check, list_checks
from app.features.accessibility.services.translations import localize_check
from app.platform.db.session import get_db
from app.platform.response import api_response
from app.platform.utils.url_validator import validate_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accessibility"])

Language = Literal["en", "ru"]


@router.post(
    "/analyze",
    response_model=CheckResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Run an accessibility check on a URL",
)
async def analyze_url(data: AnalyzeRequest, db: AsyncSession = Depends(get_db)):
    """
    Analyze one URL and store the result.

    Runs axe-core, the extended DOM checks and W3C markup validation against
    the rendered page. The browser work is blocking, so it runs in a worker
    thread.

    Returns:
        The stored check (201). 400 for a malformed URL, 500 with the cause
        when the analysis fails; failed analyses are not stored.
    """
    is_valid, normalized_url, error = validate_url(data.url)
    if not is_valid:
        return api_response(
            message=f"Invalid request: {error}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # AnalysisError propagates to the handler registered in app.platform.exceptions
    result = await asyncio.to_thread(AccessibilityAnalyzerService.analyze, normalized_url)

    check = await create_check(db, result)

    return api_response(
        data=CheckOut.model_validate(check),
        message="Accessibility check completed",
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/checks/{check_id}", response_model=CheckResponse, summary="Get a stored check")
async def get_check_by_id(
    check_id: str,
    lang: Language = Query("en"),
    db: AsyncSession = Depends(get_db),
):
    check = await get_check(db, check_id)
    if check is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Check not found")

    data = CheckOut.model_validate(check).model_dump(mode="json")

    return api_response(
        data=localize_check(data, lang),
        message="Check retrieved",
    )


@router.get(
    "/checks/{check_id}/report",
    response_model=ReportResponse,
    summary="Categorized summary and recommendations",
)
async def get_check_report(
    check_id: str,
    lang: Language = Query("en"),
    db: AsyncSession = Depends(get_db),
):
    check = await get_check(db, check_id)
    if check is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Check not found")

    violations = [ViolationDetail.model_validate(v) for v in check.violations or []]
    extended_checks = (
        ExtendedChecks.model_validate(check.extended_checks) if check.extended_checks else None
    )

    report = build_report(
        violations,
        html_error_count=check.html_error_count,
        html_warning_count=check.html_warning_count,
        extended_checks=extended_checks,
        lang=lang,
    )

    return api_response(data=report, message="Report generated")


@router.get("/history", response_model=HistoryResponse, summary="Most recent checks")
async def get_history(db: AsyncSession = Depends(get_db)):
    checks = await list_checks(db)
    logger.info(f"Found {len(checks)} checks in history")

    return api_response(
        data=[CheckHistoryItem.model_validate(check) for check in checks],
        message="History retrieved",
    )
