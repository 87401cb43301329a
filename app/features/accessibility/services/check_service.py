import logging
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.accessibility.models.accessibility_check import AccessibilityCheck
from app.features.accessibility.schemas.analysis import AnalysisResult
from app.platform.config import settings

logger = logging.getLogger(__name__)


async def create_check(db: AsyncSession, result: AnalysisResult) -> AccessibilityCheck:
    """Store one analysis result; the database assigns id and checked_at."""
    payload = result.model_dump(mode="json", by_alias=True)

    check = AccessibilityCheck(
        url=result.url,
        tested_url=result.tested_url,
        page_title=result.page_title,
        total_violations=result.total_violations,
        critical_count=result.critical_count,
        serious_count=result.serious_count,
        moderate_count=result.moderate_count,
        minor_count=result.minor_count,
        passed_count=result.passed_count,
        violations=payload["violations"],
        passes=payload["passes"],
        incomplete=payload["incomplete"],
        html_error_count=result.html_error_count,
        html_warning_count=result.html_warning_count,
        html_validation_messages=payload["html_validation_messages"],
        html_validation_failed=result.html_validation_failed,
        html_validation_error=result.html_validation_error,
        extended_checks=payload["extended_checks"],
    )
    db.add(check)
    await db.commit()
    await db.refresh(check)

    logger.info(f"Stored accessibility check {check.id} for {check.url}")
    return check


async def get_check(db: AsyncSession, check_id: str) -> Optional[AccessibilityCheck]:
    result = await db.execute(select(AccessibilityCheck).where(AccessibilityCheck.id == check_id))
    return result.scalars().first()


async def list_checks(db: AsyncSession, limit: int = settings.HISTORY_LIMIT) -> List[AccessibilityCheck]:
    """Most recent checks first, never more than HISTORY_LIMIT."""
    query = (
        select(AccessibilityCheck)
        .order_by(desc(AccessibilityCheck.checked_at), desc(AccessibilityCheck.id))
        .limit(min(limit, settings.HISTORY_LIMIT))
    )
    result = await db.execute(query)
    return list(result.scalars().all())
