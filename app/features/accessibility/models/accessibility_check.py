from sqlalchemy import Column, Boolean, Integer, DateTime, Text, Index, JSON, func

from app.platform.db.base import BaseModel


class AccessibilityCheck(BaseModel):
    """
    One stored accessibility analysis of a single URL.

    Summary counts live in their own columns so history listings stay cheap;
    the full rule engine, validator and extended check payloads are JSON.
    """
    __tablename__ = "accessibility_checks"

    # Page identification
    url = Column(Text, nullable=False)
    tested_url = Column(Text, nullable=True)  # Final URL after redirects
    page_title = Column(Text, nullable=True)
    checked_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Rule engine summary
    total_violations = Column(Integer, default=0, nullable=False)
    critical_count = Column(Integer, default=0, nullable=False)
    serious_count = Column(Integer, default=0, nullable=False)
    moderate_count = Column(Integer, default=0, nullable=False)
    minor_count = Column(Integer, default=0, nullable=False)
    passed_count = Column(Integer, default=0, nullable=False)

    # Full rule engine results
    violations = Column(JSON, nullable=False)
    passes = Column(JSON, nullable=True)
    incomplete = Column(JSON, nullable=True)

    # Markup validation
    html_error_count = Column(Integer, default=0, nullable=False)
    html_warning_count = Column(Integer, default=0, nullable=False)
    html_validation_messages = Column(JSON, nullable=True)
    html_validation_failed = Column(Boolean, default=False, nullable=False)
    html_validation_error = Column(Text, nullable=True)

    # Extended DOM checks
    extended_checks = Column(JSON, nullable=True)

    __table_args__ = (
        Index('idx_accessibility_checks_checked_at', 'checked_at'),
    )
