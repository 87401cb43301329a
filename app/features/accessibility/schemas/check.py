from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from app.platform.response import APIResponse


class AnalyzeRequest(BaseModel):
    url: str

    class Config:
        json_schema_extra = {
            "example": {
                "url": "https://example.com"
            }
        }


class CheckOut(BaseModel):
    """A stored accessibility check as returned by the API."""
    id: str
    url: str
    checked_at: datetime

    tested_url: Optional[str] = None
    page_title: Optional[str] = None

    total_violations: int
    critical_count: int
    serious_count: int
    moderate_count: int
    minor_count: int
    passed_count: int

    violations: List[Dict[str, Any]]
    passes: Optional[List[Dict[str, Any]]] = None
    incomplete: Optional[List[Dict[str, Any]]] = None

    html_error_count: int
    html_warning_count: int
    html_validation_messages: Optional[List[Dict[str, Any]]] = None
    html_validation_failed: bool
    html_validation_error: Optional[str] = None

    extended_checks: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class CheckHistoryItem(BaseModel):
    id: str
    url: str
    tested_url: Optional[str] = None
    page_title: Optional[str] = None
    checked_at: datetime
    total_violations: int
    critical_count: int
    serious_count: int
    html_error_count: int
    html_validation_failed: bool

    class Config:
        from_attributes = True


class CategoryAnalysis(BaseModel):
    key: str
    name: str
    count: int = 0
    severity: Literal["critical", "high", "low"] = "low"
    recommendations: List[str] = Field(default_factory=list)


class AccessibilityReport(BaseModel):
    total_violations: int
    html_error_count: int
    html_warning_count: int
    extended_issue_count: int = 0
    has_issues: bool
    categories: List[CategoryAnalysis] = Field(default_factory=list)
    detailed_categories: List[CategoryAnalysis] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class CheckResponse(APIResponse[CheckOut]):
    pass


class ReportResponse(APIResponse[AccessibilityReport]):
    pass


class HistoryResponse(APIResponse[List[CheckHistoryItem]]):
    pass
