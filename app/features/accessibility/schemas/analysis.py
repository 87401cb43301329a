"""
Analysis Schemas

Typed shapes for everything the analysis pipeline produces: rule engine
violations, markup validator messages, extended DOM checks and the combined
AnalysisResult.

Records that come straight from an external producer (axe-core, the W3C
validator) keep the producer's camelCase keys on the wire through aliases.
"""
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


Impact = Literal["critical", "serious", "moderate", "minor"]

IMPACT_LEVELS = ("critical", "serious", "moderate", "minor")


# ============================================================================
# Rule engine (axe-core)
# ============================================================================

class ViolationNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    html: str = ""
    target: Tuple[Any, ...] = ()
    failure_summary: Optional[str] = Field(default=None, alias="failureSummary")


class ViolationDetail(BaseModel):
    """One failed axe rule with every node it failed on."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str
    # Kept as a plain string: unknown impacts must survive and simply not be tallied
    impact: Optional[str] = None
    description: str = ""
    help: str = ""
    help_url: str = Field(default="", alias="helpUrl")
    tags: Tuple[str, ...] = ()
    nodes: Tuple[ViolationNode, ...] = ()


# ============================================================================
# Markup validator (W3C Nu)
# ============================================================================

class HTMLValidationMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: Literal["error", "warning", "info"]
    message: str = ""
    extract: str = ""
    first_line: int = Field(default=0, alias="firstLine")
    last_line: int = Field(default=0, alias="lastLine")
    first_column: int = Field(default=0, alias="firstColumn")
    last_column: int = Field(default=0, alias="lastColumn")
    hilite_start: int = Field(default=0, alias="hiliteStart")
    hilite_length: int = Field(default=0, alias="hiliteLength")


class HTMLValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    error_count: int = 0
    warning_count: int = 0
    messages: Tuple[HTMLValidationMessage, ...] = ()
    validation_failed: bool = False
    validation_error: Optional[str] = None


# ============================================================================
# Extended checks
# ============================================================================

class ViewportCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    blocks_zoom: bool = False
    user_scalable: bool = True
    max_scale: Optional[float] = None
    issues: Tuple[str, ...] = ()


class AutoplayElement(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str
    has_controls: bool
    selector: str


class AutoplayMediaCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_autoplay_audio: bool = False
    has_autoplay_video: bool = False
    elements: Tuple[AutoplayElement, ...] = ()
    issues: Tuple[str, ...] = ()


class TabindexElement(BaseModel):
    model_config = ConfigDict(frozen=True)

    selector: str
    tabindex: int


class TabOrderCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_positive_tabindex: bool = False
    max_tabindex: int = 0
    elements_with_tabindex: Tuple[TabindexElement, ...] = ()
    issues: Tuple[str, ...] = ()


class FocusVisibleCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_focus_styles: bool = False
    elements_without_focus: int = 0
    checked_selectors: Tuple[str, ...] = ()
    issues: Tuple[str, ...] = ()


class TimingCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_set_timeout: bool = False
    has_set_interval: bool = False
    refresh_meta: bool = False
    issues: Tuple[str, ...] = ()


class ExtendedChecks(BaseModel):
    model_config = ConfigDict(frozen=True)

    viewport: ViewportCheck
    autoplay_media: AutoplayMediaCheck
    tab_order: TabOrderCheck
    focus_visible: FocusVisibleCheck
    timing: TimingCheck

    @property
    def issue_count(self) -> int:
        return (
            len(self.viewport.issues)
            + len(self.autoplay_media.issues)
            + len(self.tab_order.issues)
            + len(self.focus_visible.issues)
            + len(self.timing.issues)
        )


# ============================================================================
# Combined result
# ============================================================================

class AnalysisResult(BaseModel):
    """Everything one analysis run found on one page. Built once, never mutated."""
    model_config = ConfigDict(frozen=True)

    url: str
    tested_url: str
    page_title: str = ""

    total_violations: int = 0
    critical_count: int = 0
    serious_count: int = 0
    moderate_count: int = 0
    minor_count: int = 0
    passed_count: int = 0

    violations: Tuple[ViolationDetail, ...] = ()
    passes: Tuple[Dict[str, Any], ...] = ()
    incomplete: Tuple[Dict[str, Any], ...] = ()

    html_error_count: int = 0
    html_warning_count: int = 0
    html_validation_messages: Tuple[HTMLValidationMessage, ...] = ()
    html_validation_failed: bool = False
    html_validation_error: Optional[str] = None

    extended_checks: ExtendedChecks
