class AnalysisError(Exception):
    """An accessibility analysis failed as a whole; nothing should be stored."""


class PageLoadError(AnalysisError):
    """The page could not be opened, or navigation exceeded the timeout."""


class RuleEngineError(AnalysisError):
    """axe-core could not be injected or did not produce a result."""


class ExtendedChecksError(AnalysisError):
    """The extended DOM checks could not be evaluated on the page."""
