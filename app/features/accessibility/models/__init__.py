"""
Accessibility models package.
"""
from app.features.accessibility.models.accessibility_check import AccessibilityCheck

__all__ = ["AccessibilityCheck"]
