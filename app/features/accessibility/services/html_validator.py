import logging
from typing import Any, Dict, List

import httpx

from app.features.accessibility.schemas.analysis import (
    HTMLValidationMessage,
    HTMLValidationResult,
)
from app.platform.config import settings

logger = logging.getLogger(__name__)

_POSITION_FIELDS = (
    "firstLine",
    "lastLine",
    "firstColumn",
    "lastColumn",
    "hiliteStart",
    "hiliteLength",
)


class HTMLValidatorService:
    """
    Client for the W3C Nu markup validator.

    The validator is optional for an analysis: whatever goes wrong here is
    reported through `validation_failed` instead of being raised.
    """

    @staticmethod
    def validate_html(html: str) -> HTMLValidationResult:
        """
        POST the page HTML to the validator and normalize its messages.

        Args:
            html: Serialized HTML of the rendered page

        Returns:
            HTMLValidationResult; on any failure an empty result with
            validation_failed=True and the failure reason.
        """
        try:
            payload = HTMLValidatorService._post(html)
            return HTMLValidatorService.parse_response(payload)
        except Exception as e:
            logger.warning(f"HTML validation unavailable: {str(e)}")
            return HTMLValidationResult(
                error_count=0,
                warning_count=0,
                messages=[],
                validation_failed=True,
                validation_error=str(e) or e.__class__.__name__,
            )

    @staticmethod
    def _post(html: str) -> Dict[str, Any]:
        with httpx.Client(timeout=settings.HTML_VALIDATOR_TIMEOUT) as client:
            response = client.post(
                settings.HTML_VALIDATOR_URL,
                content=html.encode("utf-8"),
                headers={
                    "Content-Type": "text/html; charset=utf-8",
                    "User-Agent": settings.HTML_VALIDATOR_USER_AGENT,
                },
            )

        if not response.is_success:
            raise ValueError(f"W3C Validator API returned status {response.status_code}")

        return response.json()

    @staticmethod
    def parse_response(payload: Dict[str, Any]) -> HTMLValidationResult:
        """Count errors/warnings and normalize every message, in validator order."""
        if not isinstance(payload, dict):
            raise ValueError("W3C Validator API returned a malformed response")

        raw_messages = payload.get("messages")
        if not isinstance(raw_messages, list):
            raw_messages = []

        error_count = 0
        warning_count = 0
        messages: List[HTMLValidationMessage] = []

        for raw in raw_messages:
            if not isinstance(raw, dict):
                continue

            raw_type = raw.get("type")
            sub_type = raw.get("subType")

            if raw_type == "error":
                error_count += 1
            elif raw_type == "info" and sub_type == "warning":
                warning_count += 1

            messages.append(HTMLValidatorService._normalize_message(raw))

        logger.info(f"HTML validation: {error_count} errors, {warning_count} warnings")

        return HTMLValidationResult(
            error_count=error_count,
            warning_count=warning_count,
            messages=tuple(messages),
            validation_failed=False,
        )

    @staticmethod
    def _normalize_message(raw: Dict[str, Any]) -> HTMLValidationMessage:
        if raw.get("type") == "error":
            message_type = "error"
        elif raw.get("subType") == "warning":
            message_type = "warning"
        else:
            message_type = "info"

        fields = {name: raw.get(name) or 0 for name in _POSITION_FIELDS}

        return HTMLValidationMessage(
            type=message_type,
            message=raw.get("message") or "",
            extract=raw.get("extract") or "",
            **fields,
        )
