"""Client for the AI edge functions (report generation, review, parsing)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from flask import current_app

from reportdesk.domain.exceptions import ExternalServiceError, NetworkError

logger = logging.getLogger(__name__)

# Gateway statuses with a message the user can act on
UPSTREAM_MESSAGES = {
    429: "Rate limit exceeded. Please try again later.",
    401: "Invalid OpenAI API key. Please update your settings.",
    402: "AI credits exhausted. Please add credits to continue.",
}


class FunctionsClient:
    """Synchronous HTTP client for the hosted functions. No retries."""

    def __init__(self, base_url: str, api_key: Optional[str] = None, timeout: float = 60) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "FunctionsClient":
        return cls(
            config.get("FUNCTIONS_BASE_URL", ""),
            api_key=config.get("FUNCTIONS_API_KEY"),
            timeout=config.get("FUNCTIONS_TIMEOUT", 60),
        )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @staticmethod
    def _error_message(response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return None

    def invoke(self, name: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.base_url:
            raise ExternalServiceError("AI functions are not configured")

        url = f"{self.base_url}/{name}"
        try:
            response = requests.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Function %s unreachable: %s", name, exc)
            raise NetworkError(f"Could not reach the {name} service. Check your connection.") from exc

        if response.status_code in UPSTREAM_MESSAGES:
            logger.warning("Function %s refused with status %s", name, response.status_code)
            raise ExternalServiceError(
                UPSTREAM_MESSAGES[response.status_code],
                upstream_status=response.status_code,
            )

        if not 200 <= response.status_code < 300:
            message = self._error_message(response) or f"{name} failed"
            logger.error("Function %s failed with status %s: %s", name, response.status_code, message)
            raise ExternalServiceError(message, upstream_status=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalServiceError(f"{name} returned an invalid response") from exc

        # Functions may report failure inside a 200 body
        if isinstance(data, dict) and data.get("error"):
            raise ExternalServiceError(str(data["error"]))

        return data if isinstance(data, dict) else {"data": data}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def generate_report(self, report_type_id: str, user_inputs: Dict[str, Any]) -> str:
        data = self.invoke(
            "generate-report",
            {"reportTypeId": report_type_id, "userInputs": user_inputs},
        )
        content = data.get("content")
        if not content:
            raise ExternalServiceError("No content generated")
        return content

    def review_report(self, report_id: str) -> Dict[str, Any]:
        data = self.invoke("review-report", {"reportId": report_id})
        review = data.get("review")
        if review is None:
            raise ExternalServiceError("No review generated")
        return review

    def parse_kb_document(self, *, file_path: str, report_type_id: str, file_name: str, file_type: str) -> Dict[str, Any]:
        return self.invoke(
            "parse-kb-document",
            {
                "filePath": file_path,
                "reportTypeId": report_type_id,
                "fileName": file_name,
                "fileType": file_type,
            },
        )

    def fetch_openai_models(self, api_key: str) -> List[Dict[str, Any]]:
        data = self.invoke("fetch-openai-models", {"apiKey": api_key})
        return data.get("models") or []


def functions_client() -> FunctionsClient:
    """The app's client; tests install a fake under ``app.extensions``."""
    client = current_app.extensions.get("functions_client")
    if client is None:
        client = FunctionsClient.from_config(current_app.config)
        current_app.extensions["functions_client"] = client
    return client
