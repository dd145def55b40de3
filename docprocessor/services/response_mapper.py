"""
Response Mapper - turns decoded endpoint responses into FileResults or errors.

Wire shape:
    {"success": true, "files": [{"fileName", "extractedText", "prompt",
                                 "promptCreated", "keyValues"}, ...]}
    {"success": false, "error": "..."}
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..errors import ApplicationError, TransportError
from ..models import FileResult, KeyValues, StructuredKeyValues, TextKeyValues

logger = logging.getLogger(__name__)

UNKNOWN_SERVER_ERROR = "Unknown error from server"


def structured_error(payload: Any) -> Optional[str]:
    """Return the server-supplied error string, if the payload carries one."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error:
            return error
    return None


def parse_key_values(value: Any) -> KeyValues:
    if isinstance(value, str):
        return TextKeyValues(value)
    if value is None:
        return TextKeyValues("")
    return StructuredKeyValues(value)


class ResponseMapper:
    """Maps decoded JSON bodies to results (success) or typed errors (failure)."""

    def parse_file_result(self, data: Dict[str, Any]) -> FileResult:
        return FileResult(
            file_name=str(data.get("fileName") or ""),
            extracted_text=str(data.get("extractedText") or ""),
            prompt=str(data.get("prompt") or ""),
            prompt_created=data.get("promptCreated") is True,
            key_values=parse_key_values(data.get("keyValues")),
        )

    def map_success(self, payload: Any) -> List[FileResult]:
        """
        Map a 2xx body.

        Raises ApplicationError when the body reports failure or is not
        shaped like a success response.
        """
        if not isinstance(payload, dict) or not payload.get("success"):
            raise ApplicationError(structured_error(payload) or UNKNOWN_SERVER_ERROR)

        files = payload.get("files")
        if not isinstance(files, list):
            logger.warning("Success response without a files list: %r", type(files).__name__)
            raise ApplicationError(UNKNOWN_SERVER_ERROR)

        results = []
        for entry in files:
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object file entry in response: %r", entry)
                continue
            results.append(self.parse_file_result(entry))
        return results

    def map_error_status(self, status_code: int, payload: Any) -> ApplicationError | TransportError:
        """Map a non-2xx response to the error it should surface."""
        message = structured_error(payload)
        if message:
            return ApplicationError(message, status_code=status_code)
        return TransportError(f"Request failed with status code {status_code}", status_code=status_code)
