"""Error kinds raised by the store, generator and routes.

Every failure the API reports carries one of the ``ErrorKind`` values so
clients can branch on ``kind`` instead of matching message strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    GENERATION_PARSE = "generation_parse"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class StudioError(Exception):
    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "kind": self.kind.value}


class InvalidRequestError(StudioError):
    kind = ErrorKind.VALIDATION
    status_code = 400

    def __init__(self, message: str, fields: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.fields = fields or []

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["fields"] = self.fields
        return payload


class NotFoundError(StudioError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, entity: str, record_id: int) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.record_id = record_id


class GenerationParseError(StudioError):
    """The model answered, but not with the JSON we asked for.

    ``raw_text`` is kept for the logs only; it never goes back to the caller.
    """

    kind = ErrorKind.GENERATION_PARSE
    status_code = 500

    def __init__(self, raw_text: str, message: str = "Failed to parse AI-generated suggestions") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ConfigurationError(StudioError):
    kind = ErrorKind.CONFIGURATION
    status_code = 500


class GenerationError(StudioError):
    kind = ErrorKind.UNKNOWN
    status_code = 500


_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def from_validation_errors(errors: Sequence[Mapping[str, Any]]) -> InvalidRequestError:
    """Turn pydantic/FastAPI error entries into a field-level ``InvalidRequestError``."""
    fields: List[Dict[str, str]] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if len(loc) > 1 and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        field = ".".join(loc) or "body"
        message = str(err.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        fields.append({"field": field, "message": message})
    summary = "; ".join(f'{f["message"]} at "{f["field"]}"' for f in fields)
    return InvalidRequestError(f"Validation error: {summary}", fields=fields)
