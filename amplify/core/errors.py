"""Amplify: Error taxonomy shared by every service."""

from typing import Any, Dict, List, Optional


class AmplifyError(Exception):
    """Base class for all errors raised by amplify services."""

    code = "AMPLIFY_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self), "details": self.details}


class ConfigError(AmplifyError):
    """Required configuration is missing. Fatal at startup."""

    code = "CONFIG_ERROR"


class ValidationError(AmplifyError):
    """Untrusted input does not match the declared shape.

    ``issues`` lists every violated field as ``{"path": ..., "reason": ...}``.
    """

    code = "VALIDATION_ERROR"

    def __init__(self, schema: str, issues: List[Dict[str, str]]):
        paths = ", ".join(f"{i['path']} ({i['reason']})" for i in issues)
        super().__init__(
            f"Invalid {schema}: {paths}", details={"schema": schema, "issues": issues}
        )
        self.schema = schema
        self.issues = issues

    @property
    def paths(self) -> List[str]:
        return [issue["path"] for issue in self.issues]


class NotFound(AmplifyError):
    """A referenced record does not exist in the store."""

    code = "NOT_FOUND"

    def __init__(self, collection: str, key: str):
        super().__init__(
            f"{collection} record '{key}' not found",
            details={"collection": collection, "key": key},
        )
        self.collection = collection
        self.key = key


class StoreError(AmplifyError):
    """Transport or query failure against the record store."""

    code = "STORE_ERROR"

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message, details={"payload": payload})
        self.payload = payload


class DeliveryError(AmplifyError):
    """The email provider rejected or failed a single send."""

    code = "DELIVERY_ERROR"

    def __init__(self, message: str, status_code: int = 0, payload: Any = None):
        super().__init__(
            message, details={"status_code": status_code, "payload": payload}
        )
        self.status_code = status_code
        self.payload = payload


class PreconditionError(AmplifyError):
    """Raised before any side effect when an operation cannot start."""

    code = "PRECONDITION_FAILED"


class MissingScheduleError(PreconditionError):
    code = "SCHEDULE_REQUIRED"

    def __init__(self, entity: str):
        super().__init__(
            f"Scheduled time is required to schedule a {entity}",
            details={"entity": entity},
        )
        self.entity = entity


class TemplateNotFoundError(PreconditionError):
    code = "TEMPLATE_NOT_FOUND"

    def __init__(self, template_id: str):
        super().__init__(
            f"Email template '{template_id}' not found",
            details={"template_id": template_id},
        )
        self.template_id = template_id
