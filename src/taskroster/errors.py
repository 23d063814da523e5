"""TaskRoster errors."""


class TaskRosterError(Exception):
    """Base error for TaskRoster operations."""

    def __init__(self, message: str, code: str = "TASKROSTER_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class AuditSerializationError(TaskRosterError):
    """An audit record could not be rendered as JSON."""

    def __init__(self, detail: str):
        super().__init__(f"Audit record serialization failed: {detail}", "AUDIT_SERIALIZATION")
        self.detail = detail


class ConfigurationError(TaskRosterError):
    """Settings do not describe a usable component."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")
