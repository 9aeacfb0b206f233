"""Error taxonomy shared by the services and rendered by the API as {"error": ...}."""


class TaskMasterError(Exception):
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)

    @property
    def message(self) -> str:
        return str(self.args[0])


class MissingCredential(TaskMasterError):
    """No bearer credential on the request. A request-shape error, not a failed login."""
    status_code = 400


class Unauthenticated(TaskMasterError):
    status_code = 401


class StoreError(TaskMasterError):
    """Base for failures coming from the task store."""


class NotFound(StoreError):
    status_code = 404


class ConstraintViolation(StoreError):
    status_code = 422


class StoreUnavailable(StoreError):
    status_code = 503


class LLMNotConfigured(TaskMasterError):
    status_code = 500


class LLMProviderError(TaskMasterError):
    """Upstream completion provider failed. Carries the provider's status, code and type."""

    def __init__(self, message, status_code=None, code=None, error_type=None):
        super().__init__(message)
        self.status_code = status_code or 502
        self.code = code
        self.type = error_type
