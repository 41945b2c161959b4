"""Custom exception classes"""


class BaseAppError(Exception):
    """Base application error"""

    # Subsystem the error comes from, used in logs
    component = "app"

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ApplicationNotFoundError(BaseAppError):
    """Application not found, or no published application exists (404)"""

    component = "content-graph"

    def __init__(self, application_id: int | None = None):
        if application_id is None:
            message = "No published application found. Please publish an application first."
        else:
            message = f"Application not found: {application_id}"
        super().__init__(message, status_code=404)


class SectionNotFoundError(BaseAppError):
    """Section not found (404)"""

    component = "content-graph"

    def __init__(self, section_id: int):
        self.section_id = section_id
        super().__init__(f"Section not found: {section_id}", status_code=404)


class StepNotFoundError(BaseAppError):
    """Step not found (404)"""

    component = "content-graph"

    def __init__(self, step_id: int):
        self.step_id = step_id
        super().__init__(f"Step not found: {step_id}", status_code=404)


class MediaResolutionError(BaseAppError):
    """A media reference could not be resolved (soft, handled by the compiler)"""

    component = "compiler"

    def __init__(self, kind: str | None, item_id: int | None, reason: str = "not found"):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Media item {kind}/{item_id} could not be resolved: {reason}", status_code=404)


class ContentGraphError(BaseAppError):
    """Reading or writing the content database failed (502)"""

    component = "content-graph"

    def __init__(self, message: str = "Content store request failed"):
        super().__init__(message, status_code=502)


class ProductionStoreError(BaseAppError):
    """Reading or writing the production template store failed (502)"""

    component = "production-store"

    def __init__(self, message: str = "Production store request failed"):
        super().__init__(message, status_code=502)


class InvalidPublishRequestError(BaseAppError):
    """The application cannot be published as-is (400)"""

    component = "publish"

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class InvalidDeployRequestError(BaseAppError):
    """The published application cannot be deployed (400)"""

    component = "deploy"

    def __init__(self, message: str):
        super().__init__(message, status_code=400)
