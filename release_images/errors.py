class PipelineError(Exception):
    """Base class for failures that abort a pipeline job."""


class ConfigurationError(PipelineError):
    pass


class SourceRetrievalError(PipelineError):
    pass


class RegistryAuthError(PipelineError):
    pass


class CredentialExpiredError(RegistryAuthError):
    """Raised when a registry operation is attempted with an expired credential.

    Credentials are never renewed within a job, so the caller must log in again.
    """


class ImageBuildError(PipelineError):
    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode: int | None = returncode
