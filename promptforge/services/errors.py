"""Error taxonomy shared by the services and routers."""


class PromptValidationError(ValueError):
    """Keywords missing or empty; the only error that fails a request."""


class ServiceError(Exception):
    """An external collaborator call failed, timed out or was withheld."""


class ServiceNotConfiguredError(ServiceError):
    """The collaborator has no credentials and was not called."""


class SafetyWithheldError(ServiceError):
    """The collaborator withheld its output for safety reasons."""


class FormatError(Exception):
    """A collaborator response could not be parsed into the expected shape."""
