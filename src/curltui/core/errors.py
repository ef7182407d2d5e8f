"""Request errors.

None of these are raised out of a dispatch: they are carried in
``ResponseState.error`` and rendered in the Response tab.
"""


class RequestError(Exception):
    """Base class for every error a dispatch can report."""


class ValidationError(RequestError):
    """The request was rejected before any process was started."""


class ProcessFailure(RequestError):
    """The HTTP client exited non-zero or could not be started."""

    def __init__(self, detail: str):
        super().__init__(f"request failed: {detail}")
        self.detail = detail


class DiagnosticError(RequestError):
    """The HTTP client exited zero but wrote to stderr.

    The stderr text is kept verbatim as the message.
    """

    def __init__(self, stderr: str):
        super().__init__(stderr)
        self.stderr = stderr
