"""Error taxonomy shared by the portal services.

Services raise these; the blueprints turn them into flashed messages or
inline text. None of them is fatal to the process.
"""


class PortalError(Exception):
    """Base class for request-level failures."""

    category = 'danger'

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """A required field is missing or malformed."""

    category = 'warning'


class ConflictError(PortalError):
    """The record would duplicate an existing one (e.g. email)."""


class AuthError(PortalError):
    """Bad credentials. The message never says which field was wrong."""


class NotFoundError(PortalError):
    category = 'info'


class StorageError(PortalError):
    """Proof blob could not be written or read."""

    category = 'info'


class ParseError(PortalError):
    """Admin-authored question JSON could not be parsed."""

    category = 'warning'
