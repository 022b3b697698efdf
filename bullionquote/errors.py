"""Service-level exceptions.

Each error carries the HTTP status the presentation layer should use and a
public message that is safe to show to the caller.
"""


class QuoteServiceError(Exception):
    status_code = 500
    public_message = 'Something went wrong.'

    def __init__(self, message=None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class NotFoundError(QuoteServiceError):
    status_code = 404
    public_message = 'Quote not found.'


class ValidationError(QuoteServiceError):
    """Malformed input, rejected before any write."""
    status_code = 400
    public_message = 'Invalid input.'

    def __init__(self, message=None, field=None):
        super().__init__(message)
        self.field = field


class UpstreamUnavailable(QuoteServiceError):
    status_code = 503
    public_message = 'Live prices are unavailable right now. Please try again.'


class ConflictError(QuoteServiceError):
    status_code = 409
    public_message = 'The quote could not be saved because of a conflicting update. Please try again.'


class AuthorizationError(QuoteServiceError):
    # Same message for unknown quotes and wrong credentials.
    status_code = 401
    public_message = 'Invalid credentials.'

    def __init__(self, message=None):
        super().__init__(self.public_message)
        self.detail = message
