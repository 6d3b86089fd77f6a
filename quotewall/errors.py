"""
Application Errors

Services raise these; routes catch the ones they can answer with a form
message and let the rest reach the app-level error handler, which renders
them with ``status_code``.
"""


class QuoteWallError(Exception):
    """Base class for all Quote Wall errors."""
    status_code = 500
    message = 'Something went wrong.'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class DuplicateEmail(QuoteWallError):
    status_code = 400
    message = 'Email already exists'


class InvalidCredentials(QuoteWallError):
    # Same wording for unknown email and wrong password
    status_code = 401
    message = 'Invalid credentials'


class Forbidden(QuoteWallError):
    status_code = 403
    message = 'You do not have permission to do that.'


class QuoteNotFound(QuoteWallError):
    status_code = 404
    message = 'Quote not found'


class UserNotFound(QuoteWallError):
    status_code = 404
    message = 'User not found'


class SelfDeletion(QuoteWallError):
    status_code = 400
    message = 'You cannot delete your own account.'


class InvalidRole(QuoteWallError):
    status_code = 400
    message = 'Unknown role'


class MalformedQuote(QuoteWallError, ValueError):
    status_code = 400
    message = 'Every speaker needs a line and every line needs a speaker slot.'


class StoreError(QuoteWallError):
    status_code = 500
    message = 'The database could not complete the request.'
