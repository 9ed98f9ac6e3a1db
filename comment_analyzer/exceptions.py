# comment_analyzer/exceptions.py
"""
Exceptions shared across the whole project.

- LexiconLoadError      : word list / stopword / sample YAML could not be loaded
- CommentDataError      : request or input comment validation failed
- RemoteServiceError    : external analysis API call or response problem
- RequestCancelled      : a remote call was cancelled by its caller
- AuthError             : login / session failures
- PermissionDeniedError : authenticated user lacks a permission
"""

class LexiconLoadError(IOError):
    """Word lists, stopwords or sample data could not be loaded."""
    pass


class CommentDataError(ValueError):
    """Comment text / request parameters failed validation."""
    pass


class RemoteServiceError(RuntimeError):
    """External API call, response format or parsing failed."""
    pass


class RequestCancelled(RuntimeError):
    """Raised when a call observes that its cancel token was triggered."""
    pass


class AuthError(RuntimeError):
    """Invalid credentials, unknown session or duplicate registration."""
    pass


class PermissionDeniedError(AuthError):
    """The current user does not hold the required permission."""
    pass
