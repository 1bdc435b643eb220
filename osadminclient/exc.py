import sys


class ClientException(Exception):
    """Base class for all errors raised by osadminclient."""
    message = "Unknown error"

    def __init__(self, message=None):
        if message is None:
            message = self.__class__.message
        self.message = message
        super(ClientException, self).__init__(self.message)

    def __str__(self):
        return self.message


class ConfigError(ClientException):
    """A client was used without what it needs (session, endpoint...)."""
    message = "Invalid client configuration"


class CommunicationError(ClientException):
    """Unable to communicate with the server."""
    message = "Unable to communicate with the server"


class InvalidEndpoint(CommunicationError):
    """The provided endpoint is invalid or unreachable."""
    message = "Invalid endpoint"


class AuthFailed(ClientException):
    """The identity service refused the credentials."""
    message = "Authentication failed"


class MalformedResponse(ClientException):
    """The server answered with a body the client can not decode."""
    message = "Malformed response"


class NetworkNotFound(ClientException):
    """No network is associated with the tenant."""
    message = "Network not found: no network was found for this tenant."


class HTTPException(ClientException):
    """Base exception for all HTTP-derived exceptions.

    ``details`` holds the raw response body, which is also the string
    representation of the exception.
    """
    code = 'N/A'

    def __init__(self, details=None, code=None):
        if details is None:
            details = self.__class__.__name__
        self.details = details
        if code is not None:
            self.code = code
        super(HTTPException, self).__init__(self.details)


class HTTPMultipleChoices(HTTPException):
    code = 300


class HTTPBadRequest(HTTPException):
    code = 400


class HTTPUnauthorized(HTTPException):
    code = 401


class HTTPForbidden(HTTPException):
    code = 403


class HTTPNotFound(HTTPException):
    code = 404


class HTTPMethodNotAllowed(HTTPException):
    code = 405


class HTTPConflict(HTTPException):
    code = 409


class HTTPOverLimit(HTTPException):
    code = 413


class HTTPInternalServerError(HTTPException):
    code = 500


class HTTPNotImplemented(HTTPException):
    code = 501


class HTTPBadGateway(HTTPException):
    code = 502


class HTTPServiceUnavailable(HTTPException):
    code = 503


class DanglingUser(HTTPException):
    """The user was created but granting its role failed.

    The caller owns the compensation: ``user`` is the created user, which
    should be deleted if the grant can not be retried. ``cause`` is the error
    raised by the role grant.
    """

    def __init__(self, user, cause):
        self.user = user
        self.cause = cause
        details = ("User %(id)s was created but its role grant failed: "
                   "%(cause)s" % {'id': user.id, 'cause': cause})
        super(DanglingUser, self).__init__(details,
                                           code=getattr(cause, 'code', None))


# Build a mapping of HTTP codes to corresponding exception
# classes
_code_map = {}
for obj_name in dir(sys.modules[__name__]):
    if obj_name.startswith('HTTP'):
        obj = getattr(sys.modules[__name__], obj_name)
        if isinstance(obj.code, int):
            _code_map[obj.code] = obj


def from_response(response, body=None):
    """Return an instance of an HTTPException based on the response.

    The message of the exception is the raw body text of the response.
    """
    cls = _code_map.get(response.status_code, HTTPException)
    if body is None:
        body = response.content
    if isinstance(body, bytes):
        body = body.decode('utf-8', 'replace')
    return cls(details=body, code=response.status_code)
