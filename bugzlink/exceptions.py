class BugzError(Exception):
    """Base class for all errors raised by bugzlink."""


class AuthMethodError(BugzError):
    def __init__(self, method):
        self.method = method
        BugzError.__init__(self,
                           'unknown auth method "{0}"'.format(method))


class RequestError(BugzError):
    """A request could not be sent, failed, or returned something we
    could not decode.
    """
    def __init__(self, message, status_code=None):
        self.status_code = status_code
        BugzError.__init__(self, message)


class NotFoundError(RequestError):
    def __init__(self, message):
        RequestError.__init__(self, message, status_code=404)


class JSONRPCError(BugzError):
    def __init__(self, code, message):
        self.code = code
        self.message = message
        BugzError.__init__(self,
                           'JSONRPC error {0}: {1}'.format(code, message))


class JSONRPCIDMismatchError(BugzError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        BugzError.__init__(self,
                           'JSONRPC returned mismatched identifier, '
                           'expected {0} but got {1}'.format(expected, actual))


class IdentifierError(BugzError):
    pass


class IdentifierNotForPullError(IdentifierError):
    def __init__(self, identifier):
        self.identifier = identifier
        IdentifierError.__init__(self,
                                 'identifier {0!r} is not for a pull '
                                 'request'.format(identifier))
