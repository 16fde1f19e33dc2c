""" Ways of handing the Bugzilla API key to the server.

Bugzilla accepts the key in an Authorization: Bearer header, in the
api_key query parameter or in its own X-BUGZILLA-API-KEY header. Which one
works depends on the server version and on what sits in front of it, so
the method is picked by name when the client is built.
"""

from requests.auth import AuthBase

from bugzlink.exceptions import AuthMethodError

AUTH_BEARER = 'bearer'
AUTH_QUERY = 'query'
AUTH_X_BUGZILLA_API_KEY = 'x-bugzilla-api-key'

AUTH_METHODS = (AUTH_BEARER, AUTH_QUERY, AUTH_X_BUGZILLA_API_KEY)

API_KEY_HEADER = 'X-BUGZILLA-API-KEY'
API_KEY_PARAM = 'api_key'


def resolve_key(api_key):
    if callable(api_key):
        return api_key()
    return api_key


class APIKeyAuth(AuthBase):
    """Base for the api key carriers; api_key may be a string or a
    callable returning one, which is evaluated for every request.
    """
    def __init__(self, api_key):
        self.api_key = api_key

    def __call__(self, r):
        return self.attach(r, resolve_key(self.api_key))

    def attach(self, r, key):
        raise NotImplementedError


class BearerAuth(APIKeyAuth):
    def attach(self, r, key):
        r.headers['Authorization'] = 'Bearer {0}'.format(key)
        return r


class QueryAuth(APIKeyAuth):
    def attach(self, r, key):
        r.prepare_url(r.url, {API_KEY_PARAM: key})
        return r


class HeaderAuth(APIKeyAuth):
    def attach(self, r, key):
        r.headers[API_KEY_HEADER] = key
        return r


class LegacyAuth(APIKeyAuth):
    """Query parameter and vendor header both, for servers that only
    understand one of them.
    """
    def attach(self, r, key):
        r.prepare_url(r.url, {API_KEY_PARAM: key})
        r.headers[API_KEY_HEADER] = key
        return r


_auth_classes = {
    AUTH_BEARER: BearerAuth,
    AUTH_QUERY: QueryAuth,
    AUTH_X_BUGZILLA_API_KEY: HeaderAuth,
}


def make_auth(method, api_key):
    """Return the requests auth object for the named method.

    An empty or missing method selects LegacyAuth.
    """
    if not method:
        return LegacyAuth(api_key)
    try:
        auth_class = _auth_classes[method]
    except KeyError:
        raise AuthMethodError(method) from None
    return auth_class(api_key)
