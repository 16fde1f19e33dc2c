""" This module is used to communicate with Bugzilla.

Bugs are read and written through the REST API; external bugs are added
through the JSONRPC API because the ExternalBugs extension does not offer
a REST endpoint for it.
"""

import json
import urllib.parse

import requests

from bugzlink.auth import make_auth, resolve_key
from bugzlink.definitions import USER_AGENT
from bugzlink.exceptions import (BugzError, IdentifierError,
                                 IdentifierNotForPullError, JSONRPCError,
                                 JSONRPCIDMismatchError, NotFoundError,
                                 RequestError)
from bugzlink.identifiers import (GITHUB_TYPE_URL, identifier_for_pull,
                                  pull_from_identifier)
from bugzlink.log import log_debug
from bugzlink.types import (AddExternalBugParameters, BugList,
                            ExternalBugIdentifier, JSONRPCRequest,
                            JSONRPCResponse)

JSONRPC_PATH = '/jsonrpc.cgi'
JSONRPC_REQUEST_ID = 'identifier'
ADD_EXTERNAL_BUG_METHOD = 'ExternalBugs.add_external_bug'

# Returned by the server when the external bug is already on the bug.
DUPLICATE_EXTERNAL_BUG_CODE = 100500
DUPLICATE_EXTERNAL_BUG = ('duplicate key value violates unique constraint '
                          '"ext_bz_bug_map_bug_id_idx"')


def safe_url(url):
    """Strip user:password@ from a URL so it can be logged."""
    parse_result = urllib.parse.urlparse(url)
    new_netloc = parse_result.netloc.split('@')[-1]
    return parse_result._replace(netloc=new_netloc).geturl()


class Client:
    """ Talk to one Bugzilla instance.

    endpoint is the base URL of the instance, e.g.
    https://bugzilla.example.com. api_key is either the key itself or a
    callable returning it, or None for anonymous access. auth_method is one
    of the names in bugzlink.auth.AUTH_METHODS, or None to send the key
    both as query parameter and header. Unknown names raise AuthMethodError
    here rather than on the first request.

    timeout and verify are handed to requests unchanged; the session is
    reused for every call so connections are pooled.
    """
    def __init__(self, endpoint, api_key, auth_method=None, session=None,
                 timeout=None, verify=True):
        self.endpoint = endpoint.rstrip('/')
        self.api_key = api_key
        self.auth_method = auth_method
        self.auth = make_auth(auth_method, api_key)
        if api_key is None:
            self.auth = None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.verify = verify

    def __repr__(self):
        return '<Client {0}>'.format(safe_url(self.endpoint))

    def _request(self, method, path, params=None, body=None):
        url = self.endpoint + path
        log_debug('{0} {1}'.format(method, safe_url(url)), 2)
        data = None
        headers = {}
        if body is not None:
            data = json.dumps(body, separators=(',', ':')).encode('utf-8')
            headers['Content-Type'] = 'application/json'
        headers['User-Agent'] = USER_AGENT
        try:
            response = self.session.request(method, url, params=params,
                                            data=data, headers=headers,
                                            auth=self.auth,
                                            timeout=self.timeout,
                                            verify=self.verify)
        except requests.exceptions.RequestException as error:
            raise RequestError('{0} {1} failed: {2}'.format(
                method, safe_url(url), error)) from error

        log_debug('{0} {1} -> {2}'.format(method, safe_url(url),
                                         response.status_code), 3)
        if response.status_code == 404:
            raise NotFoundError('{0} {1}: 404 Not Found'.format(
                method, safe_url(url)))
        if response.status_code not in (200, 204):
            raise RequestError('{0} {1}: {2} {3}'.format(
                method, safe_url(url), response.status_code,
                response.reason), status_code=response.status_code)
        return response

    def _decode(self, response, model):
        try:
            return model.model_validate(response.json())
        except ValueError as error:
            # pydantic.ValidationError and JSON decoding errors both end up
            # here
            raise RequestError('could not decode response: {0}'.format(
                error), status_code=response.status_code) from error

    def _get_bug(self, bug_id, params=None):
        response = self._request('GET', '/rest/bug/{0}'.format(bug_id),
                                 params=params)
        buglist = self._decode(response, BugList)
        if len(buglist.bugs) != 1:
            raise RequestError('did not get one bug, but {0}: {1}'.format(
                len(buglist.bugs), response.text))
        return buglist.bugs[0]

    def get_bug(self, bug_id):
        """Fetch a bug by its numeric id.

        Raises NotFoundError when the bug does not exist.
        """
        return self._get_bug(bug_id)

    def update_bug(self, bug_id, update):
        """Send a BugUpdate for the bug. Only the fields set on update are
        changed.
        """
        self._request('PUT', '/rest/bug/{0}'.format(bug_id),
                      body=update.to_json())

    def _get_external_bugs(self, bug_id):
        bug = self._get_bug(bug_id, params={'include_fields': 'external_bugs'})
        # the server also lists links that belong to other bugs
        return [external for external in bug.external_bugs
                if external.bug_id == bug_id]

    def get_external_bugs(self, bug_id):
        """Return every external bug on the bug.

        Links that point at GitHub pull requests carry org, repo and num.
        """
        external_bugs = []
        for external in self._get_external_bugs(bug_id):
            try:
                org, repo, num = pull_from_identifier(external.ext_bz_bug_id)
            except IdentifierError:
                external_bugs.append(external)
                continue
            external_bugs.append(external.with_pull(org, repo, num))
        return external_bugs

    def get_external_bug_prs_on_bug(self, bug_id):
        """Return the GitHub pull requests linked to the bug.

        Links to issues are skipped; a GitHub link that looks like a pull but
        cannot be parsed raises IdentifierError.
        """
        prs = []
        for external in self._get_external_bugs(bug_id):
            if external.type.url != GITHUB_TYPE_URL:
                continue
            try:
                org, repo, num = pull_from_identifier(external.ext_bz_bug_id)
            except IdentifierNotForPullError:
                continue
            prs.append(external.with_pull(org, repo, num))
        return prs

    def add_pull_request_as_external_bug(self, bug_id, org, repo, num):
        """Link a GitHub pull request to the bug.

        Returns True if the server recorded a change and False if the link
        was already there.
        """
        if self.api_key is None:
            raise BugzError('adding external bugs requires an API key')
        identifier = identifier_for_pull(org, repo, num)
        rpc = JSONRPCRequest(
            method=ADD_EXTERNAL_BUG_METHOD,
            params=[AddExternalBugParameters(
                api_key=resolve_key(self.api_key),
                bug_ids=[bug_id],
                external_bugs=[ExternalBugIdentifier.for_pull(org, repo,
                                                              num)],
            )],
            id=JSONRPC_REQUEST_ID,
        )
        response = self._request('POST', JSONRPC_PATH, body=rpc.model_dump())
        result = self._decode(response, JSONRPCResponse)

        if result.error is not None:
            if (result.error.code == DUPLICATE_EXTERNAL_BUG_CODE and
                    DUPLICATE_EXTERNAL_BUG in result.error.message):
                log_debug('{0} is already linked to bug {1}'.format(
                    identifier, bug_id), 2)
                return False
            raise JSONRPCError(result.error.code, result.error.message)
        if result.id != rpc.id:
            raise JSONRPCIDMismatchError(rpc.id, result.id)

        changed = False
        if result.result is not None:
            for bug in result.result.bugs:
                change = bug.changes.ext_bz_bug_id
                if bug.id == bug_id and change is not None:
                    changed = changed or identifier in change.added
        return changed
