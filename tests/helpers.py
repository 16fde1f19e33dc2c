"""Shared helpers for faking a Bugzilla server behind a requests Session."""

import http.client
import json
import urllib.parse

import requests

API_KEY = 'api-key'
ENDPOINT = 'https://bugzilla.example.com'

BUG_DATA = b'{"bugs":[{"alias":[],"assigned_to":"Steve Kuznetsov","assigned_to_detail":{"email":"skuznets","id":381851,"name":"skuznets","real_name":"Steve Kuznetsov"},"blocks":[],"cc":["Sudha Ponnaganti"],"cc_detail":[{"email":"sponnaga","id":426940,"name":"sponnaga","real_name":"Sudha Ponnaganti"}],"classification":"Red Hat","component":["Test Infrastructure"],"creation_time":"2019-05-01T19:33:36Z","creator":"Dan Mace","creator_detail":{"email":"dmace","id":330250,"name":"dmace","real_name":"Dan Mace"},"deadline":null,"depends_on":[],"docs_contact":"","dupe_of":null,"groups":[],"id":1705243,"is_cc_accessible":true,"is_confirmed":true,"is_creator_accessible":true,"is_open":true,"keywords":[],"last_change_time":"2019-05-17T15:13:13Z","op_sys":"Unspecified","platform":"Unspecified","priority":"unspecified","product":"OpenShift Container Platform","qa_contact":"","resolution":"","see_also":[],"severity":"medium","status":"VERIFIED","summary":"[ci] cli image flake affecting *-images jobs","target_milestone":"---","target_release":["3.11.z"],"url":"","version":["3.11.0"],"whiteboard":""}],"faults":[]}'


def make_response(request, status_code=200, body=b''):
    if isinstance(body, str):
        body = body.encode('utf-8')
    elif not isinstance(body, bytes):
        body = json.dumps(body).encode('utf-8')
    response = requests.Response()
    response.status_code = status_code
    response.reason = http.client.responses.get(status_code, '')
    response._content = body
    response.encoding = 'utf-8'
    response.request = request
    response.url = request.url
    return response


def query(request):
    """Query parameters of a prepared request, one value per name."""
    parsed = urllib.parse.urlparse(request.url)
    return {key: values[0] for key, values
            in urllib.parse.parse_qs(parsed.query).items()}


def path(request):
    return urllib.parse.urlparse(request.url).path


def bug_id_from_path(request):
    return int(path(request)[len('/rest/bug/'):])


class FakeBugzilla:
    """Stands in for the server. Every prepared request is recorded and
    answered with the (status, body) pair handler returns for it.
    """
    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        status_code, body = self.handler(request)
        return make_response(request, status_code, body)

    @property
    def last(self):
        return self.requests[-1]

