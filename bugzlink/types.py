""" Models for the JSON documents exchanged with Bugzilla.

Field names follow the names Bugzilla uses on the wire, so a model can be
built straight from a decoded response with model_validate().
"""

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bugzlink.identifiers import GITHUB_TYPE_URL, identifier_for_pull


# filled in locally from ext_bz_bug_id, never taken from a response
PULL_FIELDS = ('org', 'repo', 'num')


class _Fetched(BaseModel):
    # records read from the server are never modified afterwards, so
    # sequences are tuples
    model_config = ConfigDict(frozen=True, extra='ignore')


class User(_Fetched):
    email: str = ''
    id: int = 0
    name: str = ''
    real_name: str = ''


class ExternalBugType(_Fetched):
    url: str = ''


class ExternalBug(_Fetched):
    """A link from a Bugzilla bug to a record in another tracker.

    org, repo and num are only filled in when ext_bz_bug_id names a GitHub
    pull request; they are never sent to or read from the server.
    """
    type: ExternalBugType = Field(default_factory=ExternalBugType)
    bug_id: int = 0
    ext_bz_bug_id: str = ''

    org: Optional[str] = Field(default=None, exclude=True)
    repo: Optional[str] = Field(default=None, exclude=True)
    num: Optional[int] = Field(default=None, exclude=True)

    @model_validator(mode='before')
    @classmethod
    def _drop_pull_fields(cls, data):
        if isinstance(data, dict):
            data = {key: value for key, value in data.items()
                    if key not in PULL_FIELDS}
        return data

    def with_pull(self, org, repo, num):
        return self.model_copy(update={'org': org, 'repo': repo, 'num': num})


class Bug(_Fetched):
    id: int = 0
    alias: Tuple[str, ...] = ()
    summary: str = ''
    status: str = ''
    resolution: str = ''
    classification: str = ''
    product: str = ''
    component: Tuple[str, ...] = ()
    version: Tuple[str, ...] = ()
    target_release: Tuple[str, ...] = ()
    target_milestone: str = ''
    op_sys: str = ''
    platform: str = ''
    priority: str = ''
    severity: str = ''
    keywords: Tuple[str, ...] = ()
    groups: Tuple[str, ...] = ()
    whiteboard: str = ''
    url: str = ''
    deadline: Optional[str] = None

    assigned_to: str = ''
    assigned_to_detail: Optional[User] = None
    creator: str = ''
    creator_detail: Optional[User] = None
    qa_contact: str = ''
    qa_contact_detail: Optional[User] = None
    docs_contact: str = ''
    cc: Tuple[str, ...] = ()
    cc_detail: Tuple[User, ...] = ()

    blocks: Tuple[int, ...] = ()
    depends_on: Tuple[int, ...] = ()
    dupe_of: Optional[int] = None
    see_also: Tuple[str, ...] = ()
    external_bugs: Tuple[ExternalBug, ...] = ()

    creation_time: str = ''
    last_change_time: str = ''

    is_open: bool = False
    is_confirmed: bool = False
    is_cc_accessible: bool = False
    is_creator_accessible: bool = False

    def has_target_release(self, targets):
        """Return True if the bug targets any of the given releases."""
        return any(target in targets for target in self.target_release)


class BugList(_Fetched):
    bugs: Tuple[Bug, ...] = ()
    faults: tuple = ()


class BugUpdate(BaseModel):
    """A partial update for a bug; fields left as None are not sent."""
    status: Optional[str] = None
    resolution: Optional[str] = None
    target_release: Optional[List[str]] = None
    assigned_to: Optional[str] = None
    dupe_of: Optional[int] = None

    def to_json(self):
        return self.model_dump(exclude_none=True)

    def is_empty(self):
        return not self.to_json()


class ExternalBugIdentifier(BaseModel):
    ext_type_url: str
    ext_bz_bug_id: str

    @classmethod
    def for_pull(cls, org, repo, num):
        return cls(ext_type_url=GITHUB_TYPE_URL,
                   ext_bz_bug_id=identifier_for_pull(org, repo, num))


class AddExternalBugParameters(BaseModel):
    api_key: str
    bug_ids: List[int]
    external_bugs: List[ExternalBugIdentifier]


class JSONRPCRequest(BaseModel):
    jsonrpc: str = '1.0'
    method: str
    # JSONRPC 1.0 wants the parameter structure as the only list element
    params: List[AddExternalBugParameters]
    id: str


class JSONRPCErrorObject(_Fetched):
    code: int = 0
    message: str = ''


class FieldChange(_Fetched):
    added: str = ''
    removed: str = ''


class ExternalBugChanges(_Fetched):
    ext_bz_bug_id: Optional[FieldChange] = Field(
        default=None, alias='ext_bz_bug_map.ext_bz_bug_id')


class ChangedBug(_Fetched):
    id: int = 0
    alias: Tuple[str, ...] = ()
    changes: ExternalBugChanges = Field(default_factory=ExternalBugChanges)


class AddExternalBugResult(_Fetched):
    bugs: Tuple[ChangedBug, ...] = ()


class JSONRPCResponse(_Fetched):
    error: Optional[JSONRPCErrorObject] = None
    id: Optional[Union[str, int]] = None
    result: Optional[AddExternalBugResult] = None

