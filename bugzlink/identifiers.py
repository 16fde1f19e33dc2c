""" Conversion between GitHub pull requests and the identifiers Bugzilla
stores for them as external bugs.
"""

import re

from bugzlink.exceptions import IdentifierError, IdentifierNotForPullError

GITHUB_TYPE_URL = 'https://github.com/'


def identifier_for_pull(org, repo, num):
    """Return the external bug identifier for a pull request."""
    return '{0}/{1}/pull/{2}'.format(org, repo, num)


def pull_from_identifier(identifier):
    """Split an external bug identifier into (org, repo, num).

    Raises IdentifierNotForPullError when the identifier points at
    something other than a pull (an issue, say) and IdentifierError when
    it cannot be parsed at all.
    """
    parts = identifier.split('/')
    if len(parts) >= 3 and parts[2] != 'pull':
        raise IdentifierNotForPullError(identifier)
    if len(parts) != 4:
        raise IdentifierError('invalid pull identifier with {0} parts: '
                              '{1!r}'.format(len(parts), identifier))
    if not re.fullmatch(r'[0-9]+', parts[3]):
        raise IdentifierError('invalid pull identifier: could not parse '
                              '{0!r} as number'.format(parts[3]))
    return parts[0], parts[1], int(parts[3])
