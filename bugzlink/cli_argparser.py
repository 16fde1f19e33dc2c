import argparse

import bugzlink.cli

from bugzlink import __version__
from bugzlink.auth import AUTH_METHODS


def make_arg_parser():
    parser = argparse.ArgumentParser(prog='bugzlink',
                                     argument_default=argparse.SUPPRESS)
    parser.add_argument('--config-file',
                        help='read an alternate configuration file')
    parser.add_argument('--connection',
                        help='use [connection] section of your '
                        'configuration file')
    parser.add_argument('-b', '--base',
                        help='base URL of Bugzilla')
    parser.add_argument('-k', '--key',
                        help='API key')
    parser.add_argument('--key-file',
                        help='file holding the API key')
    parser.add_argument('--auth-method',
                        choices=AUTH_METHODS,
                        help='how to send the API key (default: both as '
                        'api_key query parameter and X-BUGZILLA-API-KEY '
                        'header)')
    parser.add_argument('--insecure',
                        action='store_true',
                        help='do not verify TLS certificates')
    parser.add_argument('--timeout',
                        type=float,
                        help='seconds to wait for the server')
    parser.add_argument('-q', '--quiet',
                        action='store_true',
                        help='quiet mode')
    parser.add_argument('-d', '--debug',
                        type=int,
                        help='debug level (from 0 to 3)')
    parser.add_argument('--version',
                        action='version',
                        help='show program version and exit',
                        version='%(prog)s ' + __version__)

    subparsers = parser.add_subparsers(title='sub-commands',
                                       description='use -h after '
                                       'a sub-command for more help')

    connections_parser = subparsers.add_parser('connections',
                                               help='list known bug trackers')
    connections_parser.set_defaults(func=bugzlink.cli.connections)

    external_parser = subparsers.add_parser('external',
                                            argument_default=argparse.SUPPRESS,
                                            help='list the external bugs '
                                            'of a bug')
    external_parser.add_argument('bugid',
                                 type=int,
                                 help='the ID of the bug')
    external_parser.add_argument('--prs',
                                 action='store_true',
                                 help='only show GitHub pull requests')
    external_parser.set_defaults(func=bugzlink.cli.external)

    get_parser = subparsers.add_parser('get',
                                       argument_default=argparse.SUPPRESS,
                                       help='get a bug from bugzilla')
    get_parser.add_argument('bugid',
                            type=int,
                            help='the ID of the bug to retrieve')
    get_parser.add_argument('--json',
                            action='store_true',
                            help='print the bug as json')
    get_parser.set_defaults(func=bugzlink.cli.get)

    link_parser = subparsers.add_parser('link',
                                        argument_default=argparse.SUPPRESS,
                                        help='link a GitHub pull request '
                                        'to a bug')
    link_parser.add_argument('bugid',
                             type=int,
                             help='the ID of the bug')
    link_parser.add_argument('pull',
                             help='the pull request as org/repo/pull/number')
    link_parser.set_defaults(func=bugzlink.cli.link)

    modify_parser = subparsers.add_parser('modify',
                                          argument_default=argparse.SUPPRESS,
                                          help='modify a bug')
    modify_parser.add_argument('bugid',
                               type=int,
                               help='the ID of the bug to modify')
    modify_parser.add_argument('-a', '--assigned-to',
                               help='change assignee for this bug')
    modify_parser.add_argument('--duplicate',
                               type=int,
                               dest='dupe_of',
                               help='this bug is a duplicate')
    modify_parser.add_argument('-r', '--resolution',
                               help='set new resolution '
                               '(if status = RESOLVED)')
    modify_parser.add_argument('-s', '--status',
                               help='set new status of bug (eg. RESOLVED)')
    modify_parser.add_argument('-t', '--target-release',
                               action='append',
                               help='set the target release (one or more)')
    modify_parser.set_defaults(func=bugzlink.cli.modify)

    return parser
