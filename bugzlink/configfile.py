""" Reading of the bugzlink configuration files.

Files are INI style. [default] names the connection to use, every other
section describes one Bugzilla instance:

    [default]
    connection = redhat

    [redhat]
    base = https://bugzilla.redhat.com
    key_file = ~/.bugzilla-key
    auth_method = bearer
"""

import configparser
import glob
import os
import sys

from bugzlink.definitions import CONFIG_FILE
from bugzlink.exceptions import BugzError
from bugzlink.log import log_debug, log_error


def config_files(user_config=None):
    """Return the files to read, lowest precedence first."""
    default_configs = sorted(glob.glob(sys.prefix +
                                       '/share/bugzlink.d/*.conf'))
    system_configs = sorted(glob.glob('/etc/bugzlink.d/*.conf'))
    if user_config is None:
        user_config = CONFIG_FILE
    return default_configs + system_configs + [os.path.expanduser(user_config)]


def load_config(user_config=None):
    parser = configparser.ConfigParser(default_section='default')
    try:
        read = parser.read(config_files(user_config))
    except configparser.Error as error:
        log_error(error)
        sys.exit(1)
    log_debug('read configuration from {0}'.format(', '.join(read)), 2)
    return parser


def get_config_option(get, section, option):
    try:
        value = get(section, option)

    except configparser.InterpolationSyntaxError as error:
        log_error('Syntax Error in configuration file: {0}'.format(error))
        sys.exit(1)

    except ValueError as error:
        log_error('{0} is not in the right format: {1}'.format(option,
                  str(error)))
        sys.exit(1)

    if value == '':
        log_error('{0} is not set'.format(option))
        sys.exit(1)

    return value


def read_key_file(path):
    """Return the API key stored in path, without surrounding whitespace."""
    path = os.path.expanduser(path)
    try:
        with open(path) as fd:
            key = fd.read().strip()
    except OSError as error:
        raise BugzError('unable to read API key from {0}: {1}'.format(
            path, error.strerror)) from error
    if not key:
        raise BugzError('API key file {0} is empty'.format(path))
    return key
