import sys

from bugzlink.client import Client, safe_url
from bugzlink.configfile import get_config_option, read_key_file
from bugzlink.log import log_debug, log_error, log_info
from bugzlink.log import log_setDebugLevel, log_setQuiet

# connection options and the ConfigParser getter used to read them
OPTIONS = (
    ('base', 'get'),
    ('key', 'get'),
    ('key_file', 'get'),
    ('auth_method', 'get'),
    ('insecure', 'getboolean'),
    ('timeout', 'getfloat'),
    ('debug', 'getint'),
    ('quiet', 'getboolean'),
)

DEFAULTS = {
    'insecure': False,
    'timeout': None,
    'debug': 0,
    'quiet': False,
}

SECRET_OPTIONS = ('key',)
# may carry user:password@ in the netloc
URL_OPTIONS = ('base',)


class Settings:
    """Command line arguments merged over the selected connection of the
    configuration file. Arguments given on the command line win.
    """
    def __init__(self, args, config):
        for key in vars(args):
            setattr(self, key, getattr(args, key))

        if not hasattr(self, 'connection'):
            if config.has_option('default', 'connection'):
                self.connection = get_config_option(config.get,
                                                    'default', 'connection')
            else:
                log_error('No default connection specified')
                sys.exit(1)

        if self.connection not in config.sections():
            log_error('connection "{0}" not found'.format(self.connection))
            sys.exit(1)

        for option, getter in OPTIONS:
            if hasattr(self, option):
                continue
            if config.has_option(self.connection, option):
                value = get_config_option(getattr(config, getter),
                                          self.connection, option)
                setattr(self, option, value)
            elif option in DEFAULTS:
                setattr(self, option, DEFAULTS[option])

        if not hasattr(self, 'base'):
            log_error('No base URL specified')
            sys.exit(1)

        log_setDebugLevel(self.debug)
        log_setQuiet(self.quiet)

        self.connections = config.sections()
        self._client = None

        log_info("Using [{0}] ({1})".format(self.connection,
                                            safe_url(self.base)))

        log_debug('Settings debug dump:', 3)
        for key in vars(self):
            if key in SECRET_OPTIONS:
                continue
            value = getattr(self, key)
            if key in URL_OPTIONS:
                value = safe_url(value)
            log_debug('{0}, {1}'.format(key, value), 3)

    def api_key(self):
        """Return the API key, or None for anonymous access.

        key_file is read on every call so a rotated key is picked up.
        """
        if hasattr(self, 'key'):
            return self.key
        if hasattr(self, 'key_file'):
            return read_key_file(self.key_file)
        return None

    @property
    def client(self):
        if self._client is None:
            if hasattr(self, 'key'):
                api_key = self.key
            elif hasattr(self, 'key_file'):
                api_key = self.api_key
            else:
                api_key = None
            self._client = Client(self.base, api_key,
                                  auth_method=getattr(self, 'auth_method',
                                                      None),
                                  timeout=self.timeout,
                                  verify=not self.insecure)
        return self._client
