__version__ = '0.1.0'

CONFIG_FILE = '~/.bugzlinkrc'

USER_AGENT = 'bugzlink/{0}'.format(__version__)
