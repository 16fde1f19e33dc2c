"""
Python Bugzilla REST/JSONRPC Interface

Client library and command-line interface to bugzilla to allow:
 - getting bug info
 - updating bugs
 - linking bugs to GitHub pull requests

Requirements
------------
 - Python 3.8 or later
 - requests
 - pydantic 2

Classes
-------
 - Client - Pythonic interface to the Bugzilla REST and JSONRPC APIs

"""

from bugzlink.definitions import __version__

__license__ = """This following source code is licensed under the GPL v2 License."""
