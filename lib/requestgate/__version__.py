"""
Defines the request gate version as ``__version__``.

Calendar versioning (http://calver.org) is used with the scheme YYYY.N, where
YYYY is the full four-digit year and N is the release number within that
year.
"""
__version__ = '2026.1'
