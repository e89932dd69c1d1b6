"""
wowsrp/errors.py
-------
Exceptions raised by the SRP engine and the session cipher.

All of them subclass ValueError so callers that already guard protocol
input with `except ValueError` keep working.
"""


class SRPError(ValueError):
    """Base class for every input rejected by wowsrp."""


class MalformedInputError(SRPError):
    """A buffer has the wrong type or length, or a credential is not usable."""


class DegenerateInputError(SRPError):
    """Input is well formed but cryptographically meaningless (e.g. an empty session key)."""
