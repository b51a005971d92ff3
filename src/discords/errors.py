"""Error types raised by the discord search engine."""

from __future__ import annotations


class DiscordSearchError(Exception):
    """Base class for every failure raised by :mod:`discords`."""


class InvalidParameterError(DiscordSearchError, ValueError):
    """A search parameter violates its contract."""


class InvalidDimensionError(InvalidParameterError):
    """A PAA target length is not smaller than the input length."""


class InvalidAlphabetError(InvalidParameterError):
    """The SAX alphabet size is outside the supported 3..7 range."""


class OutOfRangeError(InvalidParameterError):
    """A requested sub-range falls outside the series bounds."""


class DegenerateInputError(DiscordSearchError, ValueError):
    """The input cannot be z-normalized (zero standard deviation)."""


class LookupMiscompareError(DiscordSearchError, LookupError):
    """A word queried against the trie is absent or has the wrong length.

    This signals a bug in index construction, not a user error.
    """


class SearchCancelledError(DiscordSearchError):
    """The caller's cancellation hook asked the search to stop."""
