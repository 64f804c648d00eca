# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

from nickcaps.capsmap import DEFAULT_CAPS
from nickcaps.capsmap import CapsMap
from nickcaps.logfacility import log

DEFAULT_MIN_LENGTH = 4
DEFAULT_MAX_CAPS = 100

# Longest line a client can send, a nick can never be longer
MAX_NICK_LENGTH = 513


def _is_in_range(value, maximum):
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= maximum


class Decision:
    """Outcome of checking a nick. A denied decision carries the reason shown
    to the user."""

    __slots__ = ("_reason",)

    PASS = None

    def __init__(self, reason=None):
        self._reason = reason

    def __repr__(self):
        return "Decision.PASS" if self._reason is None else f"Decision.deny({self._reason!r})"

    @property
    def reason(self):
        return self._reason

    @property
    def is_denied(self):
        return self._reason is not None

    @classmethod
    def deny(cls, reason):
        return cls(reason)


Decision.PASS = Decision()


class NickPolicy:
    """Immutable set of thresholds deciding whether a nick has too many
    capitals.

    Nicks of at most min_length characters are always accepted. Longer nicks
    are rejected when their truncated capitals percentage reaches max_caps.
    """

    __slots__ = ("_min_length", "_max_caps", "_caps_map")

    def __init__(self, min_length=DEFAULT_MIN_LENGTH, max_caps=DEFAULT_MAX_CAPS, caps_map=None):

        self._min_length = min_length
        self._max_caps = max_caps
        self._caps_map = caps_map if caps_map is not None else CapsMap()

    def __repr__(self):
        return (f"{self.__class__.__name__}(min_length={self._min_length}, max_caps={self._max_caps}, "
                f"caps_map={self._caps_map!r})")

    @property
    def min_length(self):
        return self._min_length

    @property
    def max_caps(self):
        return self._max_caps

    @property
    def caps_map(self):
        return self._caps_map

    @classmethod
    def from_config(cls, options):
        """Builds a policy from the 'nickcaps' config section. Out of range
        thresholds are replaced by their defaults."""

        max_caps = options.get("maxcaps", DEFAULT_MAX_CAPS)
        min_length = options.get("minlen", DEFAULT_MIN_LENGTH)

        if not _is_in_range(max_caps, 100):
            log.add(_("<nickcaps:maxcaps> out of range, setting to default of %s."), DEFAULT_MAX_CAPS)
            max_caps = DEFAULT_MAX_CAPS

        if not _is_in_range(min_length, MAX_NICK_LENGTH):
            log.add(_("<nickcaps:minlen> out of range, setting to default of %s."), DEFAULT_MIN_LENGTH)
            min_length = DEFAULT_MIN_LENGTH

        return cls(min_length, max_caps, CapsMap(options.get("capsmap", DEFAULT_CAPS)))

    def caps_percent(self, nick):

        if not nick:
            return 0

        return (self._caps_map.count(nick) * 100) // len(nick)

    def should_reject(self, nick):

        if len(nick) <= self._min_length:
            # Not enough characters to count
            return False

        return self.caps_percent(nick) >= self._max_caps
