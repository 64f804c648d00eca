# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

from nickcaps.config import config
from nickcaps.events import events


class LogLevel:
    DEFAULT = "default"
    ACTIVITY = "activity"
    DEBUG = "debug"


class Logger:
    """Publishes log lines on the 'log-message' event.

    Plain messages always go out. Room and nick activity, as well as debug
    output, only go out while their level is enabled, either permanently
    through [logging] debugmodes or for the current session.
    """

    __slots__ = ("_enabled_levels", "_session_levels")

    PREFIXES = {
        LogLevel.ACTIVITY: "Activity",
        LogLevel.DEBUG: "Debug"
    }

    def __init__(self):
        self._enabled_levels = {LogLevel.DEFAULT}
        self._session_levels = set()

    def init_log_levels(self):
        self._enabled_levels = {
            LogLevel.DEFAULT,
            *config.sections["logging"].get("debugmodes", ()),
            *self._session_levels
        }

    def set_session_levels(self, levels):
        """Enables levels until quit, regardless of what the config file
        says. A rehash keeps them."""

        self._session_levels = set(levels)
        self.init_log_levels()

    def _emit(self, level, msg, msg_args):

        if level not in self._enabled_levels:
            return

        if msg_args is not None:
            msg %= msg_args

        prefix = self.PREFIXES.get(level)

        if prefix:
            msg = f"[{prefix}] {msg}"

        timestamp_format = config.sections["logging"].get("log_timestamp", "%x %X")
        events.emit("log-message", timestamp_format, msg, level)

    def add(self, msg, msg_args=None):
        self._emit(LogLevel.DEFAULT, msg, msg_args)

    def add_activity(self, msg, msg_args=None):
        self._emit(LogLevel.ACTIVITY, msg, msg_args)

    def add_debug(self, msg, msg_args=None):
        self._emit(LogLevel.DEBUG, msg, msg_args)


log = Logger()
