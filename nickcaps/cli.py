# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

import time

from nickcaps.events import events


class CLI:
    __slots__ = ()

    def enable_logging(self):
        events.connect("log-message", self._print_log_message)

    @staticmethod
    def _print_log_message(timestamp_format, msg, _level):

        if timestamp_format:
            msg = f"[{time.strftime(timestamp_format)}] {msg}"

        print(msg, flush=True)


cli = CLI()
