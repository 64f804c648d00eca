# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

from collections import defaultdict


EVENT_NAMES = {
    # Application
    "log-message",
    "quit",
    "rehash",
    "start",

    # Rooms
    "room-mode",
    "user-joined-room",
    "user-left-room",

    # Users
    "user-nick-changed",
    "user-numeric",
}


class Events:
    """Calls every listener of a named event, in the order they connected.
    Listeners of 'quit' run in reverse, so components that started first
    shut down last."""

    __slots__ = ("_listeners",)

    def __init__(self):
        self._listeners = defaultdict(list)

    def connect(self, event_name, function):

        if event_name not in EVENT_NAMES:
            raise ValueError(f"Unknown event {event_name}")

        self._listeners[event_name].append(function)

    def disconnect(self, event_name, function):
        self._listeners[event_name].remove(function)

    def emit(self, event_name, *args):

        # Listeners may disconnect while the event is dispatched
        listeners = self._listeners[event_name][:]

        if event_name == "quit":
            listeners.reverse()

        for function in listeners:
            function(*args)

    def clear(self):
        self._listeners.clear()


events = Events()
