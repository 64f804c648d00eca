# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

from collections import deque

from nickcaps.core import core
from nickcaps.events import events
from nickcaps.logfacility import log


class User:
    __slots__ = ("nick", "is_operator", "rooms", "numerics")

    # Numeric replies kept per user, oldest first
    MAX_NUMERICS = 50

    def __init__(self, nick, is_operator=False):

        self.nick = nick
        self.is_operator = is_operator
        self.rooms = []
        self.numerics = deque(maxlen=self.MAX_NUMERICS)


class Users:
    __slots__ = ("users",)

    def __init__(self):

        self.users = {}

        events.connect("quit", self._quit)

    def _quit(self):
        self.users.clear()

    def _get_user(self, nick):

        user_obj = self.users.get(nick)

        if user_obj is None:
            raise KeyError(f"Unknown user {nick}")

        return user_obj

    def add_user(self, nick, is_operator=False):

        if nick in self.users:
            return self.users[nick]

        self.users[nick] = user_obj = User(nick, is_operator)
        log.add_debug("Added user %s", nick)

        return user_obj

    def remove_user(self, nick):

        user_obj = self.users.get(nick)

        if user_obj is None:
            return

        if core.chatrooms is not None:
            for room in user_obj.rooms[:]:
                core.chatrooms.leave_room(nick, room)

        del self.users[nick]
        log.add_debug("Removed user %s", nick)

    def set_operator(self, nick, is_operator=True):
        self._get_user(nick).is_operator = is_operator

    def is_privileged(self, nick):

        user_obj = self.users.get(nick)
        return user_obj is not None and user_obj.is_operator

    def get_user_rooms(self, nick):
        """Returns the rooms a user sits in, in the order they were joined."""

        user_obj = self.users.get(nick)

        if user_obj is None:
            return []

        return list(user_obj.rooms)

    def change_nick(self, nick, new_nick):
        """Attempts to rename a user. Plugins can refuse the change, in which
        case False is returned and the user keeps the old nick."""

        user_obj = self._get_user(nick)

        if new_nick == nick:
            return True

        if new_nick in self.users:
            self.send_numeric(nick, 433, f"{nick} {new_nick} :Nickname is already in use.")
            return False

        if core.pluginhandler is not None and core.pluginhandler.user_nick_change_event(nick, new_nick) is None:
            log.add_activity("Refused nick change from %(nick)s to %(new_nick)s", {"nick": nick, "new_nick": new_nick})
            return False

        del self.users[nick]
        user_obj.nick = new_nick
        self.users[new_nick] = user_obj

        if core.chatrooms is not None:
            for room in user_obj.rooms:
                core.chatrooms.rename_member(room, nick, new_nick)

        log.add_activity("%(nick)s is now known as %(new_nick)s", {"nick": nick, "new_nick": new_nick})
        events.emit("user-nick-changed", nick, new_nick)
        return True

    def send_numeric(self, nick, code, text):

        user_obj = self.users.get(nick)

        if user_obj is None:
            return

        user_obj.numerics.append((code, text))
        log.add_debug("Numeric %(code)03d to %(nick)s: %(text)s", {"code": code, "nick": nick, "text": text})
        events.emit("user-numeric", nick, code, text)
