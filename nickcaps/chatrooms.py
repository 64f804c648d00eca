# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

from nickcaps.core import core
from nickcaps.events import events
from nickcaps.logfacility import log


class RoomMode:
    __slots__ = ("name", "letter")

    def __init__(self, name, letter):

        self.name = name
        self.letter = letter


class Room:
    __slots__ = ("name", "users", "modes")

    def __init__(self, name):

        self.name = name
        self.users = []
        self.modes = set()


class ChatRooms:
    __slots__ = ("rooms", "room_modes")

    ROOM_NAME_PREFIXES = ("#", "&")

    def __init__(self):

        self.rooms = {}
        self.room_modes = {}

        events.connect("quit", self._quit)

    def _quit(self):
        self.rooms.clear()
        self.room_modes.clear()

    # Modes #

    def register_mode(self, name, letter):

        for mode in self.room_modes.values():
            if name == mode.name or letter == mode.letter:
                log.add(_("Conflicting room mode %(name)s (+%(letter)s), already provided as %(existing)s"), {
                    "name": name,
                    "letter": letter,
                    "existing": f"{mode.name} (+{mode.letter})"
                })
                return False

        self.room_modes[name] = RoomMode(name, letter)
        log.add_debug("Registered room mode %(name)s (+%(letter)s)", {"name": name, "letter": letter})
        return True

    def unregister_mode(self, name):

        if self.room_modes.pop(name, None) is None:
            return False

        for room_obj in self.rooms.values():
            room_obj.modes.discard(name)

        log.add_debug("Unregistered room mode %s", name)
        return True

    def set_room_mode(self, room, name, enabled=True):

        if name not in self.room_modes:
            raise ValueError(f"Unknown room mode {name}")

        room_obj = self.rooms.get(room)

        if room_obj is None:
            raise KeyError(f"Unknown room {room}")

        if enabled:
            room_obj.modes.add(name)
        else:
            room_obj.modes.discard(name)

        events.emit("room-mode", room, name, enabled)

    def is_mode_set(self, room, name):

        room_obj = self.rooms.get(room)
        return room_obj is not None and name in room_obj.modes

    def get_mode_string(self, room):

        room_obj = self.rooms.get(room)

        if room_obj is None:
            return ""

        letters = sorted(self.room_modes[name].letter for name in room_obj.modes)
        return "+" + "".join(letters) if letters else ""

    # Membership #

    def join_room(self, nick, room):
        """Attempts to add a user to a room, creating the room on first join.
        Plugins can refuse the join, in which case False is returned."""

        user_obj = core.users.users.get(nick)

        if user_obj is None:
            raise KeyError(f"Unknown user {nick}")

        if not room.startswith(self.ROOM_NAME_PREFIXES):
            core.users.send_numeric(nick, 403, f"{nick} {room} :No such channel")
            return False

        if room in user_obj.rooms:
            return True

        if core.pluginhandler is not None and core.pluginhandler.user_join_room_event(room, nick, nick) is None:
            log.add_activity("Refused join of %(nick)s to room %(room)s", {"nick": nick, "room": room})
            return False

        room_obj = self.rooms.get(room)

        if room_obj is None:
            self.rooms[room] = room_obj = Room(room)

        room_obj.users.append(nick)
        user_obj.rooms.append(room)

        log.add_activity("%(nick)s joined room %(room)s", {"nick": nick, "room": room})
        events.emit("user-joined-room", room, nick)
        return True

    def leave_room(self, nick, room):

        room_obj = self.rooms.get(room)

        if room_obj is None or nick not in room_obj.users:
            return False

        room_obj.users.remove(nick)
        user_obj = core.users.users.get(nick)

        if user_obj is not None and room in user_obj.rooms:
            user_obj.rooms.remove(room)

        if not room_obj.users:
            # Last user left, the room goes away along with its modes
            del self.rooms[room]

        log.add_activity("%(nick)s left room %(room)s", {"nick": nick, "room": room})
        events.emit("user-left-room", room, nick)
        return True

    def rename_member(self, room, nick, new_nick):

        room_obj = self.rooms.get(room)

        if room_obj is None or nick not in room_obj.users:
            return

        room_obj.users[room_obj.users.index(nick)] = new_nick
