# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

import os
import shutil

from unittest import TestCase

from nickcaps.config import config
from nickcaps.core import core
from nickcaps.events import events

DATA_FOLDER_PATH = os.path.join(os.path.dirname(os.path.realpath(__file__)), "temp_data")


class ChatRoomsTest(TestCase):

    def setUp(self):

        config.set_config_file(os.path.join(DATA_FOLDER_PATH, "temp_config"))
        core.init_components(enabled_components={"users", "chatrooms"})

        self.room_events = []

        for event_name in ("user-joined-room", "user-left-room"):
            events.connect(event_name, self._room_event)

        for nick in ("alice", "bob"):
            core.users.add_user(nick)

    def tearDown(self):
        core.quit()

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(DATA_FOLDER_PATH, ignore_errors=True)

    def _room_event(self, room, user):
        self.room_events.append((room, user))

    def test_join_leave_room(self):

        self.assertTrue(core.chatrooms.join_room("alice", "#room"))
        self.assertTrue(core.chatrooms.join_room("bob", "#room"))

        # Joining twice changes nothing
        self.assertTrue(core.chatrooms.join_room("alice", "#room"))

        self.assertEqual(core.chatrooms.rooms["#room"].users, ["alice", "bob"])
        self.assertEqual(core.users.get_user_rooms("alice"), ["#room"])

        self.assertTrue(core.chatrooms.leave_room("alice", "#room"))
        self.assertFalse(core.chatrooms.leave_room("alice", "#room"))
        self.assertEqual(core.users.get_user_rooms("alice"), [])

        # Last user leaving removes the room
        self.assertTrue(core.chatrooms.leave_room("bob", "#room"))
        self.assertNotIn("#room", core.chatrooms.rooms)

        self.assertEqual(self.room_events, [
            ("#room", "alice"), ("#room", "bob"), ("#room", "alice"), ("#room", "bob")
        ])

    def test_invalid_room_name(self):

        self.assertFalse(core.chatrooms.join_room("alice", "room"))
        self.assertNotIn("room", core.chatrooms.rooms)
        self.assertEqual(list(core.users.users["alice"].numerics), [(403, "alice room :No such channel")])

    def test_unknown_user(self):

        with self.assertRaises(KeyError):
            core.chatrooms.join_room("nobody", "#room")

        with self.assertRaises(KeyError):
            core.users.change_nick("nobody", "somebody")

    def test_room_modes(self):

        self.assertTrue(core.chatrooms.register_mode("moderated", "m"))
        self.assertTrue(core.chatrooms.register_mode("secret", "s"))

        # Conflicting name or letter
        self.assertFalse(core.chatrooms.register_mode("moderated", "x"))
        self.assertFalse(core.chatrooms.register_mode("muted", "m"))

        core.chatrooms.join_room("alice", "#room")

        with self.assertRaises(ValueError):
            core.chatrooms.set_room_mode("#room", "muted")

        with self.assertRaises(KeyError):
            core.chatrooms.set_room_mode("#missing", "moderated")

        core.chatrooms.set_room_mode("#room", "secret")
        core.chatrooms.set_room_mode("#room", "moderated")

        self.assertTrue(core.chatrooms.is_mode_set("#room", "moderated"))
        self.assertFalse(core.chatrooms.is_mode_set("#missing", "moderated"))
        self.assertEqual(core.chatrooms.get_mode_string("#room"), "+ms")

        core.chatrooms.set_room_mode("#room", "secret", enabled=False)
        self.assertEqual(core.chatrooms.get_mode_string("#room"), "+m")

        self.assertTrue(core.chatrooms.unregister_mode("moderated"))
        self.assertFalse(core.chatrooms.unregister_mode("moderated"))
        self.assertFalse(core.chatrooms.is_mode_set("#room", "moderated"))

    def test_change_nick(self):

        core.chatrooms.join_room("bob", "#one")
        core.chatrooms.join_room("alice", "#one")
        core.chatrooms.join_room("alice", "#two")

        self.assertTrue(core.users.change_nick("alice", "carol"))

        self.assertNotIn("alice", core.users.users)
        self.assertEqual(core.users.users["carol"].nick, "carol")
        self.assertEqual(core.chatrooms.rooms["#one"].users, ["bob", "carol"])
        self.assertEqual(core.chatrooms.rooms["#two"].users, ["carol"])
        self.assertEqual(core.users.get_user_rooms("carol"), ["#one", "#two"])

    def test_change_nick_in_use(self):

        self.assertFalse(core.users.change_nick("alice", "bob"))
        self.assertEqual(list(core.users.users["alice"].numerics), [(433, "alice bob :Nickname is already in use.")])

    def test_remove_user(self):

        core.chatrooms.join_room("alice", "#one")
        core.chatrooms.join_room("bob", "#one")
        core.chatrooms.join_room("alice", "#two")

        core.users.remove_user("alice")

        self.assertNotIn("alice", core.users.users)
        self.assertEqual(core.chatrooms.rooms["#one"].users, ["bob"])
        self.assertNotIn("#two", core.chatrooms.rooms)

    def test_privileges(self):

        core.users.add_user("oper", is_operator=True)

        self.assertTrue(core.users.is_privileged("oper"))
        self.assertFalse(core.users.is_privileged("alice"))
        self.assertFalse(core.users.is_privileged("nobody"))

        core.users.set_operator("alice")
        core.users.set_operator("oper", is_operator=False)

        self.assertTrue(core.users.is_privileged("alice"))
        self.assertFalse(core.users.is_privileged("oper"))
