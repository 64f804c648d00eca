# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

from nickcaps.nickpolicy import Decision
from nickcaps.nickpolicy import NickPolicy
from nickcaps.pluginsystem import BasePlugin
from nickcaps.pluginsystem import returncode


class Plugin(BasePlugin):

    MODE_NAME = "nickcaps"
    MODE_LETTER = "U"

    ERR_CANNOTJOIN = 609
    ERR_CANTCHANGENICK = 447

    def __init__(self, *args, **kwargs):

        super().__init__(*args, **kwargs)

        # Replaced as a whole on rehash, never modified in place
        self.policy = NickPolicy()
        self.mode_registered = False

    def init(self):
        self.reload()
        self.mode_registered = self.core.chatrooms.register_mode(self.MODE_NAME, self.MODE_LETTER)

    def loaded_notification(self):

        policy = self.policy

        self.log("Nicks longer than %s characters cannot contain %s%% capital letters or more in +%s rooms.",
                 (policy.min_length, policy.max_caps, self.MODE_LETTER))

    def disable(self):

        if self.mode_registered and self.core.chatrooms is not None:
            self.core.chatrooms.unregister_mode(self.MODE_NAME)

        self.mode_registered = False

    def reload(self):
        self.policy = NickPolicy.from_config(self.config.sections["nickcaps"])

    def rehash_notification(self):
        self.reload()

    # Decisions #

    def check_join(self, user, room, nick):

        policy = self.policy

        if room not in self.core.chatrooms.rooms:
            # First join creates the room, nothing to check yet
            return Decision.PASS

        if not self.core.chatrooms.is_mode_set(room, self.MODE_NAME) or not policy.should_reject(nick):
            return Decision.PASS

        return Decision.deny(
            f"{user} {room} :Cannot join channel because nickname is invalid (+{self.MODE_LETTER}). "
            f"Nicknames longer than {policy.min_length} characters cannot contain "
            f"{policy.max_caps}% capital letters or more."
        )

    def check_nick_change(self, user, new_nick):

        policy = self.policy

        if self.core.users.is_privileged(user):
            return Decision.PASS

        for room in self.core.users.get_user_rooms(user):
            if self.core.chatrooms.is_mode_set(room, self.MODE_NAME) and policy.should_reject(new_nick):
                return Decision.deny(
                    f"{user} :Can't change nickname as nickname is invalid while on channel {room} "
                    f"(+{self.MODE_LETTER}). Nicknames longer than {policy.min_length} characters cannot "
                    f"contain {policy.max_caps}% capital letters or more."
                )

        return Decision.PASS

    # Host Events #

    def user_join_room_event(self, room, user, nick):

        decision = self.check_join(user, room, nick)

        if not decision.is_denied:
            return None

        self.send_numeric(user, self.ERR_CANNOTJOIN, decision.reason)
        return returncode["zap"]

    def user_nick_change_event(self, user, new_nick):

        decision = self.check_nick_change(user, new_nick)

        if not decision.is_denied:
            return None

        self.send_numeric(user, self.ERR_CANTCHANGENICK, decision.reason)
        return returncode["zap"]
