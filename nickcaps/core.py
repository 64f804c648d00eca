# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

import nickcaps
from nickcaps.config import config
from nickcaps.events import events
from nickcaps.logfacility import log


class Core:
    """Owns the host components (users, chat rooms and plugins) and drives
    their startup, rehash and shutdown.
    """

    __slots__ = ("users", "chatrooms", "pluginhandler")

    COMPONENTS = {"cli", "users", "chatrooms", "pluginhandler"}

    def __init__(self):

        self.users = None
        self.chatrooms = None
        self.pluginhandler = None

    def init_components(self, enabled_components=None):

        if enabled_components is None:
            enabled_components = self.COMPONENTS

        if "cli" in enabled_components:
            from nickcaps.cli import cli
            cli.enable_logging()

        config.load_config()
        log.add_debug("Starting %(program)s %(version)s", {
            "program": nickcaps.__application_name__,
            "version": nickcaps.__version__
        })

        # Plugins talk to users and rooms, create those first
        if "users" in enabled_components:
            from nickcaps.users import Users
            self.users = Users()

        if "chatrooms" in enabled_components:
            from nickcaps.chatrooms import ChatRooms
            self.chatrooms = ChatRooms()

        if "pluginhandler" in enabled_components:
            from nickcaps.pluginsystem import PluginHandler
            self.pluginhandler = PluginHandler()

    def start(self):
        events.emit("start")

    def rehash(self):
        log.add(_("Rehashing configuration file %s"), config.config_file_path)
        config.reload_config()

    def quit(self):

        events.emit("quit")
        events.clear()
        log.set_session_levels(())

        self.users = None
        self.chatrooms = None
        self.pluginhandler = None


core = Core()
