# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

import os

from ast import literal_eval
from importlib import import_module

from nickcaps.config import config
from nickcaps.core import core
from nickcaps.events import events
from nickcaps.logfacility import log


returncode = {
    "break": 0,  # stop asking other plugins, the host goes ahead
    "zap": 1,    # stop asking other plugins, the host refuses the action
    "pass": 2    # ask the next plugin, same as returning None
}


class BasePlugin:
    """Parent class of every plugin in nickcaps/plugins/. A plugin package
    exposes a Plugin subclass and a PLUGININFO file."""

    # Set by PluginHandler when the plugin is loaded
    internal_name = None
    human_name = None
    config = None
    core = None

    def init(self):
        # Host components are available from here on
        pass

    def loaded_notification(self):
        pass

    def disable(self):
        pass

    def rehash_notification(self):
        # The config file was read again
        pass

    def user_join_room_event(self, room, user, nick):
        # Return returncode["zap"] to refuse the join
        pass

    def user_nick_change_event(self, user, new_nick):
        # Return returncode["zap"] to refuse the nick change
        pass

    def log(self, msg, msg_args=None):
        log.add(f"{self.human_name}: {msg}", msg_args)

    def send_numeric(self, user, code, text):
        core.users.send_numeric(user, code, text)


class PluginHandler:
    __slots__ = ("plugin_folder", "enabled_plugins")

    def __init__(self):

        self.plugin_folder = os.path.join(os.path.dirname(os.path.realpath(__file__)), "plugins")
        self.enabled_plugins = {}

        events.connect("start", self._start)
        events.connect("rehash", self._rehash)
        events.connect("quit", self._quit)

    def _start(self):

        BasePlugin.config = config
        BasePlugin.core = core

        if not config.sections["plugins"]["enable"]:
            log.add_debug("Plugins are disabled")
            return

        for plugin_name in config.sections["plugins"]["enabled"][:]:
            self.enable_plugin(plugin_name)

    def _rehash(self):
        self._trigger_event("rehash_notification", ())

    def _quit(self):

        for plugin_name in list(self.enabled_plugins):
            self.disable_plugin(plugin_name, is_permanent=False)

    def get_plugin_info(self, plugin_name):
        """Reads the 'Key = value' lines of a plugin's PLUGININFO file. Values
        are Python literals, _("...") marks a translatable one."""

        plugin_info = {}
        info_path = os.path.join(self.plugin_folder, plugin_name, "PLUGININFO")

        if not os.path.isfile(info_path):
            return plugin_info

        with open(info_path, encoding="utf-8") as file_handle:
            for line in file_handle:
                key, _separator, value = (part.strip() for part in line.partition("="))

                if not key or not value:
                    continue

                if value.startswith("_(") and value.endswith(")"):
                    plugin_info[key] = _(literal_eval(value[2:-1]))
                else:
                    plugin_info[key] = literal_eval(value)

        return plugin_info

    def enable_plugin(self, plugin_name):

        if plugin_name in self.enabled_plugins:
            return False

        if not os.path.isdir(os.path.join(self.plugin_folder, plugin_name)):
            log.add(_("Unable to load plugin %s, it is not installed"), plugin_name)
            return False

        try:
            plugin = import_module(f"nickcaps.plugins.{plugin_name}").Plugin()
            plugin.internal_name = plugin_name
            plugin.human_name = self.get_plugin_info(plugin_name).get("Name", plugin_name)
            plugin.init()

        except Exception:
            from traceback import format_exc
            log.add(_("Unable to load plugin %(name)s\n%(trace)s"), {"name": plugin_name, "trace": format_exc()})
            return False

        self.enabled_plugins[plugin_name] = plugin

        if plugin_name not in config.sections["plugins"]["enabled"]:
            config.sections["plugins"]["enabled"].append(plugin_name)

        plugin.loaded_notification()
        log.add(_("Loaded plugin %s"), plugin.human_name)
        return True

    def disable_plugin(self, plugin_name, is_permanent=True):
        """Unloads a plugin. Unless is_permanent is False, the plugin is also
        dropped from [plugins] enabled for the rest of the session."""

        plugin = self.enabled_plugins.pop(plugin_name, None)

        if plugin is None:
            return False

        if is_permanent and plugin_name in config.sections["plugins"]["enabled"]:
            config.sections["plugins"]["enabled"].remove(plugin_name)

        try:
            plugin.disable()

        except Exception as error:
            self.show_plugin_error(plugin_name, error)
            return False

        log.add(_("Unloaded plugin %s"), plugin.human_name)
        return True

    @staticmethod
    def show_plugin_error(plugin_name, error):

        from traceback import format_tb

        log.add(_("Plugin %(name)s failed with error %(error_type)s: %(error)s.\nTrace: %(trace)s"), {
            "name": plugin_name,
            "error_type": type(error).__name__,
            "error": error,
            "trace": "".join(format_tb(error.__traceback__))
        })

    def _trigger_event(self, function_name, args):
        """Asks every enabled plugin in turn. Returns None if a plugin
        refused the action, otherwise args."""

        for plugin_name, plugin in list(self.enabled_plugins.items()):
            try:
                result = getattr(plugin, function_name)(*args)

            except Exception as error:
                self.show_plugin_error(plugin_name, error)
                continue

            if result is None or result == returncode["pass"]:
                continue

            if result == returncode["zap"]:
                return None

            if result == returncode["break"]:
                break

            log.add_debug("Plugin %s returned unknown value %r, ignoring", (plugin_name, result))

        return args

    def user_join_room_event(self, room, user, nick):
        return self._trigger_event("user_join_room_event", (room, user, nick))

    def user_nick_change_event(self, user, new_nick):
        return self._trigger_event("user_nick_change_event", (user, new_nick))
