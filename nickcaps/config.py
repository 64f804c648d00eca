# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

import os

from ast import literal_eval
from collections import defaultdict
from configparser import ConfigParser
from configparser import Error as ConfigParserError

from nickcaps.events import events


class Config:
    """Read-only view of the config file.

    Options are kept in config.sections, a two-level dictionary of section
    and option names. Every option has a typed default. A value from the
    file that doesn't match the type of its default is replaced by the
    default.
    """

    __slots__ = ("config_file_path", "config_loaded", "sections", "defaults")

    def __init__(self):

        self.set_config_file(os.path.join(self.get_user_folder(), "config"))

        self.config_loaded = False
        self.sections = defaultdict(dict)
        self.defaults = {
            "nickcaps": {
                "minlen": 4,
                "maxcaps": 100,
                "capsmap": "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
            },
            "logging": {
                "debugmodes": [],
                "log_timestamp": "%x %X"
            },
            "plugins": {
                "enable": True,
                "enabled": ["nick_caps"]
            }
        }

    @staticmethod
    def get_user_folder():

        config_home = os.environ.get("XDG_CONFIG_HOME")

        if config_home:
            config_home = config_home.split(":")[0]
        else:
            config_home = os.path.join(os.path.expanduser("~"), ".config")

        return os.path.join(config_home, "nickcaps")

    def set_config_file(self, file_path):
        self.config_file_path = os.path.abspath(file_path)

    def load_config(self):

        if self.config_loaded:
            return

        from nickcaps.logfacility import log

        self.sections = defaultdict(dict)

        for section, option, value in self._read_config_file():
            self._set_option(section, option, value)

        # Options missing from the file
        for section, options in self.defaults.items():
            for option, default in options.items():
                if option not in self.sections[section]:
                    self.sections[section][option] = default[:] if isinstance(default, list) else default

        self.config_loaded = True

        log.init_log_levels()
        log.add_debug("Using configuration: %s", self.config_file_path)

        events.connect("quit", self._quit)

    def reload_config(self):
        """Discards every loaded value and reads the config file again.
        Listeners of the 'rehash' event pick up the new values."""

        if self.config_loaded:
            events.disconnect("quit", self._quit)
            self._quit()

        self.load_config()
        events.emit("rehash")

    def _read_config_file(self):

        from nickcaps.logfacility import log

        if not os.path.isfile(self.config_file_path):
            return []

        parser = ConfigParser(strict=False, interpolation=None, delimiters=("=",), comment_prefixes=("#", ";"))

        try:
            with open(self.config_file_path, encoding="utf-8") as file_handle:
                parser.read_file(file_handle)

        except (OSError, UnicodeDecodeError, ConfigParserError) as error:
            log.add(_("Unable to read config file %(path)s, using defaults: %(error)s"),
                    {"path": self.config_file_path, "error": error})
            return []

        return [
            (section, option, value)
            for section in parser.sections()
            for option, value in parser.items(section, raw=True)
        ]

    @staticmethod
    def _parse_value(value, default):
        """Converts the raw text of an option to the type of its default.
        Raises ValueError if that isn't possible."""

        if isinstance(default, str):
            if len(value) > 1 and value[0] == value[-1] and value[0] in ("'", '"'):
                # Quotes keep leading and trailing spaces
                return literal_eval(value)

            return value

        parsed = literal_eval(value)

        if isinstance(default, bool):
            if parsed in (0, 1) and not isinstance(parsed, (float, complex)):
                return bool(parsed)

        elif not isinstance(parsed, bool) and isinstance(parsed, type(default)):
            return parsed

        raise ValueError(f"expected {type(default).__name__}, got {parsed!r}")

    def _set_option(self, section, option, value):

        from nickcaps.logfacility import log

        if section not in self.defaults:
            log.add_debug("Unknown config section '%s'", section)
            return

        if option not in self.defaults[section]:
            log.add_debug("Unknown config option '%s' in section '%s'", (option, section))
            return

        default = self.defaults[section][option]

        try:
            self.sections[section][option] = self._parse_value(value, default)

        except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError):
            self.sections[section][option] = default[:] if isinstance(default, list) else default

            log.add(_("Config error: Couldn't decode '%(section)s' option '%(option)s' value '%(value)s', "
                      "value has been reset"), {
                "section": section,
                "option": option,
                "value": value if len(value) <= 120 else value[:120] + "…"
            })

    def _quit(self):
        self.config_loaded = False


config = Config()
