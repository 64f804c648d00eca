# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

__application_name__ = "nickcaps"
__version__ = "1.0.0"
__author__ = "nickcaps Contributors"

from nickcaps.config import config
from nickcaps.core import core
from nickcaps.i18n import apply_translations
from nickcaps.logfacility import LogLevel
from nickcaps.logfacility import log


def check_arguments():
    """Parse command line arguments specified by the user."""

    import argparse

    parser = argparse.ArgumentParser(
        prog="nickcaps",
        description=_("Check nicknames against the capital letters limit of +U rooms")
    )
    parser.add_argument(
        "nicks", metavar=_("nick"), nargs="+",
        help=_("nickname to check")
    )
    parser.add_argument(
        "-c", "--config", metavar=_("file"),
        help=_("use non-default configuration file")
    )
    parser.add_argument(
        "-d", "--debug", action="store_true",
        help=_("show debug messages")
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"{__application_name__} {__version__}",
        help=_("display version and exit")
    )

    args = parser.parse_args()

    if args.config:
        config.set_config_file(args.config)

    return args.nicks, args.debug


def check_nicks(nicks):
    """Logs the verdict for each nick. Returns the number of rejected
    nicks."""

    plugin = core.pluginhandler.enabled_plugins.get("nick_caps")

    if plugin is None:
        log.add(_("Plugin %s is not enabled, nothing to check"), "nick_caps")
        return len(nicks)

    num_rejected = 0
    policy = plugin.policy

    for nick in nicks:
        msg_args = {
            "nick": nick,
            "percent": policy.caps_percent(nick),
            "min_length": policy.min_length,
            "max_caps": policy.max_caps
        }

        if policy.should_reject(nick):
            num_rejected += 1
            log.add(_("%(nick)s: rejected, %(percent)s%% capital letters (limit %(max_caps)s%% "
                      "above %(min_length)s characters)"), msg_args)
            continue

        log.add(_("%(nick)s: accepted, %(percent)s%% capital letters (limit %(max_caps)s%% "
                  "above %(min_length)s characters)"), msg_args)

    return num_rejected


def run():
    """Run application and return its exit code."""

    nicks, debug = check_arguments()
    core.init_components()

    if debug:
        log.set_session_levels((LogLevel.ACTIVITY, LogLevel.DEBUG))

    core.start()
    num_rejected = check_nicks(nicks)
    core.quit()

    return 1 if num_rejected else 0


apply_translations()
