# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

import gettext
import os

CURRENT_PATH = os.path.dirname(os.path.realpath(__file__))
LOCALE_PATH = os.path.join(CURRENT_PATH, "locale")
TRANSLATION_DOMAIN = "nickcaps"


def apply_translations(language=None):

    if language:
        os.environ["LANGUAGE"] = language

    # Install translations for Python, falls back to untranslated strings
    gettext.install(TRANSLATION_DOMAIN, LOCALE_PATH)
