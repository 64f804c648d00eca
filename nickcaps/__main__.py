# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

import sys

from nickcaps import run

sys.exit(run())
