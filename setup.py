#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 nickcaps Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

from setuptools import setup  # pylint: disable=import-error


if __name__ == "__main__":
    setup()
