# SPDX-FileCopyrightText: 2026 The Resdetect Authors
# SPDX-License-Identifier: Apache-2.0

"""Version from installed package metadata."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("resdetect")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
