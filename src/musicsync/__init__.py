# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""MusicSync - Keep a music library and its removable-disk mirror in step."""

from musicsync.__about__ import __version__

__all__ = ["__version__"]
