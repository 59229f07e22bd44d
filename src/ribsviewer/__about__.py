"""Metadata for ribsviewer package."""

from __future__ import annotations

__title__ = "ribsviewer"
__package_name__ = "ribsviewer"
__version__ = "0.1.0"
__description__ = "Stream a live router hierarchy to a remote tree viewer"
__email__ = "minipro@users.noreply.github.com"
__author__ = "minipro"
__github__ = "https://github.com/minipro/ribsviewer"
__docs__ = "https://github.com/minipro/ribsviewer#readme"
__tracker__ = "https://github.com/minipro/ribsviewer/issues"
__pypi__ = "https://pypi.org/project/ribsviewer/"
__license__ = "MIT"
__copyright__ = "Copyright 2019- minipro"
