"""
Settings selection.

MODE (or APP_ENV) picks one settings class; each class layers its own
env/.env.<mode> file under the process environment.
"""
from __future__ import annotations

import os

from .base import ROOT, AppSettings
from .dev import DevSettings
from .local import LocalSettings
from .prod import ProdSettings
from .stage import StageSettings
from .test import TestSettings

MODE = (os.environ.get("MODE") or os.environ.get("APP_ENV") or "local").lower()

_BY_MODE: dict[str, type[AppSettings]] = {
    "local": LocalSettings,
    "dev": DevSettings,
    "test": TestSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}

SettingsClass = _BY_MODE.get(MODE, LocalSettings)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "MODE", "ROOT"]
