from __future__ import annotations

import os
from pathlib import Path

APP_ENV_CONFIG = "ZONETIME_CONFIG"


def project_root() -> Path:
    """
    Repository/project root directory.
    Contains zonetime/, config/, tests/.
    """
    return Path(__file__).parent.parent.resolve()


def config_path() -> Path:
    """
    Timeline config file.

    Resolution order:
    1. ZONETIME_CONFIG env var (explicit override)
    2. <project_root>/config/timeline.yaml (default)
    """
    if os.environ.get(APP_ENV_CONFIG):
        return Path(os.environ[APP_ENV_CONFIG]).expanduser().resolve()
    return project_root() / "config" / "timeline.yaml"
