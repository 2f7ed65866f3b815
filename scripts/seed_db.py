from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.lab_attendance.lab_attendance.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    storage_config = dict(settings.STORAGE_CONFIG)

    container = build_container(storage_config=storage_config)
    source = container.persistence.load()
    seeded = container.room_service.seed_defaults()
    container.persistence.shutdown(wait=True)

    print(
        f"OK: Seeded {seeded} rooms (loaded from {source}) -> "
        f"{container.persistence.local_path}"
    )


if __name__ == "__main__":
    main()
