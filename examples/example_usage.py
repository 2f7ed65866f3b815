"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the command API lives in the services.
"""

import importlib

from config import get_settings_module

from src.lab_attendance.lab_attendance.container import build_container
from src.lab_attendance.lab_attendance.core.enums import RoomKind


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(storage_config=settings.STORAGE_CONFIG)
    container.persistence.load()
    container.room_service.seed_defaults()

    lab = container.room_service.list_rooms(RoomKind.LAB)[0]
    container.attendance_service.add_attendance(
        RoomKind.LAB, date="2024-01-10", room_id=lab.id, slot="9:10-11:10", count=25
    )
    print(container.report_service.export_table(RoomKind.LAB, "2024-01-10"))
    container.persistence.shutdown()


if __name__ == "__main__":
    main()
