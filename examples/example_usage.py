"""Example: drive the services directly, without Flask.

Controllers are a thin layer; the rules live in the services and pure functions.
"""

import importlib

from config import get_settings_module

from src.dayflow.dayflow.container import build_container
from src.dayflow.dayflow.tasks.model import Task


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    print(container.attendance_service.get_session("emp-1"))
    added = container.notification_service.run_sweep(
        [Task.from_dict({"id": "T1", "title": "Quarterly report", "status": "PENDING", "dueDate": "2024-01-01"})]
    )
    for n in added:
        print(n.title, "-", n.message)


if __name__ == "__main__":
    main()
