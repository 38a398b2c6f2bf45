"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the ledger and statistics live in services.
"""

import importlib

from config import get_settings_module

from attendance_ledger.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    print(container.statistics_service.session_stats(1).to_dict())
    for row in container.statistics_service.top_performers(3):
        print(row.participant.name, row.attendance_rate)

    record = container.attendance_service.cycle_status(4, 3)
    print("cycled:", record.to_dict())


if __name__ == "__main__":
    main()
