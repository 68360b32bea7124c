"""Example: drive the service layer without Flask.

Controllers are a thin layer; the clocking rules live in the services.
"""

import importlib
import time

from config import get_settings_module

from timetrack.container import build_container
from timetrack.location.provider import CoordinatesProvider


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    clock = container.clock_service

    clock.clock_in("demo", provider=CoordinatesProvider(21.02776, 105.83416))
    clock.start_break("demo", "Break")
    time.sleep(2)
    clock.end_break("demo")
    time.sleep(1)
    record = clock.clock_out("demo")

    print(container.record_service.to_ui(record))
    print(container.record_service.history_ui("demo", limit=5))


if __name__ == "__main__":
    main()
