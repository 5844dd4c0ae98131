"""Entry point: python -m g42warehouse [summary|resave]

- No args / "summary": load saved state and print both registries
- "resave":            load saved state and write it back, dropping malformed records
"""

from __future__ import annotations

import logging
import sys

from g42warehouse.config import load_config
from g42warehouse.errors import PersistenceError
from g42warehouse.warehouse import Warehouse


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _print_summary(warehouse: Warehouse) -> None:
    print(f"Employees ({len(warehouse.employees)}):")
    for e in warehouse.employees:
        print(f"  #{e.id} {e.tag:<17} {e.name:<24} {e.experience_level.name.title():<7} salary={e.salary}")
    print(f"Sections ({len(warehouse.sections)}):")
    for s in warehouse.sections:
        temp = "-" if s.temperature is None else f"{s.temperature:g}C"
        print(f"  {s.tag:<20} {s.name:<24} {s.location!s:<12} area={s.area:g} {s.status.name.lower()} {temp}")


def _run(cmd: str) -> int:
    config = load_config()
    _setup_logging(config.log_level)

    warehouse = Warehouse(config)
    try:
        warehouse.load()
        if cmd == "resave":
            warehouse.save()
    except PersistenceError as e:
        logging.getLogger("g42warehouse").error("%s", e)
        return 1

    _print_summary(warehouse)
    return 0


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "summary"

    if cmd in ("summary", "resave"):
        sys.exit(_run(cmd))
    else:
        print("Usage: python -m g42warehouse [summary|resave]")
        print("  summary  Print saved employees and sections (default)")
        print("  resave   Load and rewrite the data files, dropping malformed records")
        sys.exit(1)


if __name__ == "__main__":
    main()
