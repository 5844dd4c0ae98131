"""Warehouse context: wires registries, assignments and persistence together.

Owns:
1. One registry per entity family (employees, sections)
2. The employee ↔ section assignment relation
3. One persistence gateway per family, pointed at the configured data dir
"""

from __future__ import annotations

import logging

from g42warehouse.assignments import Assignments
from g42warehouse.codec import EmployeeCodec, SectionCodec
from g42warehouse.config import WarehouseConfig
from g42warehouse.domain.employees import Employee
from g42warehouse.domain.sections import Section
from g42warehouse.errors import PersistenceError
from g42warehouse.gateway import LoadReport, PersistenceGateway
from g42warehouse.registry import Registry

logger = logging.getLogger(__name__)


class Warehouse:
    """Top-level holder of the warehouse's live state."""

    def __init__(self, config: WarehouseConfig) -> None:
        self.config = config
        self.employees: Registry[Employee] = Registry("employee")
        self.sections: Registry[Section] = Registry("section")
        self.assignments = Assignments(self.employees, self.sections)
        self._employee_store = PersistenceGateway(EmployeeCodec(), self.employees)
        self._section_store = PersistenceGateway(
            SectionCodec(strict_locations=config.storage.strict_locations), self.sections
        )

    # ── Assignments ───────────────────────────────────────────

    def assign(self, employee: Employee, section: Section) -> None:
        self.assignments.link(employee, section)

    def unassign(self, employee: Employee, section: Section) -> None:
        self.assignments.unlink(employee, section)

    # ── Persistence ───────────────────────────────────────────

    def save(self) -> None:
        """Write both registries under the data directory. Links are not persisted."""
        storage = self.config.storage
        try:
            storage.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create data directory {storage.data_dir}: {e}") from e
        self._employee_store.save(storage.employees_path)
        self._section_store.save(storage.sections_path)

    def load(self) -> dict[str, LoadReport]:
        """Replace both registries with the saved state. All assignments are dropped."""
        storage = self.config.storage
        return {
            "employees": self._employee_store.load(storage.employees_path),
            "sections": self._section_store.load(storage.sections_path),
        }
