"""Employee ↔ section assignment relation.

The relation lives outside both entity families so neither side owns the
other. Both directions are kept in step by every mutation; there is no way to
record a one-sided link.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from g42warehouse.domain.employees import Employee
from g42warehouse.domain.sections import Section
from g42warehouse.registry import Registry

logger = logging.getLogger(__name__)


def _require_employee(value: object) -> Employee:
    if not isinstance(value, Employee):
        raise TypeError(f"expected an Employee, got {type(value).__name__}")
    return value


def _require_section(value: object) -> Section:
    if not isinstance(value, Section):
        raise TypeError(f"expected a Section, got {type(value).__name__}")
    return value


class Assignments:
    """Symmetric many-to-many links between employees and sections."""

    def __init__(self, employees: Registry[Employee], sections: Registry[Section]) -> None:
        self._employees = employees
        self._sections = sections
        self._sections_by_employee: dict[Employee, set[Section]] = {}
        self._employees_by_section: dict[Section, set[Employee]] = {}
        employees.on_clear(self._forget)
        sections.on_clear(self._forget)

    def link(self, employee: Employee, section: Section) -> None:
        """Assign ``employee`` to ``section``. No-op when already linked."""
        _require_employee(employee)
        _require_section(section)
        if employee not in self._employees:
            raise TypeError(f"{employee!r} is not registered")
        if section not in self._sections:
            raise TypeError(f"{section!r} is not registered")
        sections = self._sections_by_employee.setdefault(employee, set())
        if section in sections:
            return
        sections.add(section)
        self._employees_by_section.setdefault(section, set()).add(employee)
        logger.debug("Linked %r -> %r", employee, section)

    def unlink(self, employee: Employee, section: Section) -> None:
        """Remove the assignment from both sides. No-op when not linked."""
        _require_employee(employee)
        _require_section(section)
        sections = self._sections_by_employee.get(employee)
        if not sections or section not in sections:
            return
        self._discard(self._sections_by_employee, employee, section)
        self._discard(self._employees_by_section, section, employee)
        logger.debug("Unlinked %r -> %r", employee, section)

    def is_linked(self, employee: Employee, section: Section) -> bool:
        return section in self._sections_by_employee.get(_require_employee(employee), ())

    def sections_for(self, employee: Employee) -> frozenset[Section]:
        return frozenset(self._sections_by_employee.get(_require_employee(employee), ()))

    def employees_for(self, section: Section) -> frozenset[Employee]:
        return frozenset(self._employees_by_section.get(_require_section(section), ()))

    def links_for(self, entity: Employee | Section) -> frozenset[Employee] | frozenset[Section]:
        """Entities on the other side of ``entity``'s links."""
        if isinstance(entity, Employee):
            return self.sections_for(entity)
        if isinstance(entity, Section):
            return self.employees_for(entity)
        raise TypeError(f"expected an Employee or Section, got {type(entity).__name__}")

    def __len__(self) -> int:
        return sum(len(s) for s in self._sections_by_employee.values())

    @staticmethod
    def _discard(index: dict, key: object, value: object) -> None:
        values = index.get(key)
        if values is None:
            return
        values.discard(value)
        if not values:
            del index[key]

    def _forget(self, dropped: Iterable[Employee | Section]) -> None:
        """Drop every link touching an entity that left its registry."""
        for entity in dropped:
            if isinstance(entity, Employee):
                for section in self._sections_by_employee.pop(entity, set()):
                    self._discard(self._employees_by_section, section, entity)
            else:
                for employee in self._employees_by_section.pop(entity, set()):
                    self._discard(self._sections_by_employee, employee, entity)
