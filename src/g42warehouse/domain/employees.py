"""Person family: employees and their variants."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from g42warehouse.domain.enums import ExperienceLevel
from g42warehouse.domain.validation import (
    optional_text,
    require_member,
    require_past_date,
    require_positive_decimal,
    require_text,
)
from g42warehouse.errors import ValidationError

if TYPE_CHECKING:
    from g42warehouse.registry import Registry

LICENSE_CATEGORIES = frozenset({"B", "C", "C1"})


class Employee:
    """Base of the person family.

    Subclasses set their own state first, then call ``super().__init__``,
    which validates the shared fields, assigns the id and registers the
    employee as its very last step.
    """

    abstract: ClassVar[bool] = True
    tag: ClassVar[str] = ""

    YEARLY_SALARY_GROWTH: ClassVar[Decimal] = Decimal("0.20")
    _ids: ClassVar[Iterator[int]] = itertools.count(1)

    def __init__(
        self,
        registry: Registry[Employee],
        name: str,
        employment_date: date,
        base_salary: Decimal | int | float | str,
        experience_level: ExperienceLevel | int = ExperienceLevel.JUNIOR,
        notes: str | None = None,
    ) -> None:
        if type(self).__dict__.get("abstract", False):
            raise TypeError(f"{type(self).__name__} is abstract")
        self.name = name
        self.employment_date = employment_date
        self.base_salary = base_salary
        self.experience_level = experience_level
        self.notes = notes
        self._id = next(Employee._ids)
        registry._register(self)

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = require_text("name", value)

    @property
    def employment_date(self) -> date:
        return self._employment_date

    @employment_date.setter
    def employment_date(self, value: date) -> None:
        self._employment_date = require_past_date("employment_date", value)

    @property
    def base_salary(self) -> Decimal:
        return self._base_salary

    @base_salary.setter
    def base_salary(self, value: Decimal | int | float | str) -> None:
        self._base_salary = require_positive_decimal("base_salary", value)

    @property
    def experience_level(self) -> ExperienceLevel:
        return self._experience_level

    @experience_level.setter
    def experience_level(self, value: ExperienceLevel | int) -> None:
        self._experience_level = require_member("experience_level", ExperienceLevel, value)

    @property
    def notes(self) -> str | None:
        return self._notes

    @notes.setter
    def notes(self, value: str | None) -> None:
        self._notes = optional_text(value)

    @property
    def years_since_employment(self) -> int:
        days = (date.today() - self.employment_date).days
        return max(0, int(days / 365.25))

    @property
    def salary(self) -> Decimal:
        """Base salary grown linearly per whole year of employment."""
        return self.base_salary * (1 + self.YEARLY_SALARY_GROWTH * self.years_since_employment)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id}, name={self._name!r})"


class GeneralEmployee(Employee):
    abstract = False
    tag = "GeneralEmployee"


class Worker(Employee):
    """Floor staff that a warehouse manager can supervise."""

    abstract = True


class MachineOperator(Worker):
    abstract = False
    tag = "MachineOperator"


class DeliveryDriver(Worker):
    abstract = False
    tag = "DeliveryDriver"

    def __init__(
        self,
        registry: Registry[Employee],
        name: str,
        employment_date: date,
        base_salary: Decimal | int | float | str,
        experience_level: ExperienceLevel | int = ExperienceLevel.JUNIOR,
        notes: str | None = None,
        driver_license_category: str | None = None,
    ) -> None:
        self.driver_license_category = driver_license_category
        super().__init__(registry, name, employment_date, base_salary, experience_level, notes)

    @property
    def driver_license_category(self) -> str | None:
        return self._driver_license_category

    @driver_license_category.setter
    def driver_license_category(self, value: str | None) -> None:
        if value is None:
            self._driver_license_category = None
            return
        category = require_text("driver_license_category", value).upper()
        if category not in LICENSE_CATEGORIES:
            raise ValidationError("driver_license_category", "must be one of B, C, C1")
        self._driver_license_category = category


class WarehouseManager(Employee):
    abstract = False
    tag = "WarehouseManager"

    def __init__(
        self,
        registry: Registry[Employee],
        name: str,
        employment_date: date,
        base_salary: Decimal | int | float | str,
        experience_level: ExperienceLevel | int = ExperienceLevel.JUNIOR,
        notes: str | None = None,
    ) -> None:
        self._managed_workers: set[Worker] = set()
        super().__init__(registry, name, employment_date, base_salary, experience_level, notes)

    @property
    def managed_workers(self) -> frozenset[Worker]:
        return frozenset(self._managed_workers)

    def add_worker(self, worker: Worker) -> None:
        if not isinstance(worker, Worker):
            raise TypeError(f"expected a Worker, got {type(worker).__name__}")
        self._managed_workers.add(worker)

    def remove_worker(self, worker: Worker) -> None:
        if not isinstance(worker, Worker):
            raise TypeError(f"expected a Worker, got {type(worker).__name__}")
        self._managed_workers.discard(worker)
