"""Location family: storage sections and their variants."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from g42warehouse.domain.enums import HazardType, SectionStatus
from g42warehouse.domain.validation import (
    optional_range,
    require_member,
    require_positive,
    require_positive_int,
    require_range,
    require_text,
)
from g42warehouse.errors import ValidationError

if TYPE_CHECKING:
    from g42warehouse.registry import Registry

MIN_TEMPERATURE = -50.0
MAX_TEMPERATURE = 80.0
AREA_PRECISION = 2


@dataclass(frozen=True)
class SectionLocation:
    """Building/aisle/row address of a section."""

    building: str
    aisle: str
    row: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "building", require_text("building", self.building))
        object.__setattr__(self, "aisle", require_text("aisle", self.aisle))
        require_positive_int("row", self.row)

    def __str__(self) -> str:
        return f"{self.building}-{self.aisle}-{self.row}"


class Section:
    """Base of the location family.

    Same construction order as ``Employee``: variant state first, then the
    shared fields, registration last.
    """

    abstract: ClassVar[bool] = True
    tag: ClassVar[str] = ""

    def __init__(
        self,
        registry: Registry[Section],
        name: str,
        location: SectionLocation,
        width: float,
        length: float,
        status: SectionStatus | int = SectionStatus.ACTIVE,
        has_backup_generator: bool = False,
        temperature: float | None = None,
        humidity: float = 0.0,
    ) -> None:
        if type(self).__dict__.get("abstract", False):
            raise TypeError(f"{type(self).__name__} is abstract")
        if not isinstance(location, SectionLocation):
            raise TypeError(f"expected a SectionLocation, got {type(location).__name__}")
        self._location = location
        self.name = name
        self.width = width
        self.length = length
        self.status = status
        self.has_backup_generator = has_backup_generator
        self.temperature = temperature
        self.humidity = humidity
        registry._register(self)

    @property
    def location(self) -> SectionLocation:
        return self._location

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = require_text("name", value)

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._width = require_positive("width", value)

    @property
    def length(self) -> float:
        return self._length

    @length.setter
    def length(self, value: float) -> None:
        self._length = require_positive("length", value)

    @property
    def area(self) -> float:
        return round(self.width * self.length, AREA_PRECISION)

    @property
    def status(self) -> SectionStatus:
        return self._status

    @status.setter
    def status(self, value: SectionStatus | int) -> None:
        self._status = require_member("status", SectionStatus, value)

    @property
    def has_backup_generator(self) -> bool:
        return self._has_backup_generator

    @has_backup_generator.setter
    def has_backup_generator(self, value: bool) -> None:
        self._has_backup_generator = bool(value)

    @property
    def temperature(self) -> float | None:
        return self._temperature

    @temperature.setter
    def temperature(self, value: float | None) -> None:
        self._temperature = optional_range("temperature", value, MIN_TEMPERATURE, MAX_TEMPERATURE)

    @property
    def humidity(self) -> float:
        return self._humidity

    @humidity.setter
    def humidity(self, value: float) -> None:
        self._humidity = require_range("humidity", value, 0, 100)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, location='{self._location}')"


class AmbientSection(Section):
    abstract = False
    tag = "AmbientSection"


class RefrigeratedSection(Section):
    abstract = False
    tag = "RefrigeratedSection"

    def __init__(
        self,
        registry: Registry[Section],
        name: str,
        location: SectionLocation,
        width: float,
        length: float,
        status: SectionStatus | int = SectionStatus.ACTIVE,
        has_backup_generator: bool = False,
        temperature: float | None = None,
        humidity: float = 0.0,
        *,
        min_operational_temperature: float,
        max_operational_temperature: float,
    ) -> None:
        low = require_range(
            "min_operational_temperature", min_operational_temperature, MIN_TEMPERATURE, MAX_TEMPERATURE
        )
        high = require_range(
            "max_operational_temperature", max_operational_temperature, MIN_TEMPERATURE, MAX_TEMPERATURE
        )
        if low >= high:
            raise ValidationError(
                "min_operational_temperature", "must be lower than max_operational_temperature"
            )
        self._min_operational_temperature = low
        self._max_operational_temperature = high
        super().__init__(
            registry, name, location, width, length, status, has_backup_generator, temperature, humidity
        )

    @property
    def min_operational_temperature(self) -> float:
        return self._min_operational_temperature

    @property
    def max_operational_temperature(self) -> float:
        return self._max_operational_temperature

    @property
    def is_within_operational_temperature(self) -> bool:
        t = self.temperature
        if t is None:
            return False
        return self._min_operational_temperature <= t <= self._max_operational_temperature


class HazmatSection(Section):
    abstract = False
    tag = "HazmatSection"

    def __init__(
        self,
        registry: Registry[Section],
        name: str,
        location: SectionLocation,
        width: float,
        length: float,
        status: SectionStatus | int = SectionStatus.ACTIVE,
        has_backup_generator: bool = False,
        temperature: float | None = None,
        humidity: float = 0.0,
        hazard_types: Iterable[HazardType | int] = (),
        has_ventilation_system: bool = False,
    ) -> None:
        if hazard_types is None:
            raise TypeError("hazard_types must be an iterable, got None")
        hazards = frozenset(require_member("hazard_types", HazardType, h) for h in hazard_types)
        if not hazards:
            raise ValidationError("hazard_types", "at least one hazard type is required")
        self._hazard_types = hazards
        self._has_ventilation_system = bool(has_ventilation_system)
        super().__init__(
            registry, name, location, width, length, status, has_backup_generator, temperature, humidity
        )

    @property
    def hazard_types(self) -> frozenset[HazardType]:
        return self._hazard_types

    @property
    def has_ventilation_system(self) -> bool:
        return self._has_ventilation_system
