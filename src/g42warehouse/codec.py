"""Tagged text records for the employee and section registries.

One entity per line, fields joined with ``;`` in a fixed order, starting with
the variant tag. The tag is the only dispatch key on decode; every other field
is positional, so absent optional values keep their slot as an empty string.

Employee:  Tag;id;name;yyyy-mm-dd;base_salary;level;notes[;license]
Section:   Tag;name;building-aisle-row;width;length;status;backup;temperature;humidity[;variant...]

Decoding is best effort: a line that is too short, does not parse, or fails
validation is logged and skipped, the rest of the file still loads. Each
record is rebuilt through its real constructor, so invariants run the same
way they do for freshly created entities.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Generic, TypeVar

from g42warehouse.domain.employees import (
    DeliveryDriver,
    Employee,
    GeneralEmployee,
    MachineOperator,
    WarehouseManager,
)
from g42warehouse.domain.enums import HazardType
from g42warehouse.domain.sections import (
    AmbientSection,
    HazmatSection,
    RefrigeratedSection,
    Section,
    SectionLocation,
)
from g42warehouse.registry import Registry

logger = logging.getLogger(__name__)

SEPARATOR = ";"
LOCATION_SEPARATOR = "-"
HAZARD_SEPARATOR = ","
DATE_FORMAT = "%Y-%m-%d"

# Location parts substituted when a record's composite field is short or has empty parts.
DEFAULT_BUILDING = "UNKNOWN"
DEFAULT_AISLE = "X"
DEFAULT_ROW = 1

# Variant state assumed for records written without their variant fields.
LEGACY_MIN_TEMPERATURE = -10.0
LEGACY_MAX_TEMPERATURE = 10.0
LEGACY_HAZARDS = (HazardType.TOXIC,)
LEGACY_VENTILATION = True

T = TypeVar("T")

# (registry, shared constructor kwargs, trailing variant fields) -> entity
Builder = Callable[[Registry[Any], dict[str, Any], list[str]], Any]


@dataclass
class DecodeReport:
    loaded: int = 0
    skipped: int = 0


def _clean(text: str, *chars: str) -> str:
    """Strip delimiter characters and line breaks from free text."""
    text = text.replace("\r", " ").replace("\n", " ")
    for ch in chars:
        text = text.replace(ch, "")
    return text


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _number(value: float | None) -> str:
    return "" if value is None else repr(float(value))


class RecordCodec(ABC, Generic[T]):
    """Shared encode/decode loop; subclasses provide the per-family schema."""

    family: ClassVar[str] = ""
    min_fields: ClassVar[int] = 0
    default_tag: ClassVar[str] = ""

    def __init__(self) -> None:
        self._builders: dict[str, Builder] = self._builder_table()

    # ── Encoding ───────────────────────────────────────────────

    def encode(self, registry: Registry[T]) -> list[str]:
        return [SEPARATOR.join(self.encode_fields(entity)) for entity in registry]

    @abstractmethod
    def encode_fields(self, entity: T) -> list[str]: ...

    # ── Decoding ───────────────────────────────────────────────

    def decode(self, lines: Iterable[str], registry: Registry[T]) -> DecodeReport:
        """Clear ``registry`` and rebuild it from ``lines``."""
        registry._clear()
        report = DecodeReport()
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            parts = line.rstrip("\r\n").split(SEPARATOR)
            if len(parts) < self.min_fields:
                logger.warning(
                    "Skipping %s record on line %d: %d fields, expected at least %d",
                    self.family, lineno, len(parts), self.min_fields,
                )
                report.skipped += 1
                continue

            tag = parts[0].strip()
            builder = self._builders.get(tag)
            if builder is None:
                logger.warning(
                    "Unknown %s type %r on line %d, loading as %s",
                    self.family, tag, lineno, self.default_tag,
                )
                builder = self._builders[self.default_tag]

            try:
                common = self.parse_common(parts)
                builder(registry, common, parts[self.min_fields:])
            except (ValueError, ArithmeticError) as e:
                logger.warning("Skipping %s record on line %d: %s", self.family, lineno, e)
                report.skipped += 1
                continue
            report.loaded += 1
        return report

    @abstractmethod
    def parse_common(self, parts: list[str]) -> dict[str, Any]: ...

    @abstractmethod
    def _builder_table(self) -> dict[str, Builder]: ...


class EmployeeCodec(RecordCodec[Employee]):
    family = "employee"
    min_fields = 7
    default_tag = GeneralEmployee.tag

    def encode_fields(self, employee: Employee) -> list[str]:
        fields = [
            employee.tag,
            str(employee.id),
            _clean(employee.name, SEPARATOR),
            employee.employment_date.strftime(DATE_FORMAT),
            str(employee.base_salary),
            str(int(employee.experience_level)),
            _clean(employee.notes or "", SEPARATOR),
        ]
        if isinstance(employee, DeliveryDriver):
            fields.append(employee.driver_license_category or "")
        return fields

    def parse_common(self, parts: list[str]) -> dict[str, Any]:
        # parts[1] is the id at save time; loaded employees get fresh ids.
        return {
            "name": parts[2],
            "employment_date": datetime.strptime(parts[3].strip(), DATE_FORMAT).date(),
            "base_salary": Decimal(parts[4].strip()),
            "experience_level": int(parts[5]),
            "notes": parts[6] or None,
        }

    def _builder_table(self) -> dict[str, Builder]:
        return {
            GeneralEmployee.tag: lambda reg, kw, extra: GeneralEmployee(reg, **kw),
            WarehouseManager.tag: lambda reg, kw, extra: WarehouseManager(reg, **kw),
            MachineOperator.tag: lambda reg, kw, extra: MachineOperator(reg, **kw),
            DeliveryDriver.tag: self._build_driver,
        }

    @staticmethod
    def _build_driver(registry: Registry[Employee], kw: dict[str, Any], extra: list[str]) -> DeliveryDriver:
        license_category = extra[0].strip() if extra and extra[0].strip() else None
        return DeliveryDriver(registry, **kw, driver_license_category=license_category)


class SectionCodec(RecordCodec[Section]):
    family = "section"
    min_fields = 9
    default_tag = AmbientSection.tag

    def __init__(self, strict_locations: bool = False) -> None:
        self.strict_locations = strict_locations
        super().__init__()

    def encode_fields(self, section: Section) -> list[str]:
        loc = section.location
        location = LOCATION_SEPARATOR.join(
            [
                _clean(loc.building, SEPARATOR, LOCATION_SEPARATOR),
                _clean(loc.aisle, SEPARATOR, LOCATION_SEPARATOR),
                str(loc.row),
            ]
        )
        fields = [
            section.tag,
            _clean(section.name, SEPARATOR),
            location,
            _number(section.width),
            _number(section.length),
            str(int(section.status)),
            _flag(section.has_backup_generator),
            _number(section.temperature),
            _number(section.humidity),
        ]
        if isinstance(section, RefrigeratedSection):
            fields += [
                _number(section.min_operational_temperature),
                _number(section.max_operational_temperature),
            ]
        elif isinstance(section, HazmatSection):
            hazards = sorted(section.hazard_types)
            fields += [
                HAZARD_SEPARATOR.join(h.name.title() for h in hazards),
                _flag(section.has_ventilation_system),
            ]
        return fields

    def parse_common(self, parts: list[str]) -> dict[str, Any]:
        return {
            "name": parts[1],
            "location": self.parse_location(parts[2]),
            "width": float(parts[3]),
            "length": float(parts[4]),
            "status": int(parts[5]),
            "has_backup_generator": parts[6].strip() == "1",
            "temperature": float(parts[7]) if parts[7].strip() else None,
            "humidity": float(parts[8]),
        }

    def parse_location(self, field: str) -> SectionLocation:
        """Split ``building-aisle-row``, defaulting missing or empty parts unless strict."""
        pieces = [p.strip() for p in field.split(LOCATION_SEPARATOR)]
        pieces += [""] * (3 - len(pieces))
        building, aisle, row = pieces[0], pieces[1], pieces[2]
        if not (building and aisle and row):
            if self.strict_locations:
                raise ValueError(f"location {field!r} is not building-aisle-row")
            logger.warning("Location %r is incomplete, filling missing parts with defaults", field)
        return SectionLocation(
            building or DEFAULT_BUILDING,
            aisle or DEFAULT_AISLE,
            int(row) if row else DEFAULT_ROW,
        )

    def _builder_table(self) -> dict[str, Builder]:
        return {
            AmbientSection.tag: lambda reg, kw, extra: AmbientSection(reg, **kw),
            RefrigeratedSection.tag: self._build_refrigerated,
            HazmatSection.tag: self._build_hazmat,
        }

    @staticmethod
    def _build_refrigerated(
        registry: Registry[Section], kw: dict[str, Any], extra: list[str]
    ) -> RefrigeratedSection:
        low, high = LEGACY_MIN_TEMPERATURE, LEGACY_MAX_TEMPERATURE
        if extra:
            if len(extra) < 2:
                raise ValueError("refrigerated record needs both min and max temperature")
            low, high = float(extra[0]), float(extra[1])
        return RefrigeratedSection(
            registry, **kw, min_operational_temperature=low, max_operational_temperature=high
        )

    @staticmethod
    def _build_hazmat(registry: Registry[Section], kw: dict[str, Any], extra: list[str]) -> HazmatSection:
        hazards: list[HazardType] = list(LEGACY_HAZARDS)
        ventilation = LEGACY_VENTILATION
        if extra:
            if len(extra) < 2:
                raise ValueError("hazmat record needs hazard types and ventilation flag")
            names = [n.strip() for n in extra[0].split(HAZARD_SEPARATOR) if n.strip()]
            try:
                hazards = [HazardType[n.upper()] for n in names]
            except KeyError as e:
                raise ValueError(f"unknown hazard type {e.args[0]!r}") from None
            ventilation = extra[1].strip() == "1"
        return HazmatSection(
            registry, **kw, hazard_types=hazards, has_ventilation_system=ventilation
        )
