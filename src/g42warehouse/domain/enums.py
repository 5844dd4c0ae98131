"""Enumerations persisted by their integer value."""

from __future__ import annotations

from enum import IntEnum


class ExperienceLevel(IntEnum):
    JUNIOR = 1
    MID = 2
    SENIOR = 3


class SectionStatus(IntEnum):
    ACTIVE = 0
    MAINTENANCE = 1
    CLOSED = 2


class HazardType(IntEnum):
    """Hazard categories a hazmat section is rated for. Persisted by name."""

    TOXIC = 0
    FLAMMABLE = 1
    CORROSIVE = 2
    IRRITANT = 3
    SENSITIZER = 4
    ASPHYXIANT = 5
