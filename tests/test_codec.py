"""Tests for the tagged record codec."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from g42warehouse.codec import EmployeeCodec, RecordCodec, SectionCodec
from g42warehouse.domain.employees import (
    DeliveryDriver,
    Employee,
    GeneralEmployee,
    MachineOperator,
    WarehouseManager,
)
from g42warehouse.domain.enums import ExperienceLevel, HazardType, SectionStatus
from g42warehouse.domain.sections import (
    AmbientSection,
    HazmatSection,
    RefrigeratedSection,
    Section,
    SectionLocation,
)
from g42warehouse.registry import Registry


@pytest.fixture
def employees() -> Registry[Employee]:
    return Registry("employee")


@pytest.fixture
def sections() -> Registry[Section]:
    return Registry("section")


class TestEmployeeEncoding:
    def test_general_employee_line(self, employees: Registry[Employee]):
        emp = GeneralEmployee(employees, "Charlie", date(2020, 1, 1), 2000, ExperienceLevel.JUNIOR, "test-note")
        assert EmployeeCodec().encode(employees) == [f"GeneralEmployee;{emp.id};Charlie;2020-01-01;2000;1;test-note"]

    def test_absent_notes_keep_slot(self, employees: Registry[Employee]):
        GeneralEmployee(employees, "Charlie", date(2020, 1, 1), 2000)
        line = EmployeeCodec().encode(employees)[0]
        assert line.endswith(";1;")
        assert len(line.split(";")) == 7

    def test_separator_stripped_from_free_text(self, employees: Registry[Employee]):
        GeneralEmployee(employees, "Ann;Lee", date(2020, 1, 1), 2000, notes="a;b\nc")
        fields = EmployeeCodec().encode(employees)[0].split(";")
        assert fields[2] == "AnnLee"
        assert fields[6] == "ab c"

    def test_driver_appends_license(self, employees: Registry[Employee]):
        DeliveryDriver(employees, "Dan", date(2021, 5, 3), "1800.50", ExperienceLevel.MID, None, "c")
        fields = EmployeeCodec().encode(employees)[0].split(";")
        assert fields[0] == "DeliveryDriver"
        assert fields[4] == "1800.50"
        assert fields[-1] == "C"


class TestEmployeeDecoding:
    def test_decodes_general_employee(self, employees: Registry[Employee]):
        report = EmployeeCodec().decode(["GeneralEmployee;1;Charlie;2020-01-01;2000;1;test-note"], employees)
        assert report.loaded == 1 and report.skipped == 0
        (emp,) = employees.all()
        assert isinstance(emp, GeneralEmployee)
        assert emp.name == "Charlie"
        assert emp.employment_date == date(2020, 1, 1)
        assert emp.base_salary == Decimal("2000")
        assert emp.experience_level is ExperienceLevel.JUNIOR
        assert emp.notes == "test-note"

    def test_tag_selects_variant(self, employees: Registry[Employee]):
        lines = [
            "WarehouseManager;1;Mia;2019-02-02;4000;3;",
            "MachineOperator;2;Oli;2019-02-02;1500;2;",
            "DeliveryDriver;3;Dan;2019-02-02;1800;1;;C1",
            "DeliveryDriver;4;Dee;2019-02-02;1800;1;",
        ]
        EmployeeCodec().decode(lines, employees)
        kinds = [type(e) for e in employees]
        assert kinds == [WarehouseManager, MachineOperator, DeliveryDriver, DeliveryDriver]
        assert employees.all()[2].driver_license_category == "C1"
        assert employees.all()[3].driver_license_category is None

    def test_unknown_tag_falls_back_to_general(self, employees: Registry[Employee]):
        EmployeeCodec().decode(["Intern;1;Ivy;2022-01-01;800;1;"], employees)
        (emp,) = employees.all()
        assert isinstance(emp, GeneralEmployee)

    def test_truncated_line_skipped(self, employees: Registry[Employee]):
        lines = ["GeneralEmployee;1;Charlie;2020-01-01;2000;1;note", "GeneralEmployee;2;Trunc;2020-01-01"]
        report = EmployeeCodec().decode(lines, employees)
        assert (report.loaded, report.skipped) == (1, 1)
        assert [e.name for e in employees] == ["Charlie"]

    @pytest.mark.parametrize(
        "line",
        [
            "GeneralEmployee;1;;2020-01-01;2000;1;",
            "GeneralEmployee;1;Bob;01/02/2020;2000;1;",
            "GeneralEmployee;1;Bob;2999-01-01;2000;1;",
            "GeneralEmployee;1;Bob;2020-01-01;lots;1;",
            "GeneralEmployee;1;Bob;2020-01-01;-5;1;",
            "GeneralEmployee;1;Bob;2020-01-01;2000;9;",
            "DeliveryDriver;1;Bob;2020-01-01;2000;1;;Z",
        ],
    )
    def test_invalid_record_skipped(self, employees: Registry[Employee], line: str):
        report = EmployeeCodec().decode([line, "GeneralEmployee;2;Ok;2020-01-01;2000;1;"], employees)
        assert (report.loaded, report.skipped) == (1, 1)
        assert [e.name for e in employees] == ["Ok"]

    def test_blank_lines_ignored(self, employees: Registry[Employee]):
        report = EmployeeCodec().decode(["", "   ", "GeneralEmployee;1;A;2020-01-01;2000;1;", ""], employees)
        assert (report.loaded, report.skipped) == (1, 0)

    def test_decode_replaces_previous_contents(self, employees: Registry[Employee]):
        GeneralEmployee(employees, "Old", date(2020, 1, 1), 1000)
        EmployeeCodec().decode(["GeneralEmployee;9;New;2020-01-01;2000;1;"], employees)
        assert [e.name for e in employees] == ["New"]

    def test_ids_are_reassigned(self, employees: Registry[Employee]):
        EmployeeCodec().decode(["GeneralEmployee;9999;New;2020-01-01;2000;1;"], employees)
        assert employees.all()[0].id != 9999


class TestSectionEncoding:
    def test_ambient_line(self, sections: Registry[Section]):
        AmbientSection(sections, "S1", SectionLocation("B1", "A", 1), 10, 5, SectionStatus.ACTIVE, True, 25, 40)
        assert SectionCodec().encode(sections) == ["AmbientSection;S1;B1-A-1;10.0;5.0;0;1;25.0;40.0"]

    def test_missing_temperature_keeps_slot(self, sections: Registry[Section]):
        AmbientSection(sections, "S1", SectionLocation("B1", "A", 1), 10, 5, humidity=40)
        fields = SectionCodec().encode(sections)[0].split(";")
        assert fields[7] == ""
        assert fields[6] == "0"

    def test_variant_fields_appended(self, sections: Registry[Section]):
        loc = SectionLocation("B2", "C", 4)
        RefrigeratedSection(sections, "Cold", loc, 4, 4, temperature=-3, humidity=60,
                            min_operational_temperature=-10, max_operational_temperature=5)
        HazmatSection(sections, "Haz", loc, 4, 4, humidity=30,
                      hazard_types=[HazardType.FLAMMABLE, HazardType.TOXIC], has_ventilation_system=False)
        cold, haz = SectionCodec().encode(sections)
        assert cold.split(";")[9:] == ["-10.0", "5.0"]
        assert haz.split(";")[9:] == ["Toxic,Flammable", "0"]

    def test_location_delimiters_stripped(self, sections: Registry[Section]):
        AmbientSection(sections, "S1", SectionLocation("North-Wing", "A;1", 2), 10, 5, humidity=40)
        fields = SectionCodec().encode(sections)[0].split(";")
        assert fields[2] == "NorthWing-A1-2"


class TestSectionDecoding:
    def test_decodes_ambient(self, sections: Registry[Section]):
        report = SectionCodec().decode(["AmbientSection;S1;B1-A-1;10;5;0;1;25;40"], sections)
        assert report.loaded == 1
        (sec,) = sections.all()
        assert isinstance(sec, AmbientSection)
        assert sec.name == "S1"
        assert sec.location == SectionLocation("B1", "A", 1)
        assert sec.has_backup_generator is True
        assert sec.temperature == 25.0
        assert sec.area == 50

    def test_empty_temperature_is_none(self, sections: Registry[Section]):
        SectionCodec().decode(["AmbientSection;S1;B1-A-1;10;5;2;0;;40"], sections)
        (sec,) = sections.all()
        assert sec.temperature is None
        assert sec.status is SectionStatus.CLOSED
        assert sec.has_backup_generator is False

    def test_variant_fields_decoded(self, sections: Registry[Section]):
        lines = [
            "RefrigeratedSection;Cold;B2-C-4;4;4;0;1;-3;60;-10;5",
            "HazmatSection;Haz;B2-C-4;4;4;0;1;;30;Corrosive,Irritant;0",
        ]
        SectionCodec().decode(lines, sections)
        cold, haz = sections.all()
        assert (cold.min_operational_temperature, cold.max_operational_temperature) == (-10, 5)
        assert cold.is_within_operational_temperature
        assert haz.hazard_types == {HazardType.CORROSIVE, HazardType.IRRITANT}
        assert haz.has_ventilation_system is False

    def test_legacy_variant_records_get_defaults(self, sections: Registry[Section]):
        lines = [
            "RefrigeratedSection;Cold;B2-C-4;4;4;0;1;2;60",
            "HazmatSection;Haz;B2-C-4;4;4;0;1;;30",
        ]
        SectionCodec().decode(lines, sections)
        cold, haz = sections.all()
        assert (cold.min_operational_temperature, cold.max_operational_temperature) == (-10, 10)
        assert haz.hazard_types == {HazardType.TOXIC}
        assert haz.has_ventilation_system is True

    @pytest.mark.parametrize(
        "line",
        [
            "AmbientSection;S1;B1-A-1;10;5;0;1;25",
            "AmbientSection;S1;B1-A-1;wide;5;0;1;25;40",
            "AmbientSection;S1;B1-A-1;10;5;0;1;25;140",
            "AmbientSection;S1;B1-A-row;10;5;0;1;25;40",
            "RefrigeratedSection;Cold;B1-A-1;4;4;0;1;2;60;5;-10",
            "RefrigeratedSection;Cold;B1-A-1;4;4;0;1;2;60;5",
            "HazmatSection;Haz;B1-A-1;4;4;0;1;;30;;1",
            "HazmatSection;Haz;B1-A-1;4;4;0;1;;30;Radioactive;1",
        ],
    )
    def test_invalid_record_skipped(self, sections: Registry[Section], line: str):
        report = SectionCodec().decode([line, "AmbientSection;Ok;B1-A-1;10;5;0;1;;40"], sections)
        assert (report.loaded, report.skipped) == (1, 1)
        assert [s.name for s in sections] == ["Ok"]

    def test_short_location_defaults(self, sections: Registry[Section]):
        SectionCodec().decode(["AmbientSection;S1;B7;10;5;0;1;;40"], sections)
        (sec,) = sections.all()
        assert sec.location == SectionLocation("B7", "X", 1)

    def test_empty_building_defaults(self, sections: Registry[Section]):
        SectionCodec().decode(["AmbientSection;S1;;10;5;0;1;;40"], sections)
        (sec,) = sections.all()
        assert sec.location == SectionLocation("UNKNOWN", "X", 1)

    def test_strict_locations_skip_short_location(self, sections: Registry[Section]):
        report = SectionCodec(strict_locations=True).decode(
            ["AmbientSection;S1;B7;10;5;0;1;;40", "AmbientSection;S2;B7-A-2;10;5;0;1;;40"], sections
        )
        assert (report.loaded, report.skipped) == (1, 1)
        assert [s.name for s in sections] == ["S2"]

    @pytest.mark.parametrize(
        "field, expected",
        [
            ("B--1", SectionLocation("B", "X", 1)),
            ("-A-3", SectionLocation("UNKNOWN", "A", 3)),
            ("B2-A-", SectionLocation("B2", "A", 1)),
            (" - - ", SectionLocation("UNKNOWN", "X", 1)),
        ],
    )
    def test_empty_location_parts_default_with_warning(
        self, sections: Registry[Section], caplog, field: str, expected: SectionLocation
    ):
        with caplog.at_level(logging.WARNING, logger="g42warehouse.codec"):
            report = SectionCodec().decode([f"AmbientSection;S1;{field};10;5;0;1;;40"], sections)
        assert report.loaded == 1
        (sec,) = sections.all()
        assert sec.location == expected
        assert "incomplete" in caplog.text

    @pytest.mark.parametrize("field", ["B--1", "-A-3", "B2-A-", ""])
    def test_strict_locations_skip_empty_parts(self, sections: Registry[Section], field: str):
        report = SectionCodec(strict_locations=True).decode(
            [f"AmbientSection;S1;{field};10;5;0;1;;40"], sections
        )
        assert (report.loaded, report.skipped) == (0, 1)
        assert len(sections) == 0

    def test_unknown_tag_falls_back_to_ambient(self, sections: Registry[Section]):
        SectionCodec().decode(["FreezerSection;F;B1-A-1;10;5;0;1;;40"], sections)
        (sec,) = sections.all()
        assert isinstance(sec, AmbientSection)


class TestRecordCodec:
    def test_incomplete_codec_cannot_be_instantiated(self):
        class EncodeOnly(RecordCodec[Employee]):
            def encode_fields(self, entity: Employee) -> list[str]:
                return [entity.tag]

        with pytest.raises(TypeError):
            EncodeOnly()

    def test_base_codec_is_abstract(self):
        with pytest.raises(TypeError):
            RecordCodec()
