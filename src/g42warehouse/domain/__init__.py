"""Warehouse domain model: employees, sections and their field invariants.

Two entity families:

    Employee (abstract)            Section (abstract)
    ├── GeneralEmployee            ├── AmbientSection
    ├── WarehouseManager           ├── RefrigeratedSection
    └── Worker (abstract)          └── HazmatSection
        ├── DeliveryDriver
        └── MachineOperator

Every constructor takes the registry of its family as first argument and
registers the entity only after all fields validated.
"""
