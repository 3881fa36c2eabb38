"""
PetClinic Backend — Application Package Initializer
====================================================

What: Marks the `petclinic` directory as a Python package.
Who:  Used by uvicorn (`petclinic.main:app`), pytest, and the storage bootstrap.

Architecture Note:
    The API presents owners, pets, visits and vets as a relational model,
    while the store underneath holds denormalized, partitioned rows with
    no joins and no multi-row transactions.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Domain Services)      │  ← Multi-row write plans, views
    ├─────────────────────────────────────┤
    │        DAOs (Access Patterns)       │  ← One query shape per method
    ├─────────────────────────────────────┤
    │       Mappers (Row ↔ Domain)        │  ← Pure translation, validation
    ├─────────────────────────────────────┤
    │      Storage Session (Store)        │  ← Single-row get/put/delete/scan
    └─────────────────────────────────────┘

    No layer calls past the one directly beneath it.
"""

__version__ = "1.0.0"
