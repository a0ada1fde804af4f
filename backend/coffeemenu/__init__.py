"""
Coffee Menu Backend — Application Package Initializer
=======================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns, admin gate
    ├─────────────────────────────────────┤
    │   Services (Auth, Catalog)          │  ← operations, token checks
    ├─────────────────────────────────────┤
    │   CatalogStore                      │  ← SQL, atomic statements
    ├─────────────────────────────────────┤
    │   Models & Schemas / Database       │  ← ORM tables, JSON contract
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
