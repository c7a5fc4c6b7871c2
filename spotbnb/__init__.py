"""
SpotBnB Backend — Application Package
=======================================

REST API for rental listings ("spots"), their images and reviews.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Auth + Validation (Depends)     │  ← Caller identity, field rules
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Lookup, ownership, mutation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
