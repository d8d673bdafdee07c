"""
Contacts API — Application Package
====================================

What:  HTTP CRUD service over the ``contacts`` and ``users`` MongoDB collections.
How:   FastAPI routes delegate to document services, which validate input and
       issue a single driver call through the shared database accessor.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, bodies, headers
    ├─────────────────────────────────────┤
    │     Services + Validators (Logic)   │  ← validate, then one storage call
    ├─────────────────────────────────────┤
    │        Schemas (API contracts)      │  ← Pydantic request/response models
    ├─────────────────────────────────────┤
    │    Database Accessor (Persistence)  │  ← pymongo AsyncMongoClient handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
