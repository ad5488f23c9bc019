"""
Blog API: Application Package Initializer
===========================================

What: Marks the `blog_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn blog_api.main:app`), pytest, and the `blog-api` console script.

Architecture Note:
    The service follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, one store call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes handle status codes and headers, services hold validation and
    persistence calls, models describe the table, schemas describe the JSON
    contract, and the database layer owns the connection lifecycle.
"""

__version__ = "1.0.0"
