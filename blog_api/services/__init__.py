# Services package init
"""
Blog API: Services Layer
==========================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services take an AsyncSession per call, apply validation rules, and
       return response schemas. They can be unit-tested with a mocked session.

Service Inventory:
    - BlogPostService: validation passes and CRUD operations for blog posts
"""
