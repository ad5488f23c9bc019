# Routes package init
"""
Blog API: API Routes Package
==============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - posts.py:   GET/POST /posts, GET/PUT/DELETE /posts/{id}
    - health.py:  GET /health (store connectivity check)

Routes stay thin: extract path/body, call the service, choose the status code.
"""
