# Routes package init
"""
Coffee Menu Backend — API Routes Package
==========================================

Route Inventory:
    - auth.py:        POST /api/login, GET /api/verify
    - categories.py:  GET/POST /api/categories, DELETE /api/categories/{id}
    - items.py:       GET /api/items/{categoryId}, POST /api/items, DELETE /api/items/{id}
    - health.py:      GET /health

Routes are THIN: extract path/body/header values, call the service,
return the schema. Errors are raised as exceptions and formatted by the
global handlers in main.py.
"""
