# Services package init
"""
Coffee Menu Backend — Services Layer
======================================

Service Inventory:
    - AuthService:    admin login, token verification, require_admin gate
    - CatalogStore:   single-statement reads/writes on categories and items
    - CatalogService: the catalog operations exposed by the routes
"""
