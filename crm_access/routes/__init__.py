"""
Routes Package
==============

FastAPI routers mounted under `/api/v1` by `crm_access.main`.

Usage:
    from crm_access.routes import permission_routes
"""
