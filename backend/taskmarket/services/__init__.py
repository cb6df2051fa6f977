# backend/taskmarket/services/__init__.py
"""
Service layer for the TaskMarket platform.

Import concrete services from their modules; this package stays free of
imports so repositories can depend on ``services.search`` value types.
"""
