"""Tenancy bounded context.

Resolves an opaque property code to the isolated PostgreSQL database holding
that property, caches one engine per database, registers every entity
schema on it exactly once, and hands collaborators a ``TenantContext``.
"""
