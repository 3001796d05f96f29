"""
Core shared utilities for the task API.

- core.db: DB-API connection pool (SQLite / PostgreSQL)
- core.errors: API error hierarchy and safe error responses
- core.timestamps: UTC ISO 8601 timestamp helpers
"""
