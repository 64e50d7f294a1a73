"""
Load Layer - Data Persistence

This layer handles all data persistence operations.
- Local file storage (Parquet, CSV, JSON)
- No business logic, just I/O operations
"""
