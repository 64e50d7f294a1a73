"""
Extract Layer - Pure I/O from Files and URLs

This layer handles reading input tables with no business logic.
- No imports from transform or load layers
- Pure functions that return raw DataFrames
- Handles retries and error handling for remote sources
"""
