"""
Transformation Layer - Pure, Deterministic Functions

This layer contains the rescale utility and the table transformations built on it.
- Pure functions (input → output)
- No I/O operations
- Unit testable
- Deterministic results
"""
