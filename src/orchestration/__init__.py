"""
Orchestration Layer - Workflow Coordination

This layer coordinates the rescale workflow.
- No business logic
- Composes extract, transform, and load operations
"""
