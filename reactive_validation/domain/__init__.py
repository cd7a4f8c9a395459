"""Domain layer for the reactive validation engine.

This layer contains:
- Value Objects: Immutable primitives (messages, levels, targets)
- Entities: Validation requests with lifecycle state
- Interfaces: Rule contracts the engine evaluates
- Exceptions: The engine's error taxonomy

The domain layer has ZERO dependencies on external libraries (except Python stdlib).
"""
