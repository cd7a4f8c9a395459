"""Application layer for the validation engine.

This layer contains the services that orchestrate rule evaluation,
message storage, request sequencing and change notification. It sits
between the validator facade (``BindableValidator``) and the
domain/validation layers.

Architecture Pattern: Clean Architecture / Hexagonal Architecture
- Services: One technical capability each
- Facade: Composes the services for one entity
"""
