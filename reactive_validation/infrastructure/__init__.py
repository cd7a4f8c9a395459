"""Infrastructure layer for the validation engine.

Cross-cutting helpers that are not part of the validation domain itself,
such as logging decorators for validation steps and listener callbacks.

This layer depends on the domain layer (exceptions) and the standard
library only. The domain layer does NOT depend on infrastructure.
"""
