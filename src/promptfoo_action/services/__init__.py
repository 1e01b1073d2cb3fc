"""Service Layer - Organized by architectural role

Core: Foundational services providing basic operations
Composite: Higher-level orchestration services that use core services
"""
# Re-export all services for convenience
from promptfoo_action.services.core import (
    ChangeSetService,
    DependencyService,
)
from promptfoo_action.services.composite import (
    ChangeDetection,
    ChangeDetectionService,
)

__all__ = [
    # Core
    "ChangeSetService",
    "DependencyService",
    # Composite
    "ChangeDetection",
    "ChangeDetectionService",
]
