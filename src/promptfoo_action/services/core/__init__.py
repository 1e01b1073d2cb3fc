"""Core services - Foundational services providing basic operations."""
from promptfoo_action.services.core.change_set_service import ChangeSetService
from promptfoo_action.services.core.dependency_service import DependencyService

__all__ = [
    "ChangeSetService",
    "DependencyService",
]
