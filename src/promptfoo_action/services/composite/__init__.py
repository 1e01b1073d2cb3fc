"""Composite services - Higher-level orchestration services that use core services."""
from promptfoo_action.services.composite.change_detection_service import (
    ChangeDetection,
    ChangeDetectionService,
)

__all__ = [
    "ChangeDetection",
    "ChangeDetectionService",
]
