"""
System failure error classifications.

Raised by the component that owns a resource (storage backend, state
machine, overlay registry) and handled by its immediate caller.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for failures of engine-owned resources."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PersistenceError(SystemFailureError):
    """Key-value storage read or write failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class StateTransitionError(SystemFailureError):
    """An unlock transition was requested from a state that does not allow it."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class UnknownOverlayError(SystemFailureError):
    """An overlay id was used that was never registered with the modal controller."""

    def __init__(self, message: str, overlay_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.overlay_id = overlay_id
