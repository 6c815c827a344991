"""
Order state machine for managing order status transitions
"""

from typing import Dict, List, Optional, Set

from printshop.models.order import OrderStatus
from printshop.core.exceptions import InvalidInputException

# Normal flow, pending is the only initial state
STATUS_FLOW: List[str] = [
    OrderStatus.PENDING.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PRINTING.value,
    OrderStatus.QUALITY_CHECK.value,
    OrderStatus.READY.value,
    OrderStatus.DELIVERED.value,
]

class OrderStateMachine:
    """
    Manages order status transitions

    In permissive mode (the default) any non-empty status is accepted,
    including ones outside the known flow. In strict mode only the next
    step along STATUS_FLOW is allowed.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.transitions: Dict[str, Set[str]] = {
            current: {following}
            for current, following in zip(STATUS_FLOW, STATUS_FLOW[1:])
        }
        self.transitions[OrderStatus.DELIVERED.value] = set()

    def is_known(self, status: str) -> bool:
        return status in STATUS_FLOW

    def can_transition(self, current_status: str, new_status: str) -> bool:
        """
        Check if transition is valid

        Args:
            current_status: Current order status
            new_status: Desired new status

        Returns:
            True if transition is allowed
        """
        if not new_status or not new_status.strip():
            return False
        if not self.strict:
            return True
        return new_status in self.transitions.get(current_status, set())

    def get_valid_transitions(self, current_status: str) -> List[str]:
        """
        Get list of valid transitions from current status

        Permissive mode lists every known status other than the current one,
        custom strings are accepted too but cannot be enumerated.
        """
        if self.strict:
            return [s for s in STATUS_FLOW if s in self.transitions.get(current_status, set())]
        return [s for s in STATUS_FLOW if s != current_status]

    def is_terminal_state(self, status: str) -> bool:
        """Delivered ends the normal flow"""
        return status in self.transitions and not self.transitions[status]

    def validate_transition(self, current_status: Optional[str], new_status: str) -> None:
        """
        Raise unless the transition is allowed

        Raises:
            InvalidInputException: If the new status is blank, or strict mode rejects it
        """
        if not new_status or not new_status.strip():
            raise InvalidInputException("Status is required")
        if self.strict and not self.is_known(new_status):
            raise InvalidInputException(f"Unknown order status '{new_status}'")
        if not self.can_transition(current_status, new_status):
            raise InvalidInputException(
                f"Cannot transition from {current_status} to {new_status}"
            )
