"""
Kanban board client: state, optimistic drag protocol and the terminal CLI.
"""

from .client import JobsApiError, JobsClient
from .controller import BoardController
from .state import BoardJob, BoardState, ModalKind, MutationPhase, MutationStateError, PendingMutation

__all__ = [
    "BoardController",
    "BoardJob",
    "BoardState",
    "JobsApiError",
    "JobsClient",
    "ModalKind",
    "MutationPhase",
    "MutationStateError",
    "PendingMutation",
]
