"""
Board state for the kanban view.

Pure in-memory state with no I/O: the mirror of job records in arrival
order, the ephemeral UI state (loading flag, open modal, record being
edited), and the optimistic drag protocol.

A drag is modelled as a PendingMutation that moves through two phases:

    PENDING --confirm()--> CONFIRMED
    PENDING --revert()---> REVERTED

While pending, the dragged card already shows in its target column and is
tagged unconfirmed. Either way the mirror is then replaced wholesale by the
server's list (settle()), so a reverted drag needs no inverse mutation.
"""

from collections import OrderedDict
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from src.common.job_schema import BOARD_COLUMNS, JobStatus


class MutationPhase(str, Enum):
    """Lifecycle of one optimistic mutation."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"


class MutationStateError(Exception):
    """Raised when a settled mutation is confirmed or reverted again."""


class ModalKind(str, Enum):
    CREATE = "create"
    EDIT = "edit"


@dataclass
class BoardJob:
    """One card on the board, as last seen from the API."""
    id: str
    company_name: str
    role: str
    date_applied: str
    status: JobStatus
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    confirmed: bool = True

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "BoardJob":
        return cls(
            id=str(data.get("_id") or data.get("id")),
            company_name=data.get("companyName", ""),
            role=data.get("role", ""),
            date_applied=str(data.get("dateApplied", ""))[:10],
            status=JobStatus(data.get("status") or JobStatus.APPLIED.value),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def form_fields(self) -> Dict[str, str]:
        """Fields for pre-filling the edit form (date as YYYY-MM-DD)."""
        return {
            "companyName": self.company_name,
            "role": self.role,
            "dateApplied": self.date_applied,
            "status": self.status.value,
        }

    @property
    def display_date(self) -> str:
        """Short date for the card, e.g. "Jan 10, 2024"."""
        try:
            parsed = date.fromisoformat(self.date_applied)
        except ValueError:
            return self.date_applied
        return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


@dataclass
class PendingMutation:
    """A tentative status change awaiting server confirmation."""
    job_id: str
    previous_status: JobStatus
    target_status: JobStatus
    phase: MutationPhase = MutationPhase.PENDING
    error: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.phase == MutationPhase.PENDING

    def confirm(self) -> None:
        self._settle(MutationPhase.CONFIRMED)

    def revert(self, error: Optional[str] = None) -> None:
        self._settle(MutationPhase.REVERTED)
        self.error = error

    def _settle(self, phase: MutationPhase) -> None:
        if not self.is_pending:
            raise MutationStateError(
                f"Mutation for job {self.job_id} already {self.phase.value}"
            )
        self.phase = phase


@dataclass
class BoardState:
    """Mirror of the server's job records plus ephemeral UI state."""
    jobs: List[BoardJob] = field(default_factory=list)
    loading: bool = False
    modal: Optional[ModalKind] = None
    editing: Optional[BoardJob] = None
    pending: Dict[str, PendingMutation] = field(default_factory=dict)

    # ----- mirror -----

    def find(self, job_id: str) -> Optional[BoardJob]:
        return next((job for job in self.jobs if job.id == job_id), None)

    def replace_all(self, records: List[Dict[str, Any]]) -> None:
        """Replace the mirror with a fresh List response."""
        self.jobs = [BoardJob.from_api(record) for record in records]

    def append(self, record: Dict[str, Any]) -> BoardJob:
        job = BoardJob.from_api(record)
        self.jobs.append(job)
        return job

    def replace(self, record: Dict[str, Any]) -> Optional[BoardJob]:
        """Swap in the server's version of a record, keeping its position."""
        updated = BoardJob.from_api(record)
        for index, job in enumerate(self.jobs):
            if job.id == updated.id:
                self.jobs[index] = updated
                return updated
        return None

    def remove(self, job_id: str) -> bool:
        before = len(self.jobs)
        self.jobs = [job for job in self.jobs if job.id != job_id]
        return len(self.jobs) != before

    # ----- modals -----

    def open_create(self) -> None:
        self.modal = ModalKind.CREATE
        self.editing = None

    def open_edit(self, job_id: str) -> Optional[BoardJob]:
        job = self.find(job_id)
        if job is not None:
            self.modal = ModalKind.EDIT
            self.editing = job
        return job

    def close_modal(self) -> None:
        self.modal = None
        self.editing = None

    # ----- drag protocol -----

    def resolve_target_status(self, over_id: Optional[str]) -> Optional[JobStatus]:
        """
        Status a drop target stands for.

        A column identifier is its own status; a card resolves to that
        card's current status; anything else resolves to None.
        """
        if over_id is None:
            return None
        for status in BOARD_COLUMNS:
            if over_id == status.value:
                return status
        target = self.find(over_id)
        return target.status if target is not None else None

    def begin_move(self, active_id: str, over_id: Optional[str]) -> Optional[PendingMutation]:
        """
        Apply a drag optimistically.

        Returns None (and changes nothing) when the drop is a no-op: no
        target, dropped on itself, unknown card, or same column.
        """
        if over_id is None or active_id == over_id:
            return None
        job = self.find(active_id)
        if job is None:
            return None
        target_status = self.resolve_target_status(over_id)
        if target_status is None or target_status == job.status:
            return None

        mutation = PendingMutation(
            job_id=job.id,
            previous_status=job.status,
            target_status=target_status,
        )
        self.jobs = [
            replace(j, status=target_status, confirmed=False) if j.id == job.id else j
            for j in self.jobs
        ]
        self.pending[job.id] = mutation
        return mutation

    def settle(self, mutation: PendingMutation, records: Optional[List[Dict[str, Any]]]) -> None:
        """
        Finish a confirmed or reverted mutation with server truth.

        `records` is the re-fetched List response; None means the resync
        failed, in which case the mirror is left as it is.
        """
        if mutation.is_pending:
            raise MutationStateError(f"Mutation for job {mutation.job_id} is still pending")
        if self.pending.get(mutation.job_id) is mutation:
            del self.pending[mutation.job_id]
        if records is not None:
            self.replace_all(records)

    # ----- rendering -----

    def columns(self) -> "OrderedDict[JobStatus, List[BoardJob]]":
        """Partition the mirror into the fixed columns, keeping mirror order."""
        grouped: "OrderedDict[JobStatus, List[BoardJob]]" = OrderedDict(
            (status, []) for status in BOARD_COLUMNS
        )
        for job in self.jobs:
            grouped[job.status].append(job)
        return grouped
