"""
Board controller: the user-facing flows of the kanban board.

Wires BoardState to the API client. Every failure is reported once through
the `notify` callback with the error's message and never retried; the user
repeats the action if they want to.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from .client import JobsApiError, JobsClient
from .state import BoardJob, BoardState, PendingMutation

logger = logging.getLogger(__name__)

# Failures a request can end with
REQUEST_ERRORS = (JobsApiError, requests.RequestException)


def _error_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error) or "Unknown error"


class BoardController:
    """Create, edit, delete, load and drag flows over a BoardState."""

    def __init__(
        self,
        client: JobsClient,
        notify: Callable[[str], None],
        state: Optional[BoardState] = None,
    ):
        """
        Args:
            client: API client
            notify: Blocking user notification, called with a message
            state: Existing board state (default: empty board)
        """
        self.client = client
        self.notify = notify
        self.state = state or BoardState()

    def _report(self, action: str, error: Exception) -> None:
        message = f"{action} failed: {_error_message(error)}"
        logger.warning(message)
        self.notify(message)

    def load(self) -> bool:
        """Initial load: replace the mirror with the server's list."""
        self.state.loading = True
        try:
            self.state.replace_all(self.client.list_jobs())
            return True
        except REQUEST_ERRORS as e:
            self._report("Load", e)
            return False
        finally:
            self.state.loading = False

    def create(self, fields: Dict[str, Any]) -> Optional[BoardJob]:
        """
        Submit the creation form.

        No optimistic insert: the card appears once the server has assigned
        its id. The form stays open on failure.
        """
        try:
            record = self.client.create_job(fields)
        except REQUEST_ERRORS as e:
            self._report("Create", e)
            return None
        job = self.state.append(record)
        self.state.close_modal()
        return job

    def open_edit(self, job_id: str) -> Optional[Dict[str, str]]:
        """Open the edit form; returns its pre-filled fields."""
        job = self.state.open_edit(job_id)
        return job.form_fields() if job is not None else None

    def submit_edit(self, fields: Dict[str, Any]) -> Optional[BoardJob]:
        """Save the edit form with the full field set."""
        editing = self.state.editing
        if editing is None:
            return None
        try:
            record = self.client.update_job(editing.id, fields)
        except REQUEST_ERRORS as e:
            self._report("Update", e)
            return None
        job = self.state.replace(record)
        self.state.close_modal()
        return job

    def delete(self, job_id: str) -> bool:
        """Delete a card; the mirror is untouched if the request fails."""
        try:
            self.client.delete_job(job_id)
        except REQUEST_ERRORS as e:
            self._report("Delete", e)
            return False
        self.state.remove(job_id)
        return True

    def drag_end(self, active_id: str, over_id: Optional[str]) -> Optional[PendingMutation]:
        """
        Handle a card being dropped on a column or on another card.

        The move shows immediately; the status update is then sent and the
        mirror is re-synced from the server whether it succeeded or not.
        Returns the settled mutation, or None for a no-op drop.
        """
        mutation = self.state.begin_move(active_id, over_id)
        if mutation is None:
            return None

        try:
            self.client.update_job(mutation.job_id, {"status": mutation.target_status.value})
            mutation.confirm()
        except REQUEST_ERRORS as e:
            mutation.revert(_error_message(e))
            self._report("Update", e)

        self.state.settle(mutation, self._resync())
        return mutation

    def _resync(self) -> Optional[List[Dict[str, Any]]]:
        try:
            return self.client.list_jobs()
        except REQUEST_ERRORS as e:
            self._report("Refresh", e)
            return None
