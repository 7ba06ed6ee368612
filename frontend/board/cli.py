"""
Terminal client for the job tracker board.

Usage:
    python -m frontend.board show
    python -m frontend.board add --company Acme --role Engineer --date 2024-01-10
    python -m frontend.board edit <job_id> --role "Senior Engineer"
    python -m frontend.board move <job_id> Interviewing
    python -m frontend.board move <job_id> <other_job_id>
    python -m frontend.board delete <job_id>

Each command loads the board first, runs one flow through BoardController
and prints the resulting board.
"""

import argparse
import sys
from typing import Callable, List, Optional

from src.common.config import Config
from src.common.job_schema import STATUS_VALUES

from .client import JobsClient
from .controller import BoardController
from .state import BoardState


def render_board(state: BoardState) -> str:
    """Render the board as text, one block per column."""
    lines: List[str] = []
    for status, jobs in state.columns().items():
        lines.append(f"== {status.value} ({len(jobs)}) ==")
        if not jobs:
            lines.append("  No jobs yet")
        for job in jobs:
            marker = "" if job.confirmed else " (saving...)"
            lines.append(f"  [{job.id}] {job.company_name} - {job.role} ({job.display_date}){marker}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def _stderr_notify(message: str) -> None:
    print(f"❌ {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="frontend.board", description="Job tracker kanban board")
    parser.add_argument(
        "--api-url",
        default=Config.JOB_TRACKER_API_URL,
        help=f"API root (default: {Config.JOB_TRACKER_API_URL})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the board")

    add = sub.add_parser("add", help="Add a job application")
    add.add_argument("--company", required=True)
    add.add_argument("--role", required=True)
    add.add_argument("--date", required=True, help="Date applied (YYYY-MM-DD)")
    add.add_argument("--status", choices=STATUS_VALUES, default=STATUS_VALUES[0])

    edit = sub.add_parser("edit", help="Edit a job application")
    edit.add_argument("job_id")
    edit.add_argument("--company")
    edit.add_argument("--role")
    edit.add_argument("--date", help="Date applied (YYYY-MM-DD)")
    edit.add_argument("--status", choices=STATUS_VALUES)

    move = sub.add_parser("move", help="Drag a job onto a column or another job")
    move.add_argument("job_id")
    move.add_argument("target", help="Column name or id of a job in the target column")

    delete = sub.add_parser("delete", help="Delete a job application")
    delete.add_argument("job_id")

    return parser


def _run_edit(controller: BoardController, args: argparse.Namespace, notify: Callable[[str], None]) -> bool:
    fields = controller.open_edit(args.job_id)
    if fields is None:
        notify(f"Job not found: {args.job_id}")
        return False
    overrides = {
        "companyName": args.company,
        "role": args.role,
        "dateApplied": args.date,
        "status": args.status,
    }
    fields.update({key: value for key, value in overrides.items() if value is not None})
    return controller.submit_edit(fields) is not None


def main(
    argv: Optional[List[str]] = None,
    client: Optional[JobsClient] = None,
    notify: Callable[[str], None] = _stderr_notify,
) -> int:
    args = build_parser().parse_args(argv)
    controller = BoardController(client or JobsClient(args.api_url), notify)

    if not controller.load():
        return 1

    ok = True
    if args.command == "add":
        ok = controller.create({
            "companyName": args.company,
            "role": args.role,
            "dateApplied": args.date,
            "status": args.status,
        }) is not None
    elif args.command == "edit":
        ok = _run_edit(controller, args, notify)
    elif args.command == "move":
        if controller.state.find(args.job_id) is None:
            notify(f"Job not found: {args.job_id}")
            ok = False
        else:
            mutation = controller.drag_end(args.job_id, args.target)
            ok = mutation is None or mutation.error is None
    elif args.command == "delete":
        ok = controller.delete(args.job_id)

    print(render_board(controller.state), end="")
    return 0 if ok else 1
