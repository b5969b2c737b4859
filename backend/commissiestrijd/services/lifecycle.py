from __future__ import annotations
from commissiestrijd.errors import InvalidInput, InvalidTransition
from commissiestrijd.models.submitted_task import SubmittedTask, TaskStatus

MIN_POINTS = 1
MAX_POINTS = 100
MAX_REASON_LENGTH = 500

# target status -> statuses it may be entered from
ALLOWED_SOURCES: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.APPROVED: frozenset({TaskStatus.PENDING, TaskStatus.REJECTED}),
    TaskStatus.REJECTED: frozenset({TaskStatus.PENDING, TaskStatus.APPROVED}),
}


def check_points(points: int) -> int:
    if points < MIN_POINTS:
        raise InvalidInput("Points must be greater than zero.")
    if points > MAX_POINTS:
        raise InvalidInput(f"Points cannot exceed {MAX_POINTS}.")
    return points


def check_max_per_period(value: int | None) -> int | None:
    if value is not None and value < 1:
        raise InvalidInput("Max per period must be at least 1 when set.")
    return value


def _check_transition(task: SubmittedTask, target: TaskStatus) -> None:
    if task.status not in ALLOWED_SOURCES[target]:
        raise InvalidTransition(f"Cannot move a {task.status.value} task to {target.value}.")


def approve(task: SubmittedTask, points: int, max_per_period: int | None = None) -> SubmittedTask:
    """Pending|Rejected -> Approved; overwrites points and cap, clears the rejection reason."""
    check_points(points)
    check_max_per_period(max_per_period)
    _check_transition(task, TaskStatus.APPROVED)
    task.status = TaskStatus.APPROVED
    task.rejection_reason = None
    task.points = points
    task.max_per_period = max_per_period
    return task


def reject(task: SubmittedTask, reason: str | None) -> SubmittedTask:
    """Pending|Approved -> Rejected with a non-empty reason."""
    reason = (reason or "").strip()
    if not reason:
        raise InvalidInput("Rejection reason cannot be empty.")
    if len(reason) > MAX_REASON_LENGTH:
        raise InvalidInput(f"Rejection reason cannot exceed {MAX_REASON_LENGTH} characters.")
    _check_transition(task, TaskStatus.REJECTED)
    task.status = TaskStatus.REJECTED
    task.rejection_reason = reason
    return task
