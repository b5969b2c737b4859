from __future__ import annotations
import uuid
from datetime import datetime, timezone
import pytest
from commissiestrijd.errors import InvalidInput, InvalidTransition, PolicyViolation
from commissiestrijd.models.submitted_task import SubmittedTask, TaskStatus
from commissiestrijd.services import lifecycle


def _task(status=TaskStatus.PENDING, points=10, reason=None) -> SubmittedTask:
    return SubmittedTask(
        id=uuid.uuid4(),
        possible_task_id=uuid.uuid4(),
        committee="Borrelcommissie",
        submitted_at=datetime(2025, 5, 1, 12, tzinfo=timezone.utc),
        image_path="abc.png",
        status=status,
        points=points,
        rejection_reason=reason,
    )


def _consistent(t: SubmittedTask) -> bool:
    return (t.rejection_reason is not None) == (t.status == TaskStatus.REJECTED)


@pytest.mark.parametrize("points", [0, 101, -5])
def test_approve_rejects_points_out_of_range(points):
    t = _task()
    with pytest.raises(InvalidInput):
        lifecycle.approve(t, points)
    assert t.status == TaskStatus.PENDING and t.points == 10


def test_approve_max_points_clears_previous_rejection():
    t = _task(status=TaskStatus.REJECTED, reason="Blurry photo")
    lifecycle.approve(t, 100, max_per_period=3)
    assert t.status == TaskStatus.APPROVED
    assert t.points == 100 and t.max_per_period == 3
    assert t.rejection_reason is None
    assert _consistent(t)


def test_approve_overwrites_cap_with_none():
    t = _task()
    t.max_per_period = 4
    lifecycle.approve(t, 5)
    assert t.max_per_period is None


def test_approve_rejects_non_positive_cap():
    with pytest.raises(InvalidInput):
        lifecycle.approve(_task(), 5, max_per_period=0)


@pytest.mark.parametrize("reason", ["", "   ", None])
def test_reject_requires_reason(reason):
    t = _task()
    with pytest.raises(InvalidInput):
        lifecycle.reject(t, reason)
    assert t.status == TaskStatus.PENDING


def test_reject_reason_length_limit():
    with pytest.raises(InvalidInput):
        lifecycle.reject(_task(), "x" * 501)
    t = lifecycle.reject(_task(), "x" * 500)
    assert len(t.rejection_reason) == 500


def test_reject_after_approval_and_back():
    t = _task()
    lifecycle.approve(t, 20)
    lifecycle.reject(t, "  Wrong committee  ")
    assert t.status == TaskStatus.REJECTED and t.rejection_reason == "Wrong committee"
    assert _consistent(t)
    lifecycle.approve(t, 15)
    assert t.status == TaskStatus.APPROVED and _consistent(t)


def test_same_state_transition_is_illegal():
    approved = _task()
    lifecycle.approve(approved, 20)
    with pytest.raises(InvalidTransition):
        lifecycle.approve(approved, 30)
    assert approved.points == 20

    rejected = _task(status=TaskStatus.REJECTED, reason="No")
    with pytest.raises(InvalidTransition) as exc:
        lifecycle.reject(rejected, "Still no")
    assert isinstance(exc.value, PolicyViolation)
    assert rejected.rejection_reason == "No"


def test_validation_runs_before_transition_check():
    # out-of-range points on an approved task is an input error, not a transition error
    t = _task()
    lifecycle.approve(t, 20)
    with pytest.raises(InvalidInput):
        lifecycle.approve(t, 0)
