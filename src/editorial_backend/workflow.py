"""Ordering and display rules for the editorial workflow stages"""

from typing import List, Literal, NamedTuple, Optional

from .models import SubmissionStatus, WorkflowStage

WORKFLOW_STAGES = (
    ("submission", "Submission"),
    ("review", "Review"),
    ("copyediting", "Copyediting"),
    ("production", "Production"),
    ("published", "Published"),
)

DEFAULT_COLOR = "bg-gray-100 text-gray-800"

STAGE_COLORS = {
    "published": "bg-green-100 text-green-800",
    "production": "bg-purple-100 text-purple-800",
    "copyediting": "bg-yellow-100 text-yellow-800",
    "review": "bg-blue-100 text-blue-800",
}

STATUS_COLORS = {
    "published": "bg-green-100 text-green-800",
    "review": "bg-blue-100 text-blue-800",
    "declined": "bg-red-100 text-red-800",
}

StepState = Literal["completed", "current", "upcoming"]


class StageStep(NamedTuple):
    key: str
    label: str
    position: int
    state: StepState
    clickable: bool


def stage_index(stage: WorkflowStage) -> int:
    """Position of ``stage`` in the workflow, starting at 0"""
    for index, (key, _) in enumerate(WORKFLOW_STAGES):
        if key == stage:
            return index
    raise ValueError(f"Unknown workflow stage: {stage}")


def stage_progress(current: WorkflowStage, clickable: bool = False) -> List[StageStep]:
    """Describe every stage relative to ``current``

    Stages before ``current`` are completed, later ones upcoming. When
    ``clickable`` is set, only completed stages and the current one can be
    selected.
    """
    current_index = stage_index(current)
    steps = []
    for index, (key, label) in enumerate(WORKFLOW_STAGES):
        if index < current_index:
            state = "completed"
        elif index == current_index:
            state = "current"
        else:
            state = "upcoming"
        steps.append(
            StageStep(
                key=key,
                label=label,
                position=index + 1,
                state=state,
                clickable=clickable and index <= current_index,
            )
        )
    return steps


def stage_color(stage: Optional[WorkflowStage]) -> str:
    return STAGE_COLORS.get(stage, DEFAULT_COLOR)


def status_color(status: Optional[SubmissionStatus]) -> str:
    return STATUS_COLORS.get(status, DEFAULT_COLOR)
