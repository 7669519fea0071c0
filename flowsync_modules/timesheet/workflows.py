"""
Timesheet Workflows.

Draft -> Submitted by the employee; Submitted -> Approved | Rejected by a
reviewer.  Approved and Rejected are terminal: rejected time is not
resurfaced for correction.
"""

from flowsync_kernel.domain.workflow import Guard, Transition, Workflow
from flowsync_kernel.logging_config import get_logger

logger = get_logger("modules.timesheet.workflows")


REVIEWER_ACTION = Guard(
    name="reviewer_action",
    description="Transition performed by a reviewer, not the entry owner",
)


TIMESHEET_WORKFLOW = Workflow(
    name="timesheet_entry",
    description="Timesheet entry approval lifecycle",
    initial_state="Draft",
    states=("Draft", "Submitted", "Approved", "Rejected"),
    transitions=(
        Transition("Draft", "Submitted", action="submit"),
        Transition("Submitted", "Approved", action="approve", guard=REVIEWER_ACTION),
        Transition("Submitted", "Rejected", action="reject", guard=REVIEWER_ACTION),
    ),
    terminal_states=("Approved", "Rejected"),
)

logger.info(
    "timesheet_workflow_registered",
    extra={
        "workflow_name": TIMESHEET_WORKFLOW.name,
        "state_count": len(TIMESHEET_WORKFLOW.states),
        "transition_count": len(TIMESHEET_WORKFLOW.transitions),
    },
)
