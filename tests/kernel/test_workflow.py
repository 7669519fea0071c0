"""Tests for workflow definitions and the declared lifecycles."""

import pytest

from flowsync_kernel.domain.workflow import Transition, Workflow
from flowsync_kernel.exceptions import InvalidTransitionError, WorkflowError
from flowsync_modules.billing.workflows import INVOICE_WORKFLOW
from flowsync_modules.timesheet.workflows import TIMESHEET_WORKFLOW


class TestWorkflow:

    def test_initial_state_must_be_declared(self):
        with pytest.raises(ValueError):
            Workflow(name="w", description="", initial_state="X",
                     states=("A",), transitions=())

    def test_transition_states_must_be_declared(self):
        with pytest.raises(ValueError):
            Workflow(name="w", description="", initial_state="A", states=("A",),
                     transitions=(Transition("A", "B", action="go"),))

    def test_undeclared_action_raises(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            TIMESHEET_WORKFLOW.next_state("Approved", "submit")
        assert isinstance(exc_info.value, WorkflowError)
        assert exc_info.value.workflow == "timesheet_entry"


class TestTimesheetWorkflow:

    def test_allowed_actions(self):
        assert TIMESHEET_WORKFLOW.allowed_actions("Draft") == ("submit",)
        assert TIMESHEET_WORKFLOW.allowed_actions("Submitted") == ("approve", "reject")
        assert TIMESHEET_WORKFLOW.allowed_actions("Approved") == ()
        assert TIMESHEET_WORKFLOW.allowed_actions("Rejected") == ()

    def test_review_transitions_are_guarded(self):
        transition = TIMESHEET_WORKFLOW.find_transition("Submitted", "approve")
        assert transition.guard is not None
        assert transition.guard.name == "reviewer_action"


class TestInvoiceWorkflow:

    def test_draft_sent_paid(self):
        assert INVOICE_WORKFLOW.next_state("Draft", "send") == "Sent"
        assert INVOICE_WORKFLOW.next_state("Sent", "record_payment") == "Paid"
        assert INVOICE_WORKFLOW.terminal_states == ("Paid",)
