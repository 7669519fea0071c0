"""Invoice Workflows."""

from flowsync_kernel.domain.workflow import Transition, Workflow

INVOICE_WORKFLOW = Workflow(
    name="invoice",
    description="Client invoice lifecycle",
    initial_state="Draft",
    states=("Draft", "Sent", "Paid"),
    transitions=(
        Transition("Draft", "Sent", action="send"),
        Transition("Sent", "Paid", action="record_payment"),
    ),
    terminal_states=("Paid",),
)
