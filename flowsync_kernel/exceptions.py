"""
Typed Exception Hierarchy for FlowSync.

Every error a caller may want to handle has its own class, a machine-readable
``code`` class attribute, and structured attributes instead of a bare message.

    try:
        registry.register_client(name="Acme", code="ACM", ...)
    except DuplicateClientCodeError as e:
        api_response(code=e.code, client_code=e.client_code)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    FlowSyncError (base)
    |
    +-- EntityNotFoundError
    |
    +-- RegistryError
    |   +-- InvalidClientCodeError
    |   +-- DuplicateClientCodeError
    |   +-- DuplicateProjectCodeError
    |   +-- InvalidServiceCodeError
    |
    +-- TimesheetError
    |   +-- DuplicateTimesheetEntryError
    |   +-- InvalidHoursInputError
    |
    +-- WorkflowError
    |   +-- InvalidTransitionError
    |
    +-- ConfigError

===============================================================================
WHAT IS NOT AN ERROR
===============================================================================

Derived computations (utilization, WIP ledger, grid totals) are total over
their inputs.  A timesheet that references an unknown employee or project
contributes zero or is dropped from the ledger; it never raises.
"""


class FlowSyncError(Exception):
    """
    Base exception for all FlowSync errors.

    All subclasses must have a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "FLOWSYNC_ERROR"


class EntityNotFoundError(FlowSyncError):
    """A command referenced an entity id that does not exist."""

    code: str = "ENTITY_NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")


# Registry (clients / projects)


class RegistryError(FlowSyncError):
    """Base exception for client and project registry errors."""

    code: str = "REGISTRY_ERROR"


class InvalidClientCodeError(RegistryError):
    """Client code is not exactly three alphanumeric characters."""

    code: str = "INVALID_CLIENT_CODE"

    def __init__(self, client_code: str):
        self.client_code = client_code
        super().__init__(
            f"Client code must be 3 alphanumeric characters, got {client_code!r}"
        )


class DuplicateClientCodeError(RegistryError):
    """Client code already registered to another client."""

    code: str = "DUPLICATE_CLIENT_CODE"

    def __init__(self, client_code: str, existing_client_id: str):
        self.client_code = client_code
        self.existing_client_id = existing_client_id
        super().__init__(
            f"Client code {client_code} already used by client {existing_client_id}"
        )


class DuplicateProjectCodeError(RegistryError):
    """Project code already exists firm-wide."""

    code: str = "DUPLICATE_PROJECT_CODE"

    def __init__(self, project_code: str):
        self.project_code = project_code
        super().__init__(f"Project code already exists: {project_code}")


class InvalidServiceCodeError(RegistryError):
    """Service code is not one of the configured service lines."""

    code: str = "INVALID_SERVICE_CODE"

    def __init__(self, service_code: str, allowed: tuple[str, ...]):
        self.service_code = service_code
        self.allowed = allowed
        super().__init__(
            f"Unknown service code {service_code!r}; allowed: {', '.join(allowed)}"
        )


# Timesheets


class TimesheetError(FlowSyncError):
    """Base exception for timesheet errors."""

    code: str = "TIMESHEET_ERROR"


class DuplicateTimesheetEntryError(TimesheetError):
    """An entry already exists for (employee, project, date)."""

    code: str = "DUPLICATE_TIMESHEET_ENTRY"

    def __init__(self, employee_id: str, project_id: str, work_date: str):
        self.employee_id = employee_id
        self.project_id = project_id
        self.work_date = work_date
        super().__init__(
            f"Timesheet entry already exists for employee {employee_id}, "
            f"project {project_id} on {work_date}"
        )


class InvalidHoursInputError(TimesheetError):
    """Hours text is not a plain non-negative decimal."""

    code: str = "INVALID_HOURS_INPUT"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid hours input: {value!r}")


# Workflows


class WorkflowError(FlowSyncError):
    """Base exception for workflow errors."""

    code: str = "WORKFLOW_ERROR"


class InvalidTransitionError(WorkflowError):
    """No transition exists from the current state for the requested action."""

    code: str = "INVALID_TRANSITION"

    def __init__(self, workflow: str, from_state: str, action: str):
        self.workflow = workflow
        self.from_state = from_state
        self.action = action
        super().__init__(
            f"Workflow {workflow}: action {action!r} not allowed from state {from_state!r}"
        )


# Configuration


class ConfigError(FlowSyncError):
    """Firm configuration is malformed."""

    code: str = "CONFIG_ERROR"

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(message)
