"""
Canonical workflow types (``flowsync_kernel.domain.workflow``).

Responsibility
--------------
Pure value objects for document lifecycles (timesheet entries, invoices).
Modules declare a ``Workflow`` once; services ask it which state an action
leads to instead of hard-coding status checks.

Invariants enforced
-------------------
* ``initial_state`` is a member of ``states``.
* Transitions reference only states in ``states``.
* ``next_state`` raises ``InvalidTransitionError`` for any (state, action)
  pair that is not declared -- there are no implicit transitions.
"""

from __future__ import annotations

from dataclasses import dataclass

from flowsync_kernel.exceptions import InvalidTransitionError


@dataclass(frozen=True)
class Guard:
    """A condition that must be satisfied before a transition fires.

    Descriptive only; the calling service evaluates it.
    """
    name: str
    description: str


@dataclass(frozen=True)
class Transition:
    """A valid state transition in a workflow."""
    from_state: str
    to_state: str
    action: str
    guard: Guard | None = None


@dataclass(frozen=True)
class Workflow:
    """A state machine definition for a document lifecycle."""
    name: str
    description: str
    initial_state: str
    states: tuple[str, ...]
    transitions: tuple[Transition, ...]
    terminal_states: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.initial_state not in self.states:
            raise ValueError(
                f"Workflow {self.name}: initial state {self.initial_state!r} not in states"
            )
        for t in self.transitions:
            if t.from_state not in self.states or t.to_state not in self.states:
                raise ValueError(
                    f"Workflow {self.name}: transition {t.action!r} references unknown state"
                )

    def find_transition(self, from_state: str, action: str) -> Transition | None:
        """Return the declared transition for (from_state, action), if any."""
        for t in self.transitions:
            if t.from_state == from_state and t.action == action:
                return t
        return None

    def next_state(self, from_state: str, action: str) -> str:
        """Resolve the target state or raise ``InvalidTransitionError``."""
        transition = self.find_transition(from_state, action)
        if transition is None:
            raise InvalidTransitionError(self.name, from_state, action)
        return transition.to_state

    def allowed_actions(self, from_state: str) -> tuple[str, ...]:
        """Actions available from ``from_state`` in declaration order."""
        return tuple(t.action for t in self.transitions if t.from_state == from_state)
