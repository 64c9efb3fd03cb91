"""Step state machine.

The flow is linear and fixed::

    template -> image -> compute -> scheduler

Moving forward is gated per step; moving back is always allowed.  Gates are
cumulative because the flow is monotonic: a step's gate includes every gate
before it, so a draft can never sit past a step whose requirements it does
not meet.

Submit has its own gate: the control exists only at ``compute`` with
scheduling disabled, or at ``scheduler``, and is enabled only while the full
draft validates and no submission is in flight.
"""

from __future__ import annotations

from loguru import logger

from wsforge.wizard.models.draft import Draft, ValidationResult
from wsforge.wizard.models.enums import Step

STEP_ORDER: tuple[Step, ...] = (Step.TEMPLATE, Step.IMAGE, Step.COMPUTE, Step.SCHEDULER)

_NEXT: dict[Step, Step] = {
    Step.TEMPLATE: Step.IMAGE,
    Step.IMAGE: Step.COMPUTE,
    Step.COMPUTE: Step.SCHEDULER,
}

_PREVIOUS: dict[Step, Step] = {
    Step.SCHEDULER: Step.COMPUTE,
    Step.COMPUTE: Step.IMAGE,
    Step.IMAGE: Step.TEMPLATE,
}

STEP_HEADINGS: dict[Step, str] = {
    Step.TEMPLATE: "Select starter template for your workspace.",
    Step.IMAGE: "Select build image for your workspace.",
    Step.COMPUTE: "Select computes for your workspace.",
    Step.SCHEDULER: "Select schedules for your workspace",
}


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------


def next_step(step: Step) -> Step:
    """Following step; ``scheduler`` is terminal and maps to itself."""
    return _NEXT.get(step, step)


def previous_step(step: Step) -> Step:
    """Preceding step; ``template`` is terminal and maps to itself."""
    return _PREVIOUS.get(step, step)


# ---------------------------------------------------------------------------
# Gating predicates
# ---------------------------------------------------------------------------


def _own_gate(draft: Draft, step: Step) -> bool:
    match step:
        case Step.TEMPLATE:
            return bool(draft.name) and bool(draft.template_id)
        case Step.IMAGE:
            return bool(draft.tfconfig.image)
        case Step.COMPUTE:
            return bool(draft.tshirt_size) and bool(draft.tfconfig.drive)
        case Step.SCHEDULER:
            return True


def step_gate(draft: Draft, step: Step) -> bool:
    """Whether "Save & Next" may leave *step* (includes all earlier gates)."""
    for candidate in STEP_ORDER:
        if not _own_gate(draft, candidate):
            return False
        if candidate == step:
            return True
    return True


def submit_visible(draft: Draft) -> bool:
    """Submit replaces "Save & Next" at compute (no schedule) and at scheduler."""
    return (draft.step == Step.COMPUTE and not draft.schedule) or draft.step == Step.SCHEDULER


def can_advance(draft: Draft) -> bool:
    return not submit_visible(draft) and step_gate(draft, draft.step)


def can_retreat(draft: Draft) -> bool:
    return draft.step != Step.TEMPLATE


def can_submit(draft: Draft, validation: ValidationResult, *, in_flight: bool = False) -> bool:
    return submit_visible(draft) and validation.valid and not in_flight


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def advance(draft: Draft) -> Step:
    """Step after a "Save & Next"; the current step when the gate is closed."""
    if not can_advance(draft):
        return draft.step
    return next_step(draft.step)


def retreat(draft: Draft) -> Step:
    return previous_step(draft.step)


def jump(draft: Draft, target: Step) -> Step:
    """Resolve an externally forced step change.

    Backward (or same-step) jumps always land.  Forward jumps land only if
    every step being skipped over has an open gate, and the scheduler step
    only exists while scheduling is enabled; otherwise the current step is
    kept.  Never raises.
    """
    current = STEP_ORDER.index(draft.step)
    wanted = STEP_ORDER.index(target)
    if wanted <= current:
        return target
    if target == Step.SCHEDULER and not draft.schedule:
        logger.debug("Ignoring jump {} -> {}: scheduling is disabled", draft.step, target)
        return draft.step
    for step in STEP_ORDER[current:wanted]:
        if not step_gate(draft, step):
            logger.debug("Ignoring jump {} -> {}: step {} is incomplete", draft.step, target, step)
            return draft.step
    return target
