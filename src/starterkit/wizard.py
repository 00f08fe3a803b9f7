"""
Multi-step form state.

A Wizard walks a fixed sequence of steps, collecting fields into form_data.
Each step may have a validator that must pass before moving forward, and the
collected data is handed to a submit handler from the last step only.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_STEPS = (
    "Basic Information",
    "Details",
    "Preferences",
    "Review & Confirm",
)

# A validator returns an error message, or None when the step is complete.
StepValidator = Callable[[Dict[str, Any]], Optional[str]]


class WizardError(Exception):
    """Raised when the wizard is driven out of order."""


class WizardValidationError(WizardError):
    def __init__(self, step: int, message: str) -> None:
        super().__init__(f"Step {step}: {message}")
        self.step = step
        self.message = message


# PUBLIC_INTERFACE
class Wizard:
    """
    Args:
        steps: Step titles, in order. At least one is required.
        validators: Optional mapping of 1-based step number to validator.
    """

    def __init__(
        self,
        steps: Sequence[str] = DEFAULT_STEPS,
        validators: Optional[Mapping[int, StepValidator]] = None,
    ) -> None:
        if not steps:
            raise ValueError("a wizard needs at least one step")
        self._steps = list(steps)
        self._validators = dict(validators or {})
        self.current_step = 1
        self.form_data: Dict[str, Any] = {}
        self.submitted = False

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def title(self) -> str:
        return self._steps[self.current_step - 1]

    @property
    def progress(self) -> List[bool]:
        return [i < self.current_step for i in range(self.total_steps)]

    @property
    def can_go_back(self) -> bool:
        return self.current_step > 1

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.total_steps

    def update(self, **fields: Any) -> None:
        self.form_data.update(fields)

    def validate_current(self) -> None:
        validator = self._validators.get(self.current_step)
        if validator is None:
            return
        message = validator(dict(self.form_data))
        if message:
            raise WizardValidationError(self.current_step, message)

    def next(self) -> int:
        """Advance one step once the current step validates; no-op on the last step."""
        if self.is_last_step:
            return self.current_step
        self.validate_current()
        self.current_step += 1
        return self.current_step

    def previous(self) -> int:
        if self.can_go_back:
            self.current_step -= 1
        return self.current_step

    def submit(self, handler: Callable[[Dict[str, Any]], Any]) -> Any:
        """
        Validate the last step and pass a copy of form_data to handler.

        Raises:
            WizardError: if called before the last step.
            WizardValidationError: if the last step does not validate.
        Any exception from handler is logged and re-raised; the wizard stays
        unsubmitted so the call can be repeated.
        """
        if not self.is_last_step:
            raise WizardError(f"cannot submit from step {self.current_step} of {self.total_steps}")
        self.validate_current()
        try:
            result = handler(dict(self.form_data))
        except Exception:
            logger.exception("Wizard submission failed")
            raise
        self.submitted = True
        return result

    def reset(self) -> None:
        self.current_step = 1
        self.form_data = {}
        self.submitted = False
