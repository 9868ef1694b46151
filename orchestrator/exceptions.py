from typing import Optional


class WizardError(Exception):
    """Base class for every error the wizard core raises."""


class InvalidTransition(WizardError):
    """Raised when advance() targets a step outside the current step's next-step set."""

    def __init__(self, current_step: int, target_step: int):
        self.current_step = current_step
        self.target_step = target_step
        super().__init__(
            f"Cannot move from step {current_step} to step {target_step}"
        )


class ActionNotAllowed(WizardError):
    """Raised when an operation is invoked on a step that does not offer it."""

    def __init__(self, action: str, current_step: int, reason: Optional[str] = None):
        self.action = action
        self.current_step = current_step
        message = f"'{action}' is not available on step {current_step}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedCapability(WizardError):
    """Raised when a voice capability is used in an environment that lacks it."""

    def __init__(self, capability: str, notice: str):
        self.capability = capability
        self.notice = notice
        super().__init__(notice)


class InvalidInput(WizardError):
    """Raised when a user-supplied value cannot be recorded (empty name, empty file, bad key press)."""
