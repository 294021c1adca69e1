"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from cabinet_designer.domain import DIMENSION_LIMITS, Cabinet

from .session import DesignSession


@dataclass
class DimensionsInput:
    """Input DTO for carcass dimensions."""

    width: float
    height: float
    depth: float
    base: float

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        for name, (lower, upper) in DIMENSION_LIMITS.items():
            value = getattr(self, name)
            if not lower <= value <= upper:
                errors.append(
                    f"{name.capitalize()} must be between {lower:g} and {upper:g} mm"
                )
        return errors


@dataclass(frozen=True)
class StepOutcome:
    """Result of replaying one step of a layout script.

    Attributes:
        index: Position of the step in the script.
        action: Step action name.
        success: False when the engine rejected the step.
        message: Short description of what happened.
    """

    index: int
    action: str
    success: bool
    message: str


@dataclass
class LayoutScriptResult:
    """Output DTO of a layout script run.

    Attributes:
        session: The session the script was replayed in, None when it could
            not be created.
        outcomes: One entry per step, in script order.
        errors: Errors that prevented the script from running at all.
    """

    session: DesignSession | None = None
    outcomes: list[StepOutcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def cabinet(self) -> Cabinet | None:
        return self.session.cabinet if self.session is not None else None

    @property
    def is_valid(self) -> bool:
        """Check if the script could be run."""
        return len(self.errors) == 0

    @property
    def failed_steps(self) -> list[StepOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def all_steps_succeeded(self) -> bool:
        return self.is_valid and not self.failed_steps
