"""Application commands (use cases) for the cabinet designer."""

from __future__ import annotations

import logging
from typing import Callable

from cabinet_designer.application.config import (
    AddDividerStep,
    AddRodStep,
    AddRodsStep,
    AddShelfStep,
    AddStandStep,
    DivideSectionStep,
    LayoutConfiguration,
    LayoutStep,
    MoveDividerStep,
    MoveRodStep,
    RedoStep,
    RemoveDividerStep,
    RemoveRodStep,
    ResizeStep,
    UndoStep,
    config_to_cabinet,
)
from cabinet_designer.domain import Cabinet, HistoryManager, Part

from .dtos import DimensionsInput, LayoutScriptResult, StepOutcome
from .session import DesignSession

logger = logging.getLogger(__name__)


class RunLayoutScriptCommand:
    """Command to replay a layout script in a fresh design session.

    Every step runs as one session action, so undo and redo steps in the
    script behave exactly like the editor's. A rejected step is recorded and
    the script carries on with the next one.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, Callable[[DesignSession, object], tuple[bool, str]]] = {
            AddDividerStep: self._add_divider,
            AddShelfStep: self._add_shelf,
            AddStandStep: self._add_stand,
            MoveDividerStep: self._move_divider,
            RemoveDividerStep: self._remove_divider,
            DivideSectionStep: self._divide_section,
            AddRodStep: self._add_rod,
            AddRodsStep: self._add_rods,
            MoveRodStep: self._move_rod,
            RemoveRodStep: self._remove_rod,
            ResizeStep: self._resize,
            UndoStep: self._undo,
            RedoStep: self._redo,
        }

    def execute(self, config: LayoutConfiguration) -> LayoutScriptResult:
        """Execute the layout script.

        Args:
            config: A validated layout script.

        Returns:
            LayoutScriptResult with the session and one outcome per step.
        """
        try:
            cabinet = config_to_cabinet(config)
        except ValueError as e:
            return LayoutScriptResult(errors=[str(e)])

        session = DesignSession(
            cabinet=cabinet, history=HistoryManager(config.history.max_size)
        )
        result = LayoutScriptResult(session=session)

        for index, step in enumerate(config.steps):
            outcome = self.apply_step(session, step, index)
            result.outcomes.append(outcome)

        logger.debug(
            f"Replayed {len(config.steps)} steps, {len(result.failed_steps)} rejected"
        )
        return result

    def apply_step(self, session: DesignSession, step: LayoutStep, index: int = 0) -> StepOutcome:
        """Apply one editing step to a session as a single action."""
        handler = self._handlers[type(step)]
        success, message = handler(session, step)
        if not success:
            logger.info(f"Step {index} ({step.action}) rejected: {message}")
        return StepOutcome(index, step.action, success, message)

    @staticmethod
    def _add_divider(session: DesignSession, step: AddDividerStep) -> tuple[bool, str]:
        label = step.orientation.label.lower()
        ok = session.add_divider(step.orientation, step.pos, step.start, step.end)
        if ok:
            return ok, f"added {label} at {step.pos:g}"
        return ok, f"no room for a {label} at {step.pos:g}"

    @staticmethod
    def _add_shelf(session: DesignSession, step: AddShelfStep) -> tuple[bool, str]:
        ok = session.add_shelf_at(step.x, step.y)
        if ok:
            return ok, f"added shelf at {session.cabinet.dividers[-1].pos:g}"
        return ok, f"no room for a shelf at ({step.x:g}, {step.y:g})"

    @staticmethod
    def _add_stand(session: DesignSession, step: AddStandStep) -> tuple[bool, str]:
        ok = session.add_stand_at(step.x, step.y)
        if ok:
            return ok, f"added stand at {session.cabinet.dividers[-1].pos:g}"
        return ok, f"no room for a stand at ({step.x:g}, {step.y:g})"

    @staticmethod
    def _move_divider(session: DesignSession, step: MoveDividerStep) -> tuple[bool, str]:
        if not session.move_divider(step.divider_id, step.pos):
            return False, f"divider {step.divider_id} does not exist"
        divider = session.cabinet.get_divider(step.divider_id)
        return True, f"divider {step.divider_id} now at {divider.pos:g}"

    @staticmethod
    def _remove_divider(session: DesignSession, step: RemoveDividerStep) -> tuple[bool, str]:
        preview = session.removal_preview(step.divider_id)
        if preview is None or not session.remove_divider(step.divider_id):
            return False, f"divider {step.divider_id} does not exist"
        return True, f"removed divider {step.divider_id} and {preview.dependents} dependents"

    @staticmethod
    def _divide_section(session: DesignSession, step: DivideSectionStep) -> tuple[bool, str]:
        label = step.orientation.label.lower()
        ok = session.divide_section(step.section, step.orientation, step.count)
        if ok:
            return ok, f"divided section {step.section} with {step.count} {label}s"
        return ok, f"section {step.section} cannot take {step.count} {label}s"

    @staticmethod
    def _add_rod(session: DesignSession, step: AddRodStep) -> tuple[bool, str]:
        ok = session.add_rod(step.section, step.y)
        if ok:
            return ok, f"added rod at {session.cabinet.rods[-1].y:g}"
        return ok, f"section {step.section} cannot hold a rod"

    @staticmethod
    def _add_rods(session: DesignSession, step: AddRodsStep) -> tuple[bool, str]:
        ok = session.add_rods(step.section, step.count)
        if ok:
            return ok, f"added {step.count} rods to section {step.section}"
        return ok, f"section {step.section} cannot hold {step.count} rods"

    @staticmethod
    def _move_rod(session: DesignSession, step: MoveRodStep) -> tuple[bool, str]:
        if not session.move_rod(step.rod_id, step.x, step.y):
            return False, f"rod {step.rod_id} cannot move to ({step.x:g}, {step.y:g})"
        rod = session.cabinet.get_rod(step.rod_id)
        return True, f"rod {step.rod_id} now in section {rod.section_id}"

    @staticmethod
    def _remove_rod(session: DesignSession, step: RemoveRodStep) -> tuple[bool, str]:
        if not session.remove_rod(step.rod_id):
            return False, f"rod {step.rod_id} does not exist"
        return True, f"removed rod {step.rod_id}"

    @staticmethod
    def _resize(session: DesignSession, step: ResizeStep) -> tuple[bool, str]:
        before = len(session.cabinet.dividers)
        session.resize(width=step.width, height=step.height, depth=step.depth, base=step.base)
        cabinet = session.cabinet
        message = f"carcass now {cabinet.width:g} x {cabinet.height:g} x {cabinet.depth:g}"
        dropped = before - len(cabinet.dividers)
        if dropped:
            message += f", {dropped} dividers dropped"
        return True, message

    @staticmethod
    def _undo(session: DesignSession, step: UndoStep) -> tuple[bool, str]:
        if session.undo():
            return True, "undone"
        return False, "nothing to undo"

    @staticmethod
    def _redo(session: DesignSession, step: RedoStep) -> tuple[bool, str]:
        if session.redo():
            return True, "redone"
        return False, "nothing to redo"


class ListCarcassPartsCommand:
    """Command to list the parts of an empty carcass."""

    def execute(self, dimensions: DimensionsInput) -> tuple[list[Part], list[str]]:
        """Return the parts list, or the validation errors."""
        errors = dimensions.validate()
        if errors:
            return [], errors
        cabinet = Cabinet(
            dimensions.width, dimensions.height, dimensions.depth, dimensions.base
        )
        return cabinet.get_all_parts(), []
