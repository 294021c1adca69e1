"""Design session: the caller-owned side of interactive editing.

A session owns one cabinet, its undo/redo history and the interaction state
of the editor (tool mode, selection, drag in progress). The engine never sees
any of this state; the session only calls the cabinet's public operations.

Every logical action is one history transaction: the state before the action
is recorded if it is not already the history tip, the mutation runs, and the
resulting state is recorded when the mutation succeeded. A drag is a single
transaction that is committed on release or discarded on cancel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Literal

from cabinet_designer.domain import (
    Cabinet,
    CabinetState,
    Divider,
    HistoryInfo,
    HistoryManager,
    LayoutConstants,
    Orientation,
    Rod,
)
from cabinet_designer.domain.constants import (
    DEFAULT_BASE,
    DEFAULT_CONSTANTS,
    DEFAULT_DEPTH,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
)

logger = logging.getLogger(__name__)

# Distance within which a click snaps a new divider to the section centre
SNAP_THRESHOLD = 15.0


class ToolMode(str, Enum):
    """Editor tool currently active."""

    NONE = "none"
    EDIT = "edit"
    SHELF = "shelf"
    STAND = "stand"
    ROD = "rod"
    DELETE = "delete"
    DIVIDE = "divide"


DragKind = Literal["divider", "rod", "resize"]


@dataclass
class DragState:
    """A drag in progress and the state to return to on cancel."""

    kind: DragKind
    original: CabinetState
    target_id: int | None = None


@dataclass
class InteractionState:
    """Editor state that belongs to the caller, never to the engine."""

    mode: ToolMode = ToolMode.NONE
    divide_type: Literal["shelf", "stand", "rod"] | None = None
    divide_count: int | None = None
    selected_divider_id: int | None = None
    selected_rod_id: int | None = None
    hovered_section: int | None = None
    drag: DragState | None = None

    def clear_selection(self) -> None:
        self.selected_divider_id = None
        self.selected_rod_id = None


@dataclass(frozen=True)
class RemovalPreview:
    """What removing a divider would take with it."""

    divider_id: int
    shelves: int
    stands: int

    @property
    def dependents(self) -> int:
        return self.shelves + self.stands


@dataclass
class DesignSession:
    """One designer editing one cabinet.

    Attributes:
        cabinet: The cabinet being edited.
        history: Undo/redo history; its tip always matches the cabinet after
            a committed action.
        interaction: Tool mode, selection and drag state.
    """

    cabinet: Cabinet = field(
        default_factory=lambda: Cabinet(DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_DEPTH, DEFAULT_BASE)
    )
    history: HistoryManager | None = None
    interaction: InteractionState = field(default_factory=InteractionState)

    def __post_init__(self) -> None:
        if self.history is None:
            self.history = HistoryManager(self.cabinet.constants.max_history)
        if len(self.history) == 0:
            self.history.push(self.cabinet.get_state())

    @classmethod
    def create(
        cls,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        depth: float = DEFAULT_DEPTH,
        base: float = DEFAULT_BASE,
        constants: LayoutConstants = DEFAULT_CONSTANTS,
        history_size: int | None = None,
    ) -> "DesignSession":
        """Start a session on an empty cabinet."""
        cabinet = Cabinet(width, height, depth, base, constants=constants)
        history = HistoryManager(history_size or constants.max_history)
        return cls(cabinet=cabinet, history=history)

    # -- transactions ------------------------------------------------------

    def _checkpoint(self) -> None:
        """Record the current state unless it already is the history tip."""
        state = self.cabinet.get_state()
        if self.history.current() != state:
            self.history.push(state)

    def _commit(self, label: str) -> None:
        state = self.cabinet.get_state()
        if self.history.current() != state:
            self.history.push(state)
            logger.info(f"Committed: {label}")

    def transaction(self, label: str, mutation: Callable[[], bool]) -> bool:
        """Run one mutation as a single undoable action."""
        if self.interaction.drag is not None:
            logger.debug(f"Ignored {label}: drag in progress")
            return False
        self._checkpoint()
        success = mutation()
        if success:
            self._commit(label)
        else:
            logger.debug(f"Rejected: {label}")
        return success

    # -- divider actions ---------------------------------------------------

    def add_divider(
        self, orientation: Orientation, pos: float, start: float, end: float
    ) -> bool:
        orientation = Orientation(orientation)
        return self.transaction(
            f"add {orientation.label.lower()} at {pos:g}",
            lambda: self.cabinet.add_divider(orientation, pos, start, end),
        )

    def add_shelf_at(self, x: float, y: float) -> bool:
        """Insert a shelf across the section under a click point."""
        return self._add_divider_at(Orientation.HORIZONTAL, x, y)

    def add_stand_at(self, x: float, y: float) -> bool:
        """Insert a stand across the section under a click point."""
        return self._add_divider_at(Orientation.VERTICAL, x, y)

    def _add_divider_at(self, orientation: Orientation, x: float, y: float) -> bool:
        section = self.cabinet.find_section_at(x, y)
        if section is None:
            return False

        thickness = self.cabinet.constants.panel_thickness
        lo, hi = section.along(orientation)
        start, end = section.across(orientation)
        offset = (x if orientation is Orientation.VERTICAL else y) - lo

        # Snap the panel centre onto the section centre
        centre = (hi - lo) / 2
        if abs(offset + thickness / 2 - centre) < SNAP_THRESHOLD:
            offset = centre - thickness / 2

        return self.add_divider(orientation, lo + offset, start, end)

    def divide_section(self, section_index: int, orientation: Orientation, count: int) -> bool:
        orientation = Orientation(orientation)
        return self.transaction(
            f"divide section {section_index} with {count} {orientation.label.lower()}s",
            lambda: self.cabinet.divide_section(section_index, orientation, count),
        )

    def move_divider(self, divider_id: int, new_pos: float) -> bool:
        return self.transaction(
            f"move divider {divider_id}",
            lambda: self.cabinet.move_divider(divider_id, new_pos),
        )

    def remove_divider(self, divider_id: int) -> bool:
        success = self.transaction(
            f"remove divider {divider_id}",
            lambda: self.cabinet.remove_divider(divider_id),
        )
        if success:
            self._drop_stale_selection()
        return success

    def removal_preview(self, divider_id: int) -> RemovalPreview | None:
        """Count the shelves and stands a removal would take along."""
        divider = self.cabinet.get_divider(divider_id)
        if divider is None:
            return None
        dependents = self.cabinet.find_dependent_dividers(divider)
        stands = sum(1 for d in dependents if d.is_vertical)
        return RemovalPreview(divider_id, shelves=len(dependents) - stands, stands=stands)

    # -- rod actions -------------------------------------------------------

    def add_rod(self, section_index: int, y: float | None = None) -> bool:
        return self.transaction(
            f"add rod to section {section_index}",
            lambda: self.cabinet.add_rod(section_index, y),
        )

    def add_rod_at(self, x: float, y: float) -> bool:
        """Add a rod to the section under a click point.

        The click height is used when it is clear of the section edges,
        otherwise the standard mount height applies.
        """
        index = self.cabinet.find_section_index(x, y)
        if index is None:
            return False
        section = self.cabinet.sections[index]
        clearance = self.cabinet.constants.rod_edge_clearance
        rod_y: float | None = y
        if y < section.y + clearance or y > section.bottom - clearance:
            rod_y = None
        return self.add_rod(index, rod_y)

    def add_rods(self, section_index: int, count: int) -> bool:
        return self.transaction(
            f"add {count} rods to section {section_index}",
            lambda: self.cabinet.add_rods(section_index, count),
        )

    def move_rod(self, rod_id: int, new_x: float, new_y: float) -> bool:
        return self.transaction(
            f"move rod {rod_id}",
            lambda: self.cabinet.move_rod(rod_id, new_x, new_y),
        )

    def remove_rod(self, rod_id: int) -> bool:
        success = self.transaction(
            f"remove rod {rod_id}",
            lambda: self.cabinet.remove_rod(rod_id),
        )
        if success:
            self._drop_stale_selection()
        return success

    # -- carcass actions ---------------------------------------------------

    def resize(
        self,
        width: float | None = None,
        height: float | None = None,
        depth: float | None = None,
        base: float | None = None,
    ) -> bool:
        success = self.transaction(
            "resize carcass",
            lambda: self.cabinet.resize(width=width, height=height, depth=depth, base=base),
        )
        self._drop_stale_selection()
        return success

    def apply_dimensions(self, width: float, height: float, depth: float, base: float) -> bool:
        """Replace the layout with an empty carcass of the given size.

        Undoable. Returns False, changing nothing, when a dimension is out of
        range.
        """

        def start_over() -> bool:
            try:
                fresh = Cabinet(width, height, depth, base, constants=self.cabinet.constants)
            except ValueError as e:
                logger.debug(f"Rejected dimensions: {e}")
                return False
            self.cabinet.set_state(fresh.get_state())
            return True

        success = self.transaction("apply dimensions", start_over)
        if success:
            self.interaction = InteractionState()
        return success

    def reset(self) -> None:
        """Return to the default empty carcass and forget the history."""
        self.cabinet = Cabinet(
            DEFAULT_WIDTH,
            DEFAULT_HEIGHT,
            DEFAULT_DEPTH,
            DEFAULT_BASE,
            constants=self.cabinet.constants,
        )
        self.interaction = InteractionState()
        self.history.clear()
        self.history.push(self.cabinet.get_state())

    # -- history -----------------------------------------------------------

    def undo(self) -> bool:
        # The history cursor must not move while a drag holds its snapshot
        if self.interaction.drag is not None:
            return False
        return self._restore(self.history.undo(), "undo")

    def redo(self) -> bool:
        if self.interaction.drag is not None:
            return False
        return self._restore(self.history.redo(), "redo")

    def _restore(self, state: CabinetState | None, label: str) -> bool:
        if state is None:
            return False
        self.cabinet.set_state(state)
        self._drop_stale_selection()
        logger.info(f"Applied {label}")
        return True

    def history_info(self) -> HistoryInfo:
        return self.history.info()

    # -- selection ---------------------------------------------------------

    def set_mode(self, mode: ToolMode) -> None:
        self.interaction.mode = ToolMode(mode)
        self.interaction.hovered_section = None
        if self.interaction.mode is not ToolMode.EDIT:
            self.interaction.clear_selection()
        if self.interaction.mode is not ToolMode.DIVIDE:
            self.interaction.divide_type = None
            self.interaction.divide_count = None

    def set_divide_mode(self, divide_type: Literal["shelf", "stand", "rod"], count: int) -> None:
        self.set_mode(ToolMode.DIVIDE)
        self.interaction.divide_type = divide_type
        self.interaction.divide_count = count

    def divide_at(self, x: float, y: float) -> bool:
        """Apply the active divide tool to the section under a point."""
        divide_type = self.interaction.divide_type
        count = self.interaction.divide_count
        index = self.cabinet.find_section_index(x, y)
        if index is None or divide_type is None or count is None:
            return False
        if divide_type == "rod":
            return self.add_rods(index, count)
        orientation = Orientation.HORIZONTAL if divide_type == "shelf" else Orientation.VERTICAL
        return self.divide_section(index, orientation, count)

    def select_at(self, x: float, y: float) -> Divider | Rod | None:
        """Select the rod or divider under a point; rods win ties."""
        self.interaction.clear_selection()
        rod = self.cabinet.find_rod_at(x, y)
        if rod is not None:
            self.interaction.selected_rod_id = rod.id
            return rod
        divider = self.cabinet.find_divider_at(x, y)
        if divider is not None:
            self.interaction.selected_divider_id = divider.id
            return divider
        return None

    def cycle_selection(self) -> Divider | Rod | None:
        """Select the next element: dividers first, then rods, wrapping."""
        elements: list[Divider | Rod] = [*self.cabinet.dividers, *self.cabinet.rods]
        if not elements:
            return None

        current = -1
        dividers = self.cabinet.dividers
        if self.interaction.selected_divider_id is not None:
            current = next(
                (i for i, d in enumerate(dividers) if d.id == self.interaction.selected_divider_id),
                -1,
            )
        elif self.interaction.selected_rod_id is not None:
            current = len(dividers) + next(
                (
                    i
                    for i, r in enumerate(self.cabinet.rods)
                    if r.id == self.interaction.selected_rod_id
                ),
                -1,
            )

        chosen = elements[(current + 1) % len(elements)]
        self.interaction.clear_selection()
        if isinstance(chosen, Divider):
            self.interaction.selected_divider_id = chosen.id
        else:
            self.interaction.selected_rod_id = chosen.id
        return chosen

    def nudge_selection(self, dx: float, dy: float) -> bool:
        """Move the selected element by a keyboard step.

        Dividers only move along their own axis.
        """
        rod_id = self.interaction.selected_rod_id
        if rod_id is not None:
            rod = self.cabinet.get_rod(rod_id)
            if rod is None:
                return False
            return self.move_rod(rod_id, rod.x + dx, rod.y + dy)

        divider_id = self.interaction.selected_divider_id
        if divider_id is not None:
            divider = self.cabinet.get_divider(divider_id)
            if divider is None:
                return False
            step = dx if divider.is_vertical else dy
            if step == 0:
                return False
            return self.move_divider(divider_id, divider.pos + step)
        return False

    def delete_selection(self) -> bool:
        if self.interaction.selected_rod_id is not None:
            return self.remove_rod(self.interaction.selected_rod_id)
        if self.interaction.selected_divider_id is not None:
            return self.remove_divider(self.interaction.selected_divider_id)
        return False

    def _drop_stale_selection(self) -> None:
        selected = self.interaction.selected_divider_id
        if selected is not None and self.cabinet.get_divider(selected) is None:
            self.interaction.selected_divider_id = None
        selected = self.interaction.selected_rod_id
        if selected is not None and self.cabinet.get_rod(selected) is None:
            self.interaction.selected_rod_id = None

    # -- drags -------------------------------------------------------------

    def begin_drag(self, kind: DragKind, target_id: int | None = None) -> bool:
        """Start dragging a divider, a rod or the carcass walls."""
        if self.interaction.drag is not None:
            return False
        if kind == "divider" and self.cabinet.get_divider(target_id) is None:
            return False
        if kind == "rod" and self.cabinet.get_rod(target_id) is None:
            return False

        self._checkpoint()
        self.interaction.drag = DragState(
            kind=kind, original=self.cabinet.get_state(), target_id=target_id
        )
        return True

    def drag_divider_to(self, pos: float) -> bool:
        drag = self.interaction.drag
        if drag is None or drag.kind != "divider" or drag.target_id is None:
            return False
        return self.cabinet.move_divider(drag.target_id, pos)

    def drag_rod_to(self, x: float, y: float) -> bool:
        drag = self.interaction.drag
        if drag is None or drag.kind != "rod" or drag.target_id is None:
            return False
        return self.cabinet.move_rod(drag.target_id, x, y)

    def drag_resize_to(
        self,
        width: float | None = None,
        height: float | None = None,
        base: float | None = None,
    ) -> bool:
        """Preview new carcass dimensions.

        Each preview starts again from the layout at the start of the drag,
        so shrinking and growing back within one drag loses nothing.
        """
        drag = self.interaction.drag
        if drag is None or drag.kind != "resize":
            return False
        self.cabinet.set_state(drag.original)
        return self.cabinet.resize(width=width, height=height, base=base)

    def end_drag(self) -> bool:
        """Commit the drag as one undoable action."""
        drag = self.interaction.drag
        if drag is None:
            return False
        self.interaction.drag = None
        self._commit(f"drag {drag.kind}")
        self._drop_stale_selection()
        return True

    def cancel_drag(self) -> bool:
        """Restore the layout from before the drag; history is untouched."""
        drag = self.interaction.drag
        if drag is None:
            return False
        self.interaction.drag = None
        self.cabinet.set_state(drag.original)
        return True
