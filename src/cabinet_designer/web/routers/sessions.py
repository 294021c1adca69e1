"""Editing session endpoints.

A session keeps its cabinet and undo/redo history on the server. Clients
send one editing step per request; undo and redo are steps too.
"""

from fastapi import APIRouter, Response, status

from cabinet_designer.application import DesignSession
from cabinet_designer.application.config import load_config_from_dict
from cabinet_designer.web.converters import outcome_to_schema, session_to_schema
from cabinet_designer.web.dependencies import ScriptCommandDep, SessionStoreDep
from cabinet_designer.web.exceptions import ScriptRunError
from cabinet_designer.web.schemas import (
    CreateSessionRequest,
    SessionSchema,
    StepRequest,
    StepResultSchema,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionSchema, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: CreateSessionRequest,
    store: SessionStoreDep,
    command: ScriptCommandDep,
) -> SessionSchema:
    """Open a session, optionally seeded by replaying a layout script."""
    if request.config is None:
        session = DesignSession.create()
        steps_applied = 0
    else:
        config = load_config_from_dict(request.config)
        result = command.execute(config)
        if not result.is_valid:
            raise ScriptRunError(result.errors)
        session = result.session
        steps_applied = len(result.outcomes)

    session_id = store.add(session, steps_applied)
    return session_to_schema(session_id, session)


@router.get("/{session_id}", response_model=SessionSchema)
async def get_session(session_id: str, store: SessionStoreDep) -> SessionSchema:
    """Return the current layout and history state of a session."""
    entry = store.get(session_id)
    return session_to_schema(session_id, entry.session)


@router.post("/{session_id}/steps", response_model=StepResultSchema)
async def apply_step(
    session_id: str,
    request: StepRequest,
    store: SessionStoreDep,
    command: ScriptCommandDep,
) -> StepResultSchema:
    """Apply one editing step as a single undoable action.

    A rejected step still answers 200; check outcome.success.
    """
    entry = store.get(session_id)
    outcome = command.apply_step(entry.session, request.step, entry.steps_applied)
    entry.steps_applied += 1
    return StepResultSchema(
        outcome=outcome_to_schema(outcome),
        session=session_to_schema(session_id, entry.session),
    )


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(session_id: str, store: SessionStoreDep) -> Response:
    """Discard a session."""
    store.remove(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
