"""Conversion of application objects to response schemas."""

from cabinet_designer.application import DesignSession, StepOutcome
from cabinet_designer.domain import Cabinet
from cabinet_designer.infrastructure import JsonReportFormatter
from cabinet_designer.web.schemas import (
    HistorySchema,
    LayoutSchema,
    SessionSchema,
    StepOutcomeSchema,
)


def layout_to_schema(cabinet: Cabinet) -> LayoutSchema:
    return LayoutSchema.model_validate(JsonReportFormatter().to_dict(cabinet))


def outcome_to_schema(outcome: StepOutcome) -> StepOutcomeSchema:
    return StepOutcomeSchema(
        index=outcome.index,
        action=outcome.action,
        success=outcome.success,
        message=outcome.message,
    )


def session_to_schema(session_id: str, session: DesignSession) -> SessionSchema:
    info = session.history_info()
    return SessionSchema(
        session_id=session_id,
        layout=layout_to_schema(session.cabinet),
        history=HistorySchema(
            can_undo=info.can_undo,
            can_redo=info.can_redo,
            length=info.length,
            index=info.index,
        ),
    )
