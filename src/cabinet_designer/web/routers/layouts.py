"""Stateless layout endpoints: script replay and carcass parts."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from cabinet_designer.application import DimensionsInput
from cabinet_designer.application.config import load_config_from_dict
from cabinet_designer.domain.constants import (
    DEFAULT_BASE,
    DEFAULT_DEPTH,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
)
from cabinet_designer.web.converters import layout_to_schema, outcome_to_schema
from cabinet_designer.web.dependencies import PartsCommandDep, ScriptCommandDep
from cabinet_designer.web.exceptions import ScriptRunError
from cabinet_designer.web.schemas import (
    BuildResponseSchema,
    PartSchema,
    PartsListSchema,
    ScriptRequest,
)

router = APIRouter(prefix="/layouts", tags=["layouts"])


@router.post("/build", response_model=BuildResponseSchema)
async def build_layout(
    request: ScriptRequest,
    command: ScriptCommandDep,
) -> BuildResponseSchema:
    """Replay a layout script and return the resulting layout.

    Rejected steps do not fail the request; they are reported in the step
    outcomes and in all_steps_succeeded.

    Raises:
        ConfigError: If the script is invalid (mapped to 422).
        ScriptRunError: If the script cannot be replayed at all.
    """
    config = load_config_from_dict(request.config)
    result = command.execute(config)
    if not result.is_valid:
        raise ScriptRunError(result.errors)

    return BuildResponseSchema(
        all_steps_succeeded=result.all_steps_succeeded,
        layout=layout_to_schema(result.cabinet),
        steps=[outcome_to_schema(outcome) for outcome in result.outcomes],
    )


@router.get("/parts", response_model=PartsListSchema)
async def carcass_parts(
    command: PartsCommandDep,
    width: Annotated[float, Query(description="Outer width in mm")] = DEFAULT_WIDTH,
    height: Annotated[float, Query(description="Outer height in mm")] = DEFAULT_HEIGHT,
    depth: Annotated[float, Query(description="Outer depth in mm")] = DEFAULT_DEPTH,
    base: Annotated[float, Query(description="Plinth height in mm")] = DEFAULT_BASE,
) -> PartsListSchema:
    """List the parts of an empty carcass."""
    dimensions = DimensionsInput(width=width, height=height, depth=depth, base=base)
    parts, errors = command.execute(dimensions)
    if errors:
        raise HTTPException(status_code=422, detail={"errors": errors})

    return PartsListSchema(
        parts=[PartSchema(name=p.name, w=p.w, h=p.h, d=p.d) for p in parts]
    )
