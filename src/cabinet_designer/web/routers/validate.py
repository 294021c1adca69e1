"""Layout script validation endpoints."""

from fastapi import APIRouter

from cabinet_designer.application.config import ConfigError, load_config_from_dict
from cabinet_designer.web.schemas import ScriptRequest, ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_script(request: ScriptRequest) -> ValidationResultSchema:
    """Validate a layout script without replaying it.

    Args:
        request: Request containing the layout script to validate.

    Returns:
        Validation result with one entry per error.
    """
    try:
        load_config_from_dict(request.config)
    except ConfigError as e:
        errors = e.details or [{"path": "", "message": e.message}]
        return ValidationResultSchema(is_valid=False, errors=errors)

    return ValidationResultSchema(is_valid=True)
