"""FastAPI dependency injection for cabinet designer services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from cabinet_designer.application import ListCarcassPartsCommand, RunLayoutScriptCommand
from cabinet_designer.web.sessions import SessionStore


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Get the process-wide SessionStore instance."""
    return SessionStore()


def get_script_command() -> RunLayoutScriptCommand:
    """Dependency for RunLayoutScriptCommand."""
    return RunLayoutScriptCommand()


def get_parts_command() -> ListCarcassPartsCommand:
    """Dependency for ListCarcassPartsCommand."""
    return ListCarcassPartsCommand()


# Type aliases for cleaner endpoint signatures
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
ScriptCommandDep = Annotated[RunLayoutScriptCommand, Depends(get_script_command)]
PartsCommandDep = Annotated[ListCarcassPartsCommand, Depends(get_parts_command)]
