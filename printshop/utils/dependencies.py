"""
Common dependencies for FastAPI
"""

from typing import Optional
from fastapi import Header

from printshop.core.config import settings
from printshop.core.exceptions import MissingSessionException

def get_session_id(
    session_id: Optional[str] = Header(
        None,
        alias=settings.SESSION_HEADER,
        description="Opaque client-generated cart session token"
    )
) -> str:
    """
    Read the caller's session token

    Raises:
        MissingSessionException: If the header is absent or blank
    """
    if session_id is None or not session_id.strip():
        raise MissingSessionException()
    return session_id
