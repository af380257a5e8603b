"""DB session dependencies (composition root)."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.infrastructure.persistence.database import get_db, get_db_transactional

# Read-only session (no commit) and write session (one transaction per request).
ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]
