"""Shared FastAPI dependencies.

Routers import these aliases from here rather than from main.py, which
imports the routers.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from georef.db.session import get_db

DB = Annotated[AsyncSession, Depends(get_db)]
