"""Page-number pagination shared by all list endpoints.

Pages are 1-based: page 1 starts at offset 0, page N starts at
(N - 1) * limit.
"""

from typing import Annotated

from fastapi import Depends, Query
from pydantic import BaseModel

from georef.config import settings


def page_offset(page: int, limit: int) -> int:
    """Return the row offset of a 1-based ``page`` of ``limit`` rows."""
    return (page - 1) * limit


class PageParams(BaseModel):
    """Validated ``page`` / ``limit`` query parameters."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.limit)


def get_page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
) -> PageParams:
    return PageParams(page=page, limit=limit)


Page = Annotated[PageParams, Depends(get_page_params)]
