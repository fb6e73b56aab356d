from typing import Optional

from pydantic import BaseModel


class FocusStatus(BaseModel):
    remaining: int
    display: str
    active: bool
    message: str
    notice: Optional[str] = None
