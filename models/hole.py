from pydantic import Field

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """A single hole of a game's par table."""
    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=6)
