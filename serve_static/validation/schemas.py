"""Pydantic models shared by the static file utilities."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ByteRange(BaseModel):
    """A single satisfiable byte range of a file."""
    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0)
    length: int = Field(..., ge=1)

    @property
    def end(self) -> int:
        """Inclusive offset of the last byte."""
        return self.start + self.length - 1


class Entry(BaseModel):
    """One directory entry for a listing."""
    name: str = Field(..., min_length=1)
    is_dir: bool
    size: Optional[int] = Field(default=None, ge=0)
    modified: Optional[datetime] = None
