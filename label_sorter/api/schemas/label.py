"""Label API schemas."""

from pydantic import BaseModel


class LabelChoice(BaseModel):
    index: int
    text: str

    class Config:
        from_attributes = True


class SortingStatus(BaseModel):
    """Live counts taken from the working directory."""
    unlabeled: int
    labeled: dict[str, int]
    total_pages: int
    page_size: int


class HealthStatus(BaseModel):
    status: str
    state: str
