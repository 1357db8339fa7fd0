from typing import List

from pydantic import BaseModel, Field


class MonthCount(BaseModel):
    name: str
    count: int


class NamedValue(BaseModel):
    name: str
    value: int


class UserStats(BaseModel):
    total: int = 0
    by_month: List[MonthCount] = Field(default_factory=list)
    by_platform: List[NamedValue] = Field(default_factory=list)
    top_genres: List[NamedValue] = Field(default_factory=list)
