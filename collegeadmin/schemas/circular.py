from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

Priority = Literal["normal", "high", "urgent"]


class CircularCreate(BaseModel):
    title: str
    content: str
    category: str = "general"
    priority: Priority = "normal"
    is_active: bool = True
    expires_at: Optional[datetime] = None
    target_audience: List[str] = ["all"]
    attachment_url: Optional[str] = None


class CircularUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None
    target_audience: Optional[List[str]] = None


class CircularOut(CircularCreate):
    id: int
    published_at: Optional[datetime] = None
    published_by: Optional[int] = None

    class Config:
        from_attributes = True
