from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class SystemLogOut(BaseModel):
    id: int
    actor_id: Optional[int] = None
    actor_name: str
    actor_email: Optional[str] = None
    action: str
    description: str
    table_name: Optional[str] = None
    record_id: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SystemLogPage(BaseModel):
    logs: List[SystemLogOut]
    total: int
    skip: int
    limit: int
