from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr


class ClientAssignRequest(BaseModel):
    email: EmailStr


class ClientRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: datetime


class ClientAssignResponse(BaseModel):
    client: ClientRead
    newly_assigned: bool
