import datetime
from pydantic import BaseModel, Field


class ServiceSchema(BaseModel):
    id: str
    name: str
    price: int


class CatalogResponseSchema(BaseModel):
    currency: str
    services: list[ServiceSchema]


class LoginRequestSchema(BaseModel):
    email: str = ""
    password: str = ""


class SignUpRequestSchema(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class IdentitySchema(BaseModel):
    uid: str
    email: str | None = None


class DateRequestSchema(BaseModel):
    date: datetime.date


class TimeRequestSchema(BaseModel):
    time: datetime.time


class DraftResponseSchema(BaseModel):
    date: str
    time: str
    selected_service_ids: list[str]
    services: list[ServiceSchema]
    total_price: int
    can_submit: bool


class ConfirmationSchema(BaseModel):
    booking_id: str
    date: str
    time: str
    services: list[str]
    total_price: int


class BookingRecordSchema(BaseModel):
    id: str
    date: str
    time: str
    services: list[str] = Field(default_factory=list)
    total_price: int
    status: str


class ProfileResponseSchema(BaseModel):
    name: str
    email: str | None = None
    upcoming: list[BookingRecordSchema] = Field(default_factory=list)
