"""Pydantic DTOs for immigration (user onboarding) statistics."""

from datetime import datetime

from pydantic import BaseModel


class UserDeviceSchema(BaseModel):
    android: int
    ios: int
    web: int

    model_config = {"from_attributes": True}


class ImmigrationStatisticsResponse(BaseModel):
    id: str
    type: str
    active_users: int
    total_users: int
    male_users: int
    female_users: int
    registered_visitors: int
    unregistered_visitors: int
    app_store: int
    play_store: int
    user_device: UserDeviceSchema
    created: datetime | None
    updated: datetime | None

    model_config = {"from_attributes": True}
