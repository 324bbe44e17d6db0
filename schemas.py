from typing import Literal

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"
