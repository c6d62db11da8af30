from typing import Any

from pydantic import BaseModel


class UserInfoResponse(BaseModel):
    status: str = "ok"
    data: list[dict[str, Any]]
