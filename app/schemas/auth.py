"""Schemas for the authenticated caller."""

from pydantic import BaseModel

from app.schemas.account import ROLE_ADMIN


class CallerContext(BaseModel):
    """Identity and role taken from a verified bearer token."""

    model_config = {"frozen": True}

    id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
