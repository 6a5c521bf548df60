from typing import Annotated
from datetime import datetime
from pydantic import EmailStr, Field, StringConstraints, field_validator
from app.schemas.base import CamelModel

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
UsernameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=60)]
BioStr = Annotated[str, Field(max_length=500)]

class UserBase(CamelModel):
    email: EmailStr = Field(max_length=255)
    display_name: NameStr
    username: UsernameStr
    bio: BioStr = ""
    avatar: str = ""

class UserCreate(UserBase):
    # uid from the identity provider
    id: Annotated[str, Field(min_length=1, max_length=128)]

    @field_validator("id")
    @classmethod
    def id_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("id cannot be blank")
        return v2

class UserUpdate(CamelModel):
    display_name: NameStr | None = None
    username: UsernameStr | None = None
    bio: BioStr | None = None
    avatar: str | None = None

class UserRead(UserBase):
    id: str
    created_at: datetime
    updated_at: datetime | None = None
