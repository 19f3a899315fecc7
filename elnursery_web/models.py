"""API request/response models"""

import re
from typing import List, Optional

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,20}$")
PASSWORD_RULES = (
    "Password must be 8-20 characters and contain an uppercase letter, "
    "a lowercase letter, a number and one of @$!%*?&"
)


def _check_new_password(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(PASSWORD_RULES)
    return value


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class CreateAdminRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    roles: Optional[List[str]] = None


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    email: EmailStr
    class_category: Optional[str] = Field(default=None, alias="class")
    children: Optional[int] = Field(default=None, ge=1)


class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None
    class_category: Optional[str] = Field(default=None, alias="class")
    children: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class UpdateProfileRequest(BaseModel):
    avatar: Optional[str] = None


class CreateChildRequest(BaseModel):
    name: str = Field(..., min_length=1)
    date_of_birth: str
    avatar: Optional[str] = ""

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, value: str) -> str:
        try:
            date_parser.parse(value)
        except (ValueError, OverflowError):
            raise ValueError("date_of_birth must be a valid date")
        return value


class UpdateChildRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    date_of_birth: Optional[str] = None
    avatar: Optional[str] = None
    pause_program: Optional[bool] = None


class CreateTaskRequest(BaseModel):
    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: str = ""
    data: str
    level: int = Field(default=0, ge=0)


class UpdateTaskRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    data: Optional[str] = None
    level: Optional[int] = Field(default=None, ge=0)


class NewPasswordMixin(BaseModel):
    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return _check_new_password(value)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ChangePasswordRequest(NewPasswordMixin):
    old_password: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    email: EmailStr


class ChangePasswordByTokenRequest(NewPasswordMixin):
    code: int
