"""Principal types and signed-token claims"""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel


class PrincipalType(str, Enum):
    """Which collection a principal lives in"""
    ADMIN = "admin"
    USER = "user"


class TokenClaims(BaseModel):
    """Claim set carried by the signed token"""
    id: str
    email: str
    type: PrincipalType

    class Config:
        frozen = True


def document_to_dict(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a raw MongoDB document, exposing ``_id`` as a string ``id``"""
    data = dict(doc)
    if "_id" in data:
        data["id"] = str(data.pop("_id"))
    return data
