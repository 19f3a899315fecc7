"""
Access control gate.

Every route names its endpoint in ``ACCESS_RULES``; the gate checks the
signed token and the caller's principal type against that rule before
the handler runs.
"""

from typing import Dict, FrozenSet, Optional

from fastapi import Depends, Request

from elnursery.app import ElnurseryApp
from elnursery.models.principal import PrincipalType, TokenClaims
from elnursery.utils.exceptions import ForbiddenError, UnauthorizedError

from .deps import get_app

ADMIN = frozenset({PrincipalType.ADMIN})
USER = frozenset({PrincipalType.USER})
ANY: FrozenSet[PrincipalType] = frozenset()


class AccessRule:
    """``public`` skips the token check; empty ``types`` allows any principal"""

    __slots__ = ("public", "types")

    def __init__(self, public: bool = False, types: FrozenSet[PrincipalType] = ANY):
        self.public = public
        self.types = types

    def __repr__(self) -> str:
        return f"AccessRule(public={self.public}, types={sorted(t.value for t in self.types)})"


PUBLIC = AccessRule(public=True)

ACCESS_RULES: Dict[str, AccessRule] = {
    "health": PUBLIC,
    "auth.login": PUBLIC,
    "auth.logout": AccessRule(),
    "admin.create": AccessRule(types=ADMIN),
    "admin.find_all": AccessRule(types=ADMIN),
    "admin.find_one": AccessRule(types=ADMIN),
    "admin.remove": AccessRule(types=ADMIN),
    "user.create": AccessRule(types=ADMIN),
    "user.find_all": AccessRule(types=ADMIN),
    "user.find_one": AccessRule(),
    "user.update_profile": AccessRule(types=USER),
    "user.update": AccessRule(types=ADMIN),
    "user.remove": AccessRule(types=ADMIN),
    "child.create": AccessRule(types=USER),
    "child.find_all": AccessRule(types=ADMIN),
    "child.find_one": AccessRule(),
    "child.find_by_parent": AccessRule(),
    "child.update": AccessRule(types=USER),
    "child.remove": AccessRule(types=ADMIN),
    "child.add_program": AccessRule(types=ADMIN),
    "child.remove_program": AccessRule(types=ADMIN),
    "child.add_assessment": AccessRule(types=ADMIN),
    "child.remove_assessment": AccessRule(types=ADMIN),
    "task.create": AccessRule(types=ADMIN),
    "task.find_all": AccessRule(types=ADMIN),
    "task.find_one": AccessRule(),
    "task.update": AccessRule(types=ADMIN),
    "task.remove": AccessRule(types=ADMIN),
    "password.change": AccessRule(),
    "password.reset": PUBLIC,
    "password.change_by_token": PUBLIC,
}


def get_token(request: Request, cookie_name: str = "token") -> Optional[str]:
    """Extract the token from the cookie or the Authorization header"""
    token = request.cookies.get(cookie_name)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]

    return None


def check_access(
    rule: AccessRule, request: Request, instance: ElnurseryApp
) -> Optional[TokenClaims]:
    if rule.public:
        return None

    token = get_token(request, instance.settings.auth.cookie_name)
    if not token:
        raise UnauthorizedError("Please login to access this resource")

    claims = instance.auth_service.verify_token(token)
    if rule.types and claims.type not in rule.types:
        raise ForbiddenError(f"{claims.type.value} is not allowed to access this resource")

    request.state.principal = claims
    return claims


def access_gate(endpoint: str):
    """Dependency factory enforcing ``ACCESS_RULES[endpoint]``"""
    rule = ACCESS_RULES[endpoint]

    async def gate(request: Request, instance: ElnurseryApp = Depends(get_app)) -> Optional[TokenClaims]:
        return check_access(rule, request, instance)

    return gate
