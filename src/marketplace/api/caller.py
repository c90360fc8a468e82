"""Caller identity supplied by the upstream authentication layer."""

from dataclasses import dataclass
from enum import Enum

from fastapi import Depends, Header, HTTPException

from marketplace.errors import Forbidden, InvalidArgument


class Role(Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


async def current_caller(
    x_user_id: str | None = Header(default=None),
    x_user_role: str = Header(default=Role.USER.value),
) -> Caller:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authorized to access this route")
    try:
        role = Role(x_user_role.lower())
    except ValueError:
        raise InvalidArgument({"role": [f"Unknown role '{x_user_role}'"]}) from None
    return Caller(user_id=x_user_id, role=role)


async def require_admin(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_admin:
        raise Forbidden({"role": [f"User role '{caller.role.value}' is not authorized to access this route"]})
    return caller


async def require_vendor(caller: Caller = Depends(current_caller)) -> Caller:
    """Vendors and administrators may manage catalogue listings."""
    if caller.role not in (Role.VENDOR, Role.ADMIN):
        raise Forbidden({"role": [f"User role '{caller.role.value}' is not authorized to access this route"]})
    return caller
