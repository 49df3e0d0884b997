from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from hotel_console.utils.authorization import Role


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    CUSTOMER = "authenticated_customer"
    MANAGER_OR_ADMIN = "authenticated_manager_or_admin"


class Session(BaseModel):
    """Who is logged in. Replaced, never mutated, on log in and log out."""

    user_id: Optional[int] = None
    role: Optional[Role] = None
    model_config = ConfigDict(frozen=True)

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @classmethod
    def authenticated(cls, user_id: int, role: Role) -> "Session":
        return cls(user_id=user_id, role=role)

    @property
    def state(self) -> SessionState:
        if self.user_id is None or self.role is None:
            return SessionState.ANONYMOUS
        if self.role.can_manage:
            return SessionState.MANAGER_OR_ADMIN
        return SessionState.CUSTOMER

    @property
    def is_authenticated(self) -> bool:
        return self.state != SessionState.ANONYMOUS


class Outcome(str, Enum):
    OK = "ok"
    REJECTED = "rejected"
    FAILED = "failed"
    INVALID_INPUT = "invalid_input"
    NOT_RECOGNIZED = "not_recognized"
    EXIT = "exit"


class DispatchResult(BaseModel):
    session: Session
    outcome: Outcome
    message: Optional[str] = None


class MenuItem(BaseModel):
    choice: int
    label: str
    action: str
    model_config = ConfigDict(frozen=True)
