from enum import Enum
from typing import Optional


class Role(str, Enum):
    CUSTOMER = "customer"
    MANAGER = "manager"
    ADMIN = "admin"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Role":
        """
        Normalize a stored userType. The column is fixed-width in the source
        schema, so values arrive padded ("manager   ") and sometimes capitalized.
        """
        if raw is None:
            raise ValueError("userType is missing")
        return cls(raw.strip().lower())

    @property
    def can_manage(self) -> bool:
        # admin is treated exactly like manager
        return self in (Role.MANAGER, Role.ADMIN)


def owns_hotel(user_id: int, manager_user_id: Optional[str]) -> bool:
    """
    Check the authenticated user against a hotel's managerUserID cell.
    """
    if manager_user_id is None:
        return False
    try:
        return int(str(manager_user_id).strip()) == int(user_id)
    except ValueError:
        return False
