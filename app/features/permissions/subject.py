"""
Subject descriptor: the authenticated actor plus their role.
"""
from typing import Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from app.features.permissions.roles import Role
from app.utils import get_logger


log = get_logger(__name__)


class Subject(BaseModel):
    """Validated input to every authorization decision."""
    id: str = Field(..., min_length=1, description="Opaque user identifier")
    role: Role

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


def parse_subject(user_id: str, role: Union[Role, str]) -> Subject:
    """
    Validate a raw user id and role value into a Subject.

    Raises:
        ValidationError: if ``user_id`` is blank or ``role`` is not a known Role
    """
    try:
        return Subject(id=user_id, role=role)
    except PydanticValidationError as exc:
        errors = {
            str(error["loc"][-1]) if error.get("loc") else "root": error["msg"]
            for error in exc.errors()
        }
        log.info("Invalid subject user_id=%r role=%r: %s", user_id, role, errors)
        raise ValidationError("Invalid subject", errors=errors) from exc
