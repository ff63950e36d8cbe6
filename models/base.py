"""
Base schemas for API models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class RawTextSchema(BaseSchema):
    """
    Base for requests whose strings must arrive untouched.

    Decoration text keeps its spaces ("[BUG] ") and custom field names
    are stored exactly as typed.
    """
    model_config = ConfigDict(str_strip_whitespace=False)
