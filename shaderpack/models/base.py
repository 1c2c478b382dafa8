"""Base model for all Shaderpack Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all Shaderpack models.
"""

from pydantic import BaseModel, ConfigDict


class ShaderpackBaseModel(BaseModel):
    """Base model class for all Shaderpack Pydantic models.

    Serialization uses field aliases and JSON-compatible values (paths and
    datetimes become strings).
    """

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        use_enum_values=True,
        validate_assignment=True,
    )
