"""Shared schema building blocks"""

from pydantic import BaseModel, ConfigDict, PlainSerializer
from typing import Annotated
from decimal import Decimal

# Money stays Decimal in Python and goes out as a JSON number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

class BaseSchema(BaseModel):
    """Base schema with common configuration"""

    model_config = ConfigDict(from_attributes=True)

class MessageResponse(BaseModel):
    message: str
