"""Error taxonomy and the Success/Failure result returned by calculations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class VATErrorCode(str, Enum):
    INVALID_PRICE_TYPE = "INVALID_PRICE_TYPE"
    INVALID_RATE_TYPE = "INVALID_RATE_TYPE"
    NEGATIVE_PRICE = "NEGATIVE_PRICE"
    RATE_OUT_OF_RANGE = "RATE_OUT_OF_RANGE"
    UNKNOWN_COUNTRY = "UNKNOWN_COUNTRY"


class VATValidationError(BaseModel):
    """Why an input was rejected, and which field to highlight."""

    code: VATErrorCode
    message: str
    field: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class VATError(Exception):
    """Raised by the lookup layer; calculations convert it into a Failure."""

    code: VATErrorCode = VATErrorCode.UNKNOWN_COUNTRY
    field: str | None = None

    def to_validation_error(self) -> VATValidationError:
        return VATValidationError(code=self.code, message=str(self), field=self.field)


class UnknownCountryError(VATError, ValueError):
    code = VATErrorCode.UNKNOWN_COUNTRY
    field = "country"

    def __init__(self, country: object) -> None:
        super().__init__(f"Unknown country code: {country}")
        self.country = country


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    success: Literal[True] = True


@dataclass(frozen=True)
class Failure:
    error: VATValidationError
    success: Literal[False] = False


Result = Union[Success[T], Failure]
