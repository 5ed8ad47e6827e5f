# backend/homelist/schemas/apartment.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StrictFloat,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# NUMERIC(12,2)
MAX_PRICE = Decimal("9999999999.99")

_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    """Validate as an http(s) URL but keep the string exactly as sent."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid url") from None
    return value


ImageUrl = Annotated[str, AfterValidator(_check_http_url)]


class CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApartmentCreate(CamelModel):
    name: str = Field(..., min_length=1)
    unit_number: str = Field(..., min_length=1)
    project: str = Field(..., min_length=1)
    # strict: "3" or true are not counts
    bedrooms: StrictInt = Field(..., ge=0)
    bathrooms: StrictInt = Field(..., ge=0)
    price: StrictFloat = Field(..., ge=0, allow_inf_nan=False)
    area: StrictFloat = Field(..., gt=0, allow_inf_nan=False)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    images: List[ImageUrl] = Field(default_factory=list)
    amenities: List[Annotated[str, Field(min_length=1)]] = Field(default_factory=list)

    @field_validator("price")
    @classmethod
    def _fits_numeric_12_2(cls, v):
        amount = Decimal(str(v))
        if amount.as_tuple().exponent < -2:
            raise ValueError("Price must have at most 2 decimal places")
        if amount > MAX_PRICE:
            raise ValueError(f"Price must not exceed {MAX_PRICE}")
        return v


class ApartmentOut(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    name: str
    unit_number: str
    project: str
    bedrooms: int
    bathrooms: int
    price: float
    area: float
    address: str
    city: str
    country: str
    description: str
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("price", mode="before")
    @classmethod
    def _decimal_to_float(cls, v):
        # NUMERIC(12,2) comes back as Decimal; the API exposes a plain number
        if isinstance(v, Decimal):
            return float(v)
        return v

    @field_validator("images", "amenities", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v


class PageMeta(CamelModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class ApartmentListResponse(CamelModel):
    items: List[ApartmentOut]
    meta: PageMeta
