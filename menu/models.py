"""
Plain records for the rows kept in DynamoDB.

Nothing here is a Django model: persistence lives in the remote tables, these
classes only give the rows a shape once they are read back.
"""
from dataclasses import dataclass
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Optional

from boto3.dynamodb.types import DYNAMODB_CONTEXT

from .exceptions import PriceParseError


def parse_price(text) -> Decimal:
    """
    Parse free-form price text, raising PriceParseError on anything unusable.

    The value must also fit a DynamoDB number (38 significant digits,
    exponent within the table's range), checked with boto3's own context.
    """
    try:
        price = Decimal(str(text).strip())
    except InvalidOperation:
        raise PriceParseError(text)
    if not price.is_finite() or price < 0:
        raise PriceParseError(text)
    try:
        DYNAMODB_CONTEXT.create_decimal(price)
    except DecimalException:
        raise PriceParseError(text)
    return price


def to_decimal(value) -> Decimal:
    # floats come back from the table deserializer, go through str to keep 12.5 as 12.5
    if value is None:
        return Decimal(0)
    return Decimal(str(value))


@dataclass(frozen=True)
class UserSession:
    """Read-only view of who is signed in, handed to each screen."""
    user_id: str

    @classmethod
    def from_request(cls, request):
        return cls(user_id=str(request.user.pk))


@dataclass
class MenuItem:  # a sellable row in the menu_items table
    id: str
    vendor_id: str
    name: str
    price: Decimal
    category: str
    is_available: bool = True
    name_ko: Optional[str] = None
    description: Optional[str] = None
    description_ko: Optional[str] = None
    quantity: Optional[int] = None
    image: Optional[str] = None
    version: Optional[int] = None

    @classmethod
    def from_record(cls, record):
        quantity = record.get("quantity")
        version = record.get("version")
        return cls(
            id=record["id"],
            vendor_id=record.get("vendor_id", ""),
            name=record.get("name", ""),
            price=to_decimal(record.get("price")),
            category=record.get("category", ""),
            is_available=bool(record.get("is_available", False)),
            name_ko=record.get("name_ko"),
            description=record.get("description"),
            description_ko=record.get("description_ko"),
            quantity=int(quantity) if quantity is not None else None,
            image=record.get("image"),
            version=int(version) if version is not None else None,
        )

    def to_form_data(self):
        """Editable fields as the form shows them, price back to text."""
        return {
            "name": self.name,
            "name_ko": self.name_ko or "",
            "description": self.description or "",
            "description_ko": self.description_ko or "",
            "price": str(self.price),
            "category": self.category,
            "is_available": self.is_available,
            "quantity": self.quantity,
            "version": self.version,
        }


@dataclass
class StorefrontItem:  # what the shop grid renders for one available item
    id: str
    name: str
    price: Decimal
    image: str
    category: str = ""
    name_ko: Optional[str] = None
    description: str = ""
    description_ko: str = ""
    remaining_quantity: Optional[int] = None

    @property
    def sold_out(self):
        return self.remaining_quantity == 0
