from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional
import logging

from ..common.config import settings
from ..common.database import (
    create_product,
    delete_product,
    find_product,
    find_products,
    update_product,
)
from .errors import ProductNotFound, ProductValidationError

_logger = logging.getLogger(__name__)

LOW_STOCK_LIMIT = 10
CENTS = Decimal("0.01")

# Bounds of the products table: quantity is a signed 64-bit INTEGER and
# price is Numeric(12, 2), i.e. at most 10 integer digits.
QUANTITY_MIN = -(2 ** 63)
QUANTITY_MAX = 2 ** 63 - 1
PRICE_LIMIT = Decimal(10) ** 10

INTENT_CREATE = "create"
INTENT_UPDATE = "update"
INTENT_DELETE = "delete"
INTENTS = (INTENT_CREATE, INTENT_UPDATE, INTENT_DELETE)


@dataclass(frozen=True)
class StockStatus:
    status: str
    label: str


OUT_OF_STOCK = StockStatus("critical", "Out of stock")
LOW_STOCK = StockStatus("warning", "Low stock")
IN_STOCK = StockStatus("success", "In stock")


def stock_status(quantity: int) -> StockStatus:
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity < LOW_STOCK_LIMIT:
        return LOW_STOCK
    return IN_STOCK


def format_price(price: Decimal) -> str:
    return f"{settings.CURRENCY_SYMBOL}{price:.2f}"


# ---------------------------------------------------------------------------
# Listing


@dataclass(frozen=True)
class ListingRow:
    id: str
    name: str
    quantity: int
    status: str
    status_label: str
    price_display: str


@dataclass
class Listing:
    rows: List[ListingRow] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows


def _listing_row(prod: Dict[str, Any]) -> ListingRow:
    status = stock_status(prod["quantity"])
    return ListingRow(
        id=prod["id"],
        name=prod["name"],
        quantity=prod["quantity"],
        status=status.status,
        status_label=status.label,
        price_display=format_price(prod["price"]),
    )


async def load_listing() -> Listing:
    products = await find_products()
    _logger.debug("DB list products | count=%s", len(products))
    return Listing(rows=[_listing_row(p) for p in products])


# ---------------------------------------------------------------------------
# Detail / edit


@dataclass(frozen=True)
class ProductRef:
    """Which product the detail flow is working on.

    Two variants: ``ProductRef.new()`` for a product that does not exist yet and
    ``ProductRef.existing(product_id)`` for a stored one.
    """

    product_id: Optional[str] = None

    @classmethod
    def new(cls) -> "ProductRef":
        return cls(None)

    @classmethod
    def existing(cls, product_id: str) -> "ProductRef":
        if not product_id:
            raise ValueError("existing product reference needs an id")
        return cls(product_id)

    @property
    def is_new(self) -> bool:
        return self.product_id is None


@dataclass
class ProductForm:
    is_new: bool
    product: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ProductFields:
    name: str
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class SubmitResult:
    action: str
    product_id: Optional[str]


async def load_product(ref: ProductRef) -> ProductForm:
    if ref.is_new:
        return ProductForm(is_new=True)
    prod = await find_product(ref.product_id)
    if prod is None:
        raise ProductNotFound(ref.product_id)
    return ProductForm(is_new=False, product=prod)


def parse_product_fields(form: Mapping[str, str]) -> ProductFields:
    """Turn raw form text into typed product fields.

    The name is only stripped: an empty name is accepted here and is left to
    the form's ``required`` check. Quantity and price must parse, otherwise a
    ProductValidationError listing every bad field is raised.
    """
    errors: Dict[str, str] = {}

    name = (form.get("name") or "").strip()

    raw_quantity = (form.get("quantity") or "").strip()
    quantity = 0
    try:
        quantity = int(raw_quantity)
    except ValueError:
        errors["quantity"] = "Quantity must be a whole number"
    else:
        if not QUANTITY_MIN <= quantity <= QUANTITY_MAX:
            errors["quantity"] = "Quantity is out of range"

    raw_price = (form.get("price") or "").strip()
    price = Decimal("0.00")
    try:
        price = Decimal(raw_price)
        if not price.is_finite():
            raise InvalidOperation(raw_price)
    except InvalidOperation:
        errors["price"] = "Price must be a number"
    else:
        if price < 0:
            errors["price"] = "Price cannot be negative"
        elif price >= PRICE_LIMIT:
            errors["price"] = "Price is out of range"
        else:
            price = price.quantize(CENTS, rounding=ROUND_HALF_UP)
            if price >= PRICE_LIMIT:
                errors["price"] = "Price is out of range"

    if errors:
        raise ProductValidationError(errors, form)
    return ProductFields(name=name, quantity=quantity, price=price)


def _resolve_intent(ref: ProductRef, form: Mapping[str, str]) -> str:
    intent = (form.get("intent") or "").strip().lower()
    if not intent:
        return INTENT_CREATE if ref.is_new else INTENT_UPDATE
    if intent not in INTENTS:
        raise ProductValidationError({"intent": f"Unknown intent: {intent}"}, form)
    return intent


async def submit_product(ref: ProductRef, form: Mapping[str, str]) -> SubmitResult:
    intent = _resolve_intent(ref, form)

    if intent == INTENT_DELETE:
        if ref.is_new or not await delete_product(ref.product_id):
            raise ProductNotFound(ref.product_id)
        _logger.info("DB delete product | id=%s", ref.product_id)
        return SubmitResult(action="deleted", product_id=ref.product_id)

    fields = parse_product_fields(form)

    if intent == INTENT_CREATE:
        prod = await create_product(fields.name, fields.quantity, fields.price)
        _logger.info("DB create product | id=%s name=%s", prod["id"], prod["name"])
        return SubmitResult(action="created", product_id=prod["id"])

    if ref.is_new:
        raise ProductNotFound(None)
    prod = await update_product(ref.product_id, fields.name, fields.quantity, fields.price)
    if prod is None:
        raise ProductNotFound(ref.product_id)
    _logger.info("DB update product | id=%s quantity=%s price=%s", prod["id"], prod["quantity"], prod["price"])
    return SubmitResult(action="updated", product_id=prod["id"])
