from typing import Dict, Mapping, Optional


class InventoryError(Exception):
    """Base class for failures raised by the inventory flows."""


class ProductNotFound(InventoryError):
    def __init__(self, product_id: Optional[str]):
        self.product_id = product_id
        super().__init__(f"product not found: {product_id!r}")


class ProductValidationError(InventoryError):
    """Submitted form values could not be turned into a product.

    ``errors`` maps a field name to a user-facing message; ``values`` holds the
    raw submission so the form can be shown again as the user typed it.
    """

    def __init__(self, errors: Dict[str, str], values: Optional[Mapping[str, str]] = None):
        self.errors = errors
        values = values or {}
        self.values = {key: values.get(key) for key in values}
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
