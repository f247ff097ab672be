import logging

from quart import Blueprint, flash, redirect, render_template, request, url_for

from .errors import ProductValidationError
from .service import ProductRef, load_listing, load_product, submit_product

bp = Blueprint("inventory", __name__)

_logger = logging.getLogger(__name__)

# Path segment that addresses the blank "create" form instead of a stored product.
NEW_TOKEN = "new"

FLASH_MESSAGES = {
    "created": "Product created successfully",
    "updated": "Product updated successfully",
    "deleted": "Product deleted",
}


def product_ref(product_id: str) -> ProductRef:
    if product_id == NEW_TOKEN:
        return ProductRef.new()
    return ProductRef.existing(product_id)


def _form_values(product) -> dict:
    if product is None:
        return {"name": "", "quantity": "", "price": ""}
    return {
        "name": product["name"],
        "quantity": str(product["quantity"]),
        "price": f"{product['price']:.2f}",
    }


@bp.get("/")
async def products_list():
    listing = await load_listing()
    return await render_template("products.html", listing=listing)


@bp.get("/products/<product_id>")
async def product_detail(product_id: str):
    ref = product_ref(product_id)
    form = await load_product(ref)
    return await render_template(
        "product_form.html",
        is_new=form.is_new,
        product_id=product_id,
        values=_form_values(form.product),
        errors={},
    )


@bp.post("/products/<product_id>")
async def product_submit(product_id: str):
    ref = product_ref(product_id)
    data = await request.form
    try:
        result = await submit_product(ref, data)
    except ProductValidationError as e:
        _logger.info("Rejected product submission | id=%s errors=%s", product_id, e.errors)
        values = {key: e.values.get(key, "") for key in ("name", "quantity", "price")}
        body = await render_template(
            "product_form.html",
            is_new=ref.is_new,
            product_id=product_id,
            values=values,
            errors=e.errors,
        )
        return body, 400
    await flash(FLASH_MESSAGES[result.action])
    return redirect(url_for("inventory.products_list"))
