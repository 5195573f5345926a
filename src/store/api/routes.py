"""FastAPI routes for the Store domain: shoppers, products, carts and checkout."""

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from store.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    ChangePriceRequest,
    ErrorResponse,
    ProductIdResponse,
    ProductResponse,
    PurchaseResponse,
    RegisterProductRequest,
    RegisterShopperRequest,
    ShopperIdResponse,
    ShopperResponse,
    StatusResponse,
)
from store.cart.cart_line import CartLine
from store.cart.items import add_to_cart
from store.catalogue.product import Product
from store.catalogue.registration import ChangeProductPrice, RegisterProduct, RegisterShopper
from store.catalogue.shopper import Shopper, require_shopper
from store.checkout.engine import CheckoutEngine
from store.checkout.errors import CheckoutError
from store.ledger.ledger import PurchaseLedger
from store.utils.logging import add_context

engine = CheckoutEngine()
ledger = PurchaseLedger()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _purchase_response(purchase) -> PurchaseResponse:
    return PurchaseResponse(**purchase.to_record())


# ---------------------------------------------------------------------------
# Shopper Router
# ---------------------------------------------------------------------------
shopper_router = APIRouter(prefix="/shoppers", tags=["shoppers"])


@shopper_router.post("", status_code=201, response_model=ShopperIdResponse)
async def register_shopper(body: RegisterShopperRequest) -> ShopperIdResponse:
    command = RegisterShopper(
        name=body.name,
        payment_method=body.payment_method,
    )
    result = current_domain.process(command, asynchronous=False)
    return ShopperIdResponse(shopper_id=result)


@shopper_router.get("", response_model=list[ShopperResponse])
async def list_shoppers() -> list[ShopperResponse]:
    shoppers = current_domain.repository_for(Shopper).listing()
    return [
        ShopperResponse(
            shopper_id=str(shopper.id),
            name=shopper.name,
            payment_method=shopper.payment_method,
        )
        for shopper in shoppers
    ]


@shopper_router.post("/{shopper_id}/cart/items", response_model=StatusResponse, responses=_ERROR_RESPONSES)
async def add_cart_item(shopper_id: str, body: AddToCartRequest) -> StatusResponse:
    require_shopper(shopper_id)
    add_to_cart(shopper_id, body.product_id, body.quantity)
    return StatusResponse()


@shopper_router.get("/{shopper_id}/cart", response_model=list[CartLineResponse], responses=_ERROR_RESPONSES)
async def get_cart(shopper_id: str) -> list[CartLineResponse]:
    require_shopper(shopper_id)
    lines = current_domain.repository_for(CartLine).read_lines(shopper_id)
    return [CartLineResponse(product_id=str(line.product_id), quantity=line.quantity) for line in lines]


@shopper_router.post(
    "/{shopper_id}/checkout",
    status_code=201,
    response_model=PurchaseResponse,
    responses=_ERROR_RESPONSES,
)
async def checkout(shopper_id: str) -> PurchaseResponse:
    """Finalize the shopper's purchase.

    1. Confirm the shopper exists
    2. Record the purchase and clear the cart in one unit of work
    """
    add_context(shopper_id=shopper_id)
    require_shopper(shopper_id)
    purchase = engine.finalize_purchase(shopper_id)
    return _purchase_response(purchase)


@shopper_router.get("/{shopper_id}/purchases", response_model=list[PurchaseResponse], responses=_ERROR_RESPONSES)
async def list_purchases(shopper_id: str) -> list[PurchaseResponse]:
    require_shopper(shopper_id)
    return [_purchase_response(purchase) for purchase in ledger.list_by_shopper(shopper_id)]


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def register_product(body: RegisterProductRequest) -> ProductIdResponse:
    command = RegisterProduct(
        name=body.name,
        price=str(body.price),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    products = current_domain.repository_for(Product).listing()
    return [
        ProductResponse(
            product_id=str(product.id),
            name=product.name,
            price=str(product.price),
        )
        for product in products
    ]


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def change_product_price(product_id: str, body: ChangePriceRequest) -> StatusResponse:
    command = ChangeProductPrice(
        product_id=product_id,
        new_price=str(body.price),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Purchase Router
# ---------------------------------------------------------------------------
purchase_router = APIRouter(prefix="/purchases", tags=["purchases"])


@purchase_router.get("/{purchase_id}", response_model=PurchaseResponse, responses=_ERROR_RESPONSES)
async def get_purchase(purchase_id: str) -> PurchaseResponse:
    return _purchase_response(ledger.get(purchase_id))


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
async def checkout_error_handler(request: Request, exc: CheckoutError) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(status_code=exc.http_status, content={"error": exc.to_dict()})


def register_checkout_error_handlers(app: FastAPI) -> None:
    """Render every CheckoutError as ``{"error": {"kind", "message", "retryable"}}``."""
    app.add_exception_handler(CheckoutError, checkout_error_handler)
