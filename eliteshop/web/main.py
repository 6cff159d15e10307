from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional
from urllib.parse import urlencode

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from eliteshop.config import Settings, settings as default_settings
from eliteshop.constants import CATEGORIES, CATEGORY_ALL, MIN_SEARCH_LENGTH, NOTIFY_ERROR, STATUS_TEXT
from eliteshop.db.storage import SqliteStorage, Storage
from eliteshop.errors import MSG_CHECKOUT_FAILED, MSG_PRODUCT_NOT_FOUND
from eliteshop.services.catalog import get_product, search_products
from eliteshop.services.checkout import SimulatedCheckoutGateway
from eliteshop.store.cart import CartStore, CheckoutGateway
from eliteshop.store.wishlist import WishlistStore
from eliteshop.utils.formatters import money
from eliteshop.web.shop import ShopSession

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = money


# ---------------- JSON API models ----------------

class ProductOut(BaseModel):
    id: str
    name: str
    category: str
    price: float
    description: str = ""
    badge: Optional[str] = None
    in_wishlist: bool = False


class LineItemOut(BaseModel):
    id: str
    name: str
    price: float
    quantity: int
    line_total: float
    added_at: str


class CartOut(BaseModel):
    items: List[LineItemOut]
    total_items: int
    total: float


class WishlistOut(BaseModel):
    items: List[str]


class AddItemIn(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


def _cart_out(session: ShopSession) -> CartOut:
    cart = session.cart
    return CartOut(
        items=[
            LineItemOut(
                id=it.id,
                name=it.name,
                price=float(it.unit_price),
                quantity=it.quantity,
                line_total=float(it.line_total),
                added_at=it.added_at,
            )
            for it in cart.items
        ],
        total_items=cart.total_items(),
        total=float(cart.total()),
    )


def _back(category: Optional[str] = None) -> RedirectResponse:
    params = {}
    if category and category != CATEGORY_ALL:
        params["category"] = category
    url = "/" + (f"?{urlencode(params)}" if params else "")
    return RedirectResponse(url=url, status_code=303)


def create_app(
    settings: Settings = default_settings,
    storage: Optional[Storage] = None,
    gateway: Optional[CheckoutGateway] = None,
) -> FastAPI:
    if storage is None:
        storage = SqliteStorage(settings.db_path)
    if gateway is None:
        gateway = SimulatedCheckoutGateway(settings.checkout_delay)

    session = ShopSession(
        cart=CartStore(storage, settings.cart_key),
        wishlist=WishlistStore(storage, settings.wishlist_key),
        gateway=gateway,
        shop_name=settings.shop_name,
        receipt_dir=settings.receipt_dir or None,
    )

    app = FastAPI(title=f"{settings.shop_name} Storefront")
    app.state.shop = session
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    def _render(request: Request, name: str, ctx: dict[str, Any]) -> HTMLResponse:
        base = {
            "shop": session,
            "shop_name": settings.shop_name,
            "categories": CATEGORIES,
            "notifications": session.drain_notifications(),
        }
        base.update(ctx)
        return templates.TemplateResponse(request, name, base)

    # ---------------- pages ----------------

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request, category: Optional[str] = None, q: Optional[str] = None):
        active = session.set_filter(category)
        query = (q or "").strip()
        products = search_products(query, active)
        return _render(
            request,
            "index.html",
            {
                "products": products,
                "active_category": active,
                "query": query,
                "searching": len(query) >= MIN_SEARCH_LENGTH,
            },
        )

    @app.get("/status", response_class=PlainTextResponse)
    def status():
        return STATUS_TEXT

    # ---------------- cart ----------------

    @app.post("/cart/add")
    def cart_add(
        product_id: str = Form(...),
        quantity: int = Form(1),
        category: str = Form(CATEGORY_ALL),
    ):
        session.add_to_cart(product_id, quantity)
        return _back(category)

    @app.post("/cart/remove")
    def cart_remove(product_id: str = Form(...), category: str = Form(CATEGORY_ALL)):
        session.remove_from_cart(product_id)
        return _back(category)

    @app.post("/cart/update")
    def cart_update(
        product_id: str = Form(...),
        quantity: int = Form(...),
        category: str = Form(CATEGORY_ALL),
    ):
        session.update_quantity(product_id, quantity)
        return _back(category)

    @app.post("/cart/open")
    def cart_open(category: str = Form(CATEGORY_ALL)):
        session.open_cart()
        return _back(category)

    @app.post("/cart/close")
    def cart_close(category: str = Form(CATEGORY_ALL)):
        session.close_cart()
        return _back(category)

    @app.post("/cart/checkout")
    async def cart_checkout(category: str = Form(CATEGORY_ALL)):
        try:
            summary = await session.checkout()
        except Exception as e:
            logger.exception("Checkout failed")
            session.notify(MSG_CHECKOUT_FAILED.format(error=e), NOTIFY_ERROR)
            return _back(category)
        if summary is None:
            return _back(category)
        return RedirectResponse(url="/checkout/done", status_code=303)

    @app.get("/checkout/done", response_class=HTMLResponse)
    def checkout_done(request: Request):
        if session.last_summary is None:
            return _back()
        receipt = Path(session.last_receipt).name if session.last_receipt else None
        return _render(request, "checkout_done.html", {"summary": session.last_summary, "receipt": receipt})

    @app.get("/receipts/{name}", response_class=FileResponse)
    def download_receipt(name: str):
        if not settings.receipt_dir:
            raise HTTPException(status_code=404, detail="Receipts are disabled")
        root = Path(settings.receipt_dir).resolve()
        p = (root / name).resolve()
        if p.parent != root or p.suffix != ".pdf" or not p.is_file():
            raise HTTPException(status_code=404, detail="Receipt not found")
        return FileResponse(str(p), filename=p.name, media_type="application/pdf")

    # ---------------- wishlist ----------------

    @app.post("/wishlist/toggle")
    def wishlist_toggle(product_id: str = Form(...), category: str = Form(CATEGORY_ALL)):
        session.toggle_wishlist(product_id)
        return _back(category)

    # ---------------- contact ----------------

    @app.post("/contact")
    def contact(
        name: str = Form(""),
        email: str = Form(""),
        message: str = Form(""),
    ):
        session.submit_contact(name, email, message)
        return RedirectResponse(url="/#contact", status_code=303)

    # ---------------- JSON API ----------------

    @app.get("/api/products", response_model=list[ProductOut])
    def api_products(category: Optional[str] = None, q: Optional[str] = None):
        return [
            ProductOut(
                id=p.id,
                name=p.name,
                category=p.category,
                price=float(p.price),
                description=p.description,
                badge=p.badge,
                in_wishlist=p.id in session.wishlist,
            )
            for p in search_products(q, category)
        ]

    @app.get("/api/cart", response_model=CartOut)
    def api_cart():
        return _cart_out(session)

    @app.post("/api/cart/items", response_model=CartOut)
    def api_cart_add(payload: AddItemIn):
        product = get_product(payload.product_id)
        if product is None:
            raise HTTPException(status_code=404, detail=MSG_PRODUCT_NOT_FOUND)
        session.cart.add(product.id, product.price, product.name, payload.quantity)
        return _cart_out(session)

    @app.get("/api/wishlist", response_model=WishlistOut)
    def api_wishlist():
        return WishlistOut(items=session.wishlist.items)

    return app
