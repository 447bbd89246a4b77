import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.health import router as health_router
from storefront.api.routes_admin import router as admin_router
from storefront.api.routes_cart import router as cart_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_checkout import router as checkout_router
from storefront.api.routes_discount import router as discount_router
from storefront.config import settings
from storefront.db import init_db
from storefront.utils.responses import error_response
from storefront.utils.results import ErrorCode

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: load the catalogue once; carts, orders and discount start empty
    store = init_db()
    log.info("Store ready with %d products", store.products.count())
    yield


app = FastAPI(title="Storefront - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    log.info("Rejected malformed request %s %s", request.method, request.url.path)
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:])
    message = f"Invalid request: {field} {first.get('msg', '')}".strip() if field else "Invalid request body"
    return error_response(ErrorCode.INVALID_REQUEST, message)


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(cart_router, tags=["cart"])

app.include_router(checkout_router, prefix="/api/checkout", tags=["checkout"])

app.include_router(discount_router, prefix="/api/discount", tags=["discount"])

app.include_router(admin_router, tags=["admin"])


if __name__ == "__main__":
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
