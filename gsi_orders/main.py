# gsi_orders/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from gsi_orders.api.routers import (
    admin,
    cart,
    catalog,
    chatbot,
    checkout,
    health,
    orders,
    quotes,
    reviews,
    tax,
    users,
    wishlist,
)
from gsi_orders.data.database import Base, create_tables
from gsi_orders.utils import settings
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)


def init_db():
    try:
        create_tables()
        logger.info(f"Database tables ready: {sorted(Base.metadata.tables.keys())}")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}")
        raise


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # services send a ready body, plain strings get wrapped
    body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    details = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "invalid value")
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="GSI Orders",
        version=settings.APP_VERSION,
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Include routers
    for module in (
        health,
        catalog,
        cart,
        orders,
        reviews,
        wishlist,
        quotes,
        admin,
        users,
        checkout,
        chatbot,
        tax,
    ):
        app.include_router(module.router, prefix="/api")

    return app


init_db()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
