# shopapi/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from shopapi.api import include_routers
from shopapi.data.database import Database
from shopapi.data.seed import seed
from shopapi.domain.errors import InternalError
from shopapi.utils.logging import get_logger
from shopapi.utils.settings import DATABASE_URL, SQL_ECHO, SEED_ON_STARTUP, HOST, PORT

logger = get_logger(__name__)

DESCRIPTION = """
E-commerce REST API built with **FastAPI** and **SQLAlchemy**.

## Quick Start
1. **Register** a user via `POST /api/auth/register`
2. **Login** via `POST /api/auth/login` to get a JWT token
3. **Browse** products via `GET /api/products`
4. **Add to cart** via `POST /api/cart` (header `x-session-id`)
5. **Checkout** via `POST /api/orders`
"""


def _validation_message(errors) -> str:
    parts = []
    for err in errors:
        # loc = ("body", "price") -> "price"
        field = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # nieznana trasa albo metoda -> 404 z opisem
        if exc.status_code in (404, 405) and exc.detail in ("Not Found", "Method Not Allowed"):
            return JSONResponse(
                status_code=404,
                content={"error": f"Route {request.method} {request.url.path} not found"},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        return JSONResponse(
            status_code=400,
            content={"error": _validation_message(errors), "details": jsonable_encoder(errors)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
        err = InternalError(details=str(exc))
        return JSONResponse(
            status_code=err.status_code,
            content={"error": err.message, "details": err.details},
        )


def create_app(database: Database | None = None, seed_data: bool = SEED_ON_STARTUP) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database(DATABASE_URL, echo=SQL_ECHO)
        app.state.database = db

        logger.info(f"Initializing database {db.engine.url.render_as_string(hide_password=True)}")
        db.create_all()
        if seed_data:
            seed(db)

        yield

        db.dispose()

    app = FastAPI(
        title="ShopAPI: E-Commerce REST API",
        version="1.0.0",
        description=DESCRIPTION,
        docs_url="/api-docs",
        openapi_url="/api-docs.json",
        redoc_url=None,
        lifespan=lifespan,
    )

    include_routers(app)
    register_exception_handlers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
