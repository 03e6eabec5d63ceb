import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from storefront.version import VERSION
from storefront.api import auth, users, products, orders
from storefront.core.config import settings
from storefront.core.errors import AuthError, NotFoundError, StoreError, ValidationError
from storefront.core.logging import configure_logging

logger = structlog.get_logger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ValidationError, 400),
    (AuthError, 401),
    (StoreError, 500),
)


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title='Storefront Service', version=VERSION)

    # Instrument the app BEFORE adding routes or middleware
    Instrumentator().instrument(app).expose(
        app,
        include_in_schema=False,
        endpoint="/metrics",
        should_gzip=True,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_type, status_code in _STATUS_BY_ERROR:
        app.add_exception_handler(exc_type, _error_handler(status_code))

    @app.get('/health')
    def health(): return {'status': 'ok'}

    @app.get('/v1/_info')
    def info(): return {'service': 'storefront', 'version': VERSION}

    app.include_router(auth.router, prefix='/api/auth', tags=['auth'])
    app.include_router(users.router, prefix='/api/users', tags=['users'])
    app.include_router(products.router, prefix='/api/products', tags=['products'])
    app.include_router(orders.router, prefix='/api/orders', tags=['orders'])

    logger.info("app_created", version=VERSION, routes=len(app.routes))
    return app


def _error_handler(status_code: int):
    async def handler(request: Request, exc):
        if status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message, exc_info=exc)
        return JSONResponse(status_code=status_code, content={'detail': exc.message})
    return handler


app = create_app()
