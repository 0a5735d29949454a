# app/main.py

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

# ---------------------------------------------
# LOAD ENVIRONMENT VARIABLES
# ---------------------------------------------
load_dotenv()

from app.config import Settings, settings as default_settings
from app.logging_config import get_logger
from app.middleware import request_id_middleware
from app.routers import payments_razorpay
from app.schemas_pkg.payments import NotFoundOut, RootOut
from app.services.payments.errors import PaymentError

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info("startup", **settings.describe())
        if not settings.razorpay_configured:
            logger.warning("razorpay_not_configured")
        yield

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ---------------------------------------------
    # MIDDLEWARE
    # ---------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials="*" not in settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)

    # ---------------------------------------------
    # ERROR HANDLERS
    # ---------------------------------------------
    @app.exception_handler(PaymentError)
    async def payment_error_handler(request: Request, exc: PaymentError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # A known path with the wrong method is still an unmatched route.
        if exc.status_code in (404, 405):
            path = request.url.path
            if request.url.query:
                path = f"{path}?{request.url.query}"
            return JSONResponse(status_code=404, content=NotFoundOut(path=path).model_dump())
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    # ---------------------------------------------
    # ROUTERS
    # ---------------------------------------------
    app.include_router(payments_razorpay.router, responses={404: {"model": NotFoundOut}})

    # ---------------------------------------------
    # ROOT ENDPOINT
    # ---------------------------------------------
    @app.get("/", response_model=RootOut)
    def root():
        return RootOut(message=f"{settings.APP_NAME} is running")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=default_settings.PORT)
