import asyncio
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.api.v1.endpoints.otp import router as otp_router
from app.api.v1.endpoints.registrations import router as registrations_router
from app.api.v1.endpoints.tickets import router as tickets_router
from app.core.config import settings
from app.core.services import service_manager
from app.utils.schedulers.expireOtpCodes import otp_expiry_sweeper

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
# OTP throttling lives in OtpRateLimiter; this limiter only backs the RateLimitExceeded handler.
limiter = Limiter(key_func=get_remote_address)

scheduler_tasks = []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Async context manager for app lifespan events"""

    try:
        logger.info(f"🚀 Starting {settings.EVENT_NAME} registration service...")

        if not service_manager.initialized:
            service_manager.init(settings)

        logger.info("📅 Starting OTP expiry sweeper...")
        task = asyncio.create_task(
            otp_expiry_sweeper(
                service_manager.code_store,
                service_manager.settings.OTP_SWEEP_INTERVAL_SECONDS,
            )
        )
        scheduler_tasks.append(task)

    except Exception as e:
        logger.critical(f"🔥 Application startup failed: {str(e)}")
        raise

    try:
        logger.info("🏁 Registration service startup complete")
        yield
    finally:
        logger.info("🛑 Beginning application shutdown...")

        for task in scheduler_tasks:
            if not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        scheduler_tasks.clear()

        service_manager.close()
        logger.info("👋 Application shutdown complete")


app = FastAPI(
    title=f"{settings.EVENT_NAME} Registration API",
    description="OTP verification, pass registration and payment recording for the fest",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info(f"{request.method} {request.url.path} {response.status_code} in {duration_ms}ms")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation Error: {exc.errors()}")
    flag = "verified" if request.url.path.endswith("/verify-otp") else "success"
    return JSONResponse(
        status_code=400,
        content={flag: False, "message": "Invalid request body"},
    )


@app.get("/", tags=["Health Check"])
async def health_check():
    if not service_manager.initialized:
        return {"status": "starting", "service": app.title}
    return {
        "status": "healthy",
        "service": app.title,
        "environment": service_manager.settings.ENVIRONMENT,
        "notifier": service_manager.notifier.backend,
        "ledger": service_manager.ledger_store.backend,
        "pending_otps": len(service_manager.code_store),
        "schedulers_running": len([t for t in scheduler_tasks if not t.done()]),
    }


app.include_router(otp_router, prefix="/api", tags=["OTP"])
app.include_router(registrations_router, prefix="/api", tags=["Registrations"])
app.include_router(tickets_router, prefix="/api", tags=["Tickets"])

logger.info(f"✅ Loaded {len(app.routes)} routes")
