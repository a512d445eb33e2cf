# RecipeShare API Main Entry Point
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .core.errors import RecipeShareError
from .core.rate_limit import limiter
from .settings import settings
from .routers.ready import router as ready_router
from .routers.auth import router as auth_router
from .routers.profiles import router as profiles_router
from .routers.recipes import router as recipes_router
from .routers.comments import router as comments_router
from .routers.rpc import router as rpc_router
from .routers.meal_plans import router as meal_plans_router
from .routers.shopping import router as shopping_router
from .routers.dev import router as dev_router

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("recipeshare")

app = FastAPI(title="RecipeShare API", version="0.1.0")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RecipeShareError)
async def recipeshare_error_handler(request: Request, exc: RecipeShareError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"detail": _validation_message(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(auth_router, prefix="/api", tags=["auth"])
app.include_router(profiles_router, prefix="/api", tags=["profiles"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
app.include_router(comments_router, prefix="/api", tags=["comments"])
app.include_router(rpc_router, prefix="/api", tags=["rpc"])
app.include_router(meal_plans_router, prefix="/api", tags=["meal-plans"])
app.include_router(shopping_router, prefix="/api", tags=["shopping"])

if settings.dev_routes_enabled:
    app.include_router(dev_router, prefix="/api", tags=["dev"])
