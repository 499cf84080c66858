import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from clubs import router as clubs_router
from core import config, db
from core.logging_config import setup_logging
from grants import router as grants_router
from procurement import router as procurement_router
from users import router as users_router

setup_logging(config.log_level())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="procurement-grants api", lifespan=lifespan)

app.include_router(users_router.router, tags=["users"])
app.include_router(clubs_router.router, tags=["clubs"])
app.include_router(procurement_router.router, tags=["procurement"])
app.include_router(grants_router.router, tags=["grants"])


def _db_error_detail(exc: db.DatabaseError) -> str:
    if config.expose_db_errors():
        return str(exc)
    return "Database error."


@app.exception_handler(db.DatabaseError)
async def database_error(request: Request, exc: db.DatabaseError) -> JSONResponse:
    logger.exception(
        "db_error kind=%s method=%s path=%s",
        exc.__class__.__name__,
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": _db_error_detail(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error."},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "procurement-grants api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.listen_host(), port=config.listen_port())
