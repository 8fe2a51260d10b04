from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from payment_gateway import config
from payment_gateway.database import Base, engine, wait_for_store
from payment_gateway.dependencies import get_vault_client
from payment_gateway.logging_config import setup_logging
from payment_gateway.routes import router

logger = setup_logging(config.SERVICE_NAME, config.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_vault_client()

    connected = await run_in_threadpool(
        wait_for_store, engine, config.DATABASE_CONNECT_ATTEMPTS, config.DATABASE_CONNECT_DELAY
    )
    if connected:
        Base.metadata.create_all(bind=engine)
    else:
        logger.error("Database unreachable at startup, serving with db health Fail")

    logger.info("Starting server")
    yield

    get_vault_client().close()
    get_vault_client.cache_clear()
    engine.dispose()


app = FastAPI(title="Payment Tokenization Gateway", lifespan=lifespan)

app.include_router(router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Field locations and messages only; the submitted input may hold a PAN
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": errors})
