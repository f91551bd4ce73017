# footcare/main.py
import os
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

from .api_routes import router as api_router
from .chat_chain import is_demo_mode
from .db import init_store, close_store

app = FastAPI(title="FootCare Triage Service")

app.include_router(api_router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # malformed or missing input is a client error, reported as 400
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.on_event("startup")
async def startup():
    init_store(app)
    if is_demo_mode():
        logger.info("OPENAI_API_KEY not set; chat runs the scripted demo flow")


@app.on_event("shutdown")
async def shutdown():
    close_store(app)


@app.get("/")
async def root():
    return {"service": "footcare-triage", "status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
