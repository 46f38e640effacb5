import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usemyvoucher import __version__
from usemyvoucher.config import settings
from usemyvoucher.routers import extraction

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Voucher text extraction for the submit-voucher form",
    version=__version__,
    debug=settings.DEBUG,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    return {
        "message": f"{settings.APP_NAME} API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


app.include_router(extraction.router)
