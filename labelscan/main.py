import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from labelscan import config
from labelscan.api.endpoints import analysis, health


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)

app = FastAPI(
    title="LabelScan API",
    description="Reads food-label photos into confidence-scored text and product metadata",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify actual origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(analysis.router, prefix="/api/v1/analysis", tags=["analysis"])


@app.get("/")
async def root():
    return {
        "message": "LabelScan API",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
