from fastapi import FastAPI
import uvicorn
import asyncio
from fastapi.middleware.cors import CORSMiddleware
from musicmead.core import config
from musicmead.api.router import api_router, auth_router
from musicmead.services.keepalive_service import start_keepalive
import logging

logger = logging.getLogger(__name__)

app = FastAPI(title="MusicMead Song Picks API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(api_router, prefix="/api")
app.include_router(auth_router)

# Background task pinging /healthz so the host does not sleep
keepalive_task = None

@app.on_event("startup")
async def startup_event():
    global keepalive_task
    keepalive_task = start_keepalive()
    logger.info(f"Submissions stored in {config.DATA_FILE}")

@app.on_event("shutdown")
async def shutdown_event():
    """Stop the keep-alive pinger"""
    global keepalive_task
    if keepalive_task:
        keepalive_task.cancel()
        try:
            await keepalive_task
        except asyncio.CancelledError:
            pass
        keepalive_task = None
        logger.info("Stopped keep-alive pinger")

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
