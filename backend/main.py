"""
FastAPI Application Entry Point
"""
import logging
from fastapi import FastAPI
from hotstreak.core.config import settings
from hotstreak.routes import habits, health

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Silence noisy third-party loggers
logging.getLogger('httpx').setLevel(logging.WARNING)
logging.getLogger('httpcore').setLevel(logging.WARNING)
logging.getLogger('hpack').setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Hot Streak API",
    version="0.1.0"
)

# Register routes
app.include_router(health.router)
app.include_router(habits.router)

logger.info(f"Hot Streak API ready (day boundaries in {settings.APP_TIMEZONE})")
