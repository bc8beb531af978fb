import logging

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .errors import register_error_handlers
from .redis_client import redis_client
from .routers import availability, reservations, staff

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Booking API")

register_error_handlers(app)

app.include_router(availability.router)
app.include_router(reservations.router)
app.include_router(staff.router)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    redis_ok = None
    if redis_client is not None:
        try:
            redis_ok = bool(redis_client.ping())
        except Exception as e:
            logger.error(f"Redis ping failed: {e}")
            redis_ok = False
    return {"database": True, "redis": redis_ok}
