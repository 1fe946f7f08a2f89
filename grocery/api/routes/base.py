from datetime import datetime

import pytz
from fastapi import APIRouter

from config import settings

router = APIRouter()

@router.get("/api/health")
async def health():
    return {
        "status": "OK",
        "message": f"{settings.PROJECT_NAME} is running",
        "timestamp": datetime.now(pytz.utc).isoformat(),
    }
