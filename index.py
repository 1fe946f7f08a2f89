from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import settings
from grocery.api.routes import router as api_router
from grocery.middlewares.logging_middleware import log_requests
import logging

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)

# Add logging middleware
app.middleware("http")(log_requests)

#  Include all API routes
app.include_router(api_router)
