"""
Medication Timeline Engine - API host

Decides which prescribed medications were truly taken together and which
were a sequential switch, so the interaction analyzer only sees real
co-administration.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from medtimeline.config import settings
from medtimeline.api import timeline_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Temporal reasoning over a case's medication list:

    * **Duration Estimation** - End dates from quantity, dose and frequency
    * **Timeline Segmentation** - Spans where two or more drugs are co-active
    * **Relationship Checks** - Overlap vs. sequential therapy switch
    * **Claim Validation** - Suppress AI interaction claims on switched drugs
    """,
    version=settings.VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(timeline_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "services": {
            "timeline": "ok",
            "duration": "ok",
            "relationships": "ok"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
