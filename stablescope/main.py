from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api import health, tools, members
from .config import settings
from .logging_config import setup_logging

setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Stablescope API",
    description="Stablecoin share of a wallet across EVM networks, plus the community member lookup",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# The landing page calls this API from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(tools.router, tags=["Tools"])
app.include_router(members.router, tags=["Members"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "Stablescope API",
        "version": "0.1.0",
        "description": "Stablecoin share of a wallet across EVM networks",
        "docs": "/docs",
        "health": "/healthz"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "stablescope.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
