"""
Review Engine - FastAPI Application

Main entry point for the Review Engine backend.

Architecture:
- GenerationRequest → ReviewSynthesizer → GeneratedReview
- NarrativeComposer builds hook, setup, development, climax, resolution
- VoiceAdapter, nuance and polish passes run once each, in order
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .routers import reviews_router
from .services.review_generator.synthesizer import ENGINE_VERSION

config.configure_logging()

# Create FastAPI app
app = FastAPI(
    title="Review Engine",
    description="""
    Review Engine - Hotel Review Generation System

    Turns a star rating, trip type and a few highlights into a natural,
    human-sounding hotel review.

    ## Pipeline
    1. **Narrative**: hook, setup, development, climax, resolution
    2. **Voice**: professional, friendly, enthusiastic, detailed (or registered)
    3. **Passes**: emotional nuance, then final polish
    4. **Scoring**: readability and authenticity metadata

    ## Key Principles
    - Generation never fails: errors produce a fallback review
    - Transitions are unique within one review
    - The hotel name is reproduced verbatim
    - Identical seed and request produce identical text
    """,
    version=ENGINE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(reviews_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Review Engine",
        "version": ENGINE_VERSION,
        "description": "Hotel Review Generation System",
        "docs": "/docs",
        "voices": ["professional", "friendly", "enthusiastic", "detailed"],
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": ENGINE_VERSION}


# For running with: python -m app.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
