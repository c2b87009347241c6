import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes.appraisals import router as appraisals_router
from api.routes.idps import router as idps_router
from api.routes.planning import router as planning_router
from api.routes.plans import router as plans_router
from api.routes.skills import router as skills_router
from config.settings import settings
from utils.database import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)

DESCRIPTION = """
Individual Development Plans: import appraisal data, derive skill gaps, generate learning plans and track completion.

## Authentication

When `API_SECRET_KEY` is configured, all endpoints (except `/`, `/ping` and `/health`) require it in the `X-API-Key` header.

## Quick Start

1. **Import an appraisal** → `POST /appraisals` with employee, manager and sheet URL
2. **Extract skills** → `POST /appraisals/{id}/analyze`
3. **Create an IDP** → `POST /idps`, then save skills and plans with `POST /idps/{id}/skills`
4. **Track progress** → `POST /plans/by-skill/{skill_id}/complete`, overview at `GET /idps/{id}`

## Progress

| Component | Counts when |
|-----------|-------------|
| `udemy`, `youtube`, `reading` | the resource is marked read |
| `tasks` | every task is marked complete |

Each component is worth 25%.
"""

tags_metadata = [
    {
        "name": "Health",
        "description": "Health check endpoints. No authentication required.",
    },
    {
        "name": "Appraisals",
        "description": "Import appraisal sheets and extract skills from them.",
    },
    {
        "name": "IDPs",
        "description": "Individual Development Plans: skills per review cycle and their progress.",
    },
    {
        "name": "Planning",
        "description": "Stateless skill extraction and plan generation.",
    },
    {
        "name": "Plans",
        "description": "Development plans per skill and mark-as-read.",
    },
    {
        "name": "Skills",
        "description": "Skill maintenance.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready")
    yield


app = FastAPI(
    title="IDP Planner API",
    description=DESCRIPTION,
    version="1.0.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Configure CORS
ALLOWED_ORIGINS = settings.ALLOWED_ORIGINS.split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
def root():
    """Root endpoint with API information and documentation links"""
    return {
        "message": "Welcome to IDP Planner API",
        "version": "1.0.0",
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "authentication": {
            "type": "API Key",
            "header": "X-API-Key",
            "note": "Required when API_SECRET_KEY is set, except for /, /ping and /health"
        },
        "endpoints": {
            "health": "/health",
            "ping": "/ping",
            "appraisals": "/appraisals",
            "idps": "/idps",
            "planning": "/planning",
            "plans": "/plans",
            "skills": "/skills"
        }
    }


# Health check endpoints (public - no authentication required)
@app.get("/ping", tags=["Health"])
def ping():
    """Simple ping endpoint to check if API is responding. No authentication required."""
    return {"message": "pong"}


@app.get("/health", tags=["Health"])
def health():
    """Health check endpoint with basic status information. No authentication required."""
    return {
        "status": "healthy",
        "service": "IDP Planner API",
        "version": "1.0.0"
    }


# Register routers
app.include_router(appraisals_router)
app.include_router(idps_router)
app.include_router(planning_router)
app.include_router(plans_router)
app.include_router(skills_router)
