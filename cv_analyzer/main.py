import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cv_analyzer.api.routes.analyze import router as analyze_router
from cv_analyzer.api.routes.upload import router as upload_router
from cv_analyzer.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=f"{settings.app_name} (Resume Extraction Service)",
    description="Heuristic CV parsing for English and Turkish resumes, with optional Gemini-based review",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload_router)
app.include_router(analyze_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "cv-analyzer", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
