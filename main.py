from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from store import LOG_LEVEL, SCHOOLS_SOURCE, init_session
from matchup.routes import router as matchup_router

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logging.info(f"App starting with SCHOOLS_SOURCE={SCHOOLS_SOURCE}")

app = FastAPI(
    title="School Matchup Advisor",
    description="Ranks schools by summed matchup scores against a user-selected subset",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(matchup_router)


@app.on_event("startup")
def load_catalog_on_startup():
    session = init_session()
    if not session.is_ready:
        logging.error("Catalog failed to load; matchup controls are disabled")


@app.get("/health", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok"}
