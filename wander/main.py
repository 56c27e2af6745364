# path: wander/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wander.core.config import settings
from wander.core.logging import setup_logging
from wander.routers.checkins import router as checkins_router
from wander.routers.places import router as places_router
from wander.routers.users import router as users_router

setup_logging()

app = FastAPI(title="Wander Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(checkins_router)
app.include_router(users_router)
app.include_router(places_router)

@app.get("/health")
def health():
    return {"status": "ok"}
