# mummytrack/main.py
from contextlib import asynccontextmanager
import logging
import sys
import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

from mummytrack.core.config import settings
from mummytrack.database.mongo_state import MongoStateStore
from mummytrack.services.advisor import AdvisoryGateway
from mummytrack.services.tracker import TrackerService
from mummytrack.services.timers import DeadlinePoller, FocusTimer
from mummytrack.routers.v1 import health
from mummytrack.routers.v1 import assignment
from mummytrack.routers.v1 import grade
from mummytrack.routers.v1 import dashboard
from mummytrack.routers.v1 import session
from mummytrack.routers.v1 import focus

logging.basicConfig(
    level=logging.INFO,  # DEBUG per vedere le chiamate a Gemini
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    stream=sys.stdout,
)

# più verboso solo per il gateway
logging.getLogger("mummytrack.services.advisor").setLevel(logging.DEBUG)

def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = AsyncIOMotorClient(settings.mongo_uri, uuidRepresentation="standard")
        db = client[settings.mongo_db_name]
        store = MongoStateStore(db, settings.state_collection)
        await store.ensure_indexes()

        # --- Gemini ---
        http_client = httpx.AsyncClient(timeout=settings.advisor_timeout)
        advisor = AdvisoryGateway(
            http_client,
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            pro_model=settings.gemini_pro_model,
            base_url=settings.gemini_base_url,
        )
        if not settings.gemini_api_key:
            logging.warning("GEMINI_API_KEY non impostata: i consigli useranno i valori di default")

        tracker = TrackerService(
            store,
            advisor,
            assignments_key=settings.assignments_key,
            grades_key=settings.grades_key,
        )
        await tracker.load()
        app.state.tracker = tracker   # tracker disponibile alle routes

        focus_timer = FocusTimer(settings.focus_session_seconds)
        app.state.focus_timer = focus_timer

        poller = DeadlinePoller(tracker, settings.deadline_poll_seconds)
        poller.start()

        try:
            yield
        finally:
            await poller.stop()
            await focus_timer.stop()
            await http_client.aclose()
            client.close()

    app = FastAPI(
        title="MummyTrack",
        description="Homework tracker sorvegliato da Mummy",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    app.include_router(health.router,     prefix="/api/v1", tags=["health"])
    app.include_router(assignment.router, prefix="/api/v1", tags=["assignments"])
    app.include_router(grade.router,      prefix="/api/v1", tags=["grades"])
    app.include_router(dashboard.router,  prefix="/api/v1", tags=["dashboard"])
    app.include_router(session.router,    prefix="/api/v1", tags=["session"])
    app.include_router(focus.router,      prefix="/api/v1", tags=["focus"])
    return app

app = create_app()


def run() -> None:
    logging.info("MummyTrack in ascolto su http://%s:%d (docs su /docs)", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
