"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from related_list.config import get_settings
from related_list.db.session import SessionLocal, engine
from related_list.models import Base
from related_list.routers import widgets
from related_list.schemas.widget import WidgetConfig
from related_list.services.controller import InteractionController
from related_list.services.flows import HostFlowLauncher
from related_list.services.record_store import SqlRecordService
from related_list.services.registry import WidgetRegistry

logger = logging.getLogger(__name__)


def build_registry(store: SqlRecordService) -> WidgetRegistry:
    """Registry whose controllers share one store and a host-driven flow launcher."""

    settings = get_settings()
    flows = HostFlowLauncher()

    def factory(config: WidgetConfig, widget_id: str) -> InteractionController:
        return InteractionController(
            config,
            records=store,
            schema_service=store,
            permission_service=store,
            flows=flows,
            settings=settings,
            widget_id=widget_id,
        )

    return WidgetRegistry(factory)


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = getattr(app.state, "widget_registry", None)
    if registry is None:
        Base.metadata.create_all(bind=engine)
        registry = build_registry(SqlRecordService(SessionLocal))
        app.state.widget_registry = registry
        logger.info("related_list.startup database_url=%s", get_settings().database_url)
    yield
    await registry.close_all()


app = FastAPI(title=get_settings().app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(widgets.router, tags=["widgets"])


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check endpoint."""

    return {"status": "ok"}
