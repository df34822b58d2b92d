"""Master module - route aggregator for FastAPI."""

from importlib.metadata import entry_points
from typing import Callable, cast

from fastapi import APIRouter

from .common.job_repository import JobRepository
from .common.job_storage import JobStorage
from .common.user import UserLike
from .plugins.image_resize.algo.resize_planner import ResizePlanner
from .plugins.image_resize.routes import create_router as create_image_resize_router

RouteFactory = Callable[
    [JobRepository, JobStorage, Callable[[], UserLike | None]],
    APIRouter,
]

ROUTE_ENTRY_POINT_GROUP = "cl_resize_tools.routes"


def create_master_router(
    repository: JobRepository,
    file_storage: JobStorage,
    get_current_user: Callable[[], UserLike | None],
    planner: ResizePlanner | None = None,
) -> APIRouter:
    """Combine the image resize routes with plugin routes from entry points.

    Example:
        app = FastAPI()
        app.include_router(
            create_master_router(repository, LocalFileStorage("./media"), get_current_user),
            prefix="/api",
        )

    Raises:
        RuntimeError: If a plugin fails to load (missing dependency, etc.)
    """
    master = APIRouter()
    master.include_router(
        create_image_resize_router(repository, file_storage, get_current_user, planner)
    )

    for ep in entry_points(group=ROUTE_ENTRY_POINT_GROUP):
        try:
            create_router = cast(RouteFactory, ep.load())
            master.include_router(create_router(repository, file_storage, get_current_user))
        except Exception as e:
            raise RuntimeError(f"Failed to load plugin '{ep.name}': {e}") from e

    return master


def get_available_plugins() -> list[str]:
    """Names of route plugins registered as entry points."""
    return [ep.name for ep in entry_points(group=ROUTE_ENTRY_POINT_GROUP)]
