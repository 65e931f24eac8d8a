from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripplanner.api import routes_activities, routes_health, routes_trips
from tripplanner.core.config import settings
from tripplanner.core.logging import configure_logging
from tripplanner.storage.repository import InMemoryRepository
from tripplanner.storage.seed import seed_demo_data


def create_app(repository: InMemoryRepository | None = None) -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if repository is None:
        repository = InMemoryRepository()
        if settings.seed_demo_data:
            seed_demo_data(repository)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_activities.router, prefix="/activities", tags=["activities"])
    app.include_router(routes_trips.router, prefix="/trips", tags=["itinerary"])

    # Inject repository into state for dependencies
    app.state.repository = repository
    app.state.settings = settings
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
