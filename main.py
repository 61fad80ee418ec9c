import sys
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from quizzy.config import settings
from quizzy.infrastructure.db.session import Base, engine
from quizzy.infrastructure.db import models  # noqa: F401  registers tables
from quizzy.presentation.api.routers.quiz_router import router as quiz_router
from quizzy.presentation.api.routers.results_router import router as results_router
from quizzy.presentation.api.routers.analytics_router import router as analytics_router
from quizzy.presentation.api.routers.goal_router import router as goal_router
from quizzy.presentation.api.routers.admin_router import router as admin_router

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


def create_app(create_tables: bool = True) -> FastAPI:
    if create_tables:
        Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Quizzy API")

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "An internal server error occurred."}
        )

    # Include routers
    app.include_router(quiz_router)
    app.include_router(results_router)
    app.include_router(analytics_router)
    app.include_router(goal_router)
    app.include_router(admin_router)

    @app.get("/")
    def root():
        return {"message": "Welcome to Quizzy API"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
