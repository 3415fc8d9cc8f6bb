import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from edugame.core.config import Settings, validate_runtime_config
from edugame.core.errors import install_error_handlers
from edugame.database import Base, build_engine, build_session_factory, ensure_game_result_schema
from edugame.models import game_result, student
from edugame.routes import auth_routes, game_routes

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    validate_runtime_config(settings)

    logging.basicConfig(level=settings.log_level)

    engine = engine or build_engine(settings.database_url)

    app = FastAPI(title='Edugame API')
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=['GET', 'POST', 'PUT', 'DELETE'],
        allow_headers=['Content-Type', 'Authorization'],
    )

    install_error_handlers(app, include_details=not settings.is_production)

    @app.on_event('startup')
    def initialize_database() -> None:
        try:
            Base.metadata.create_all(
                bind=engine,
                tables=[student.Student.__table__, game_result.GameResult.__table__],
            )
            ensure_game_result_schema(engine)
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')

    @app.get('/')
    def root():
        return {'status': 'Edugame API Running'}

    app.include_router(auth_routes.router)
    app.include_router(game_routes.router)

    return app


app = create_app()
