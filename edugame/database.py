import weakref
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker


Base = declarative_base()

_schema_lock = Lock()
_checked_engines: "weakref.WeakSet[Engine]" = weakref.WeakSet()


def build_engine(database_url: str) -> Engine:
    engine_kwargs = {}
    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(database_url, **engine_kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def ensure_game_result_schema(engine: Engine) -> None:
    if engine in _checked_engines:
        return

    with _schema_lock:
        if engine in _checked_engines:
            return

        inspector = inspect(engine)
        table_names = inspector.get_table_names()

        with engine.begin() as connection:
            if 'game_results' in table_names:
                connection.execute(
                    text('CREATE INDEX IF NOT EXISTS idx_game_results_student_game ON game_results(student_id, game_name)')
                )

        _checked_engines.add(engine)
