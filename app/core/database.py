from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from app.core.config import settings

Base = declarative_base()

# Создаются при первом обращении, чтобы импорт модуля не открывал соединений
_engine = None
_async_session_maker = None


def _engine_options(database_url: str) -> dict:
    """Параметры пула зависят от драйвера: у SQLite пула соединений нет"""
    url = make_url(database_url)
    options = {"echo": settings.DEBUG}
    if url.get_backend_name() == "sqlite":
        return options

    options.update(
        pool_pre_ping=True,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_POOL_SIZE * 2,
        pool_recycle=3600,
    )
    if url.get_driver_name() == "asyncpg":
        options["connect_args"] = {
            "server_settings": {"application_name": settings.PROJECT_NAME}
        }
    return options


def get_engine() -> AsyncEngine:
    """Асинхронный движок БД"""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL)
        )
    return _engine


def get_async_session_maker() -> async_sessionmaker:
    """Фабрика асинхронных сессий"""
    global _async_session_maker
    if _async_session_maker is None:
        _async_session_maker = async_sessionmaker(
            bind=get_engine(), class_=AsyncSession, expire_on_commit=False
        )
    return _async_session_maker


async def init_models() -> None:
    """Создает таблицы документов, если их еще нет"""
    import app.models.document  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Закрывает пул соединений; следующий запрос создаст движок заново"""
    global _engine, _async_session_maker
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_maker = None


async def get_async_session() -> AsyncSession:
    """
    Dependency для получения сессии БД на время запроса.
    При ошибке транзакция откатывается.
    """
    async with get_async_session_maker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
