from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes.documents import router as documents_router
from app.core.config import settings
from app.core.database import dispose_engine, init_models
from app.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    logger.info("Запуск DocumentSearcher API...")
    await init_models()
    yield
    logger.info("Закрытие соединений с базой данных...")
    await dispose_engine()
    logger.info("DocumentSearcher API остановлен.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API для загрузки документов и интервального/точного поиска по ним",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключение роутеров
app.include_router(documents_router)


@app.get("/")
async def root():
    """Корневой эндпоинт API: версия и параметры поиска по умолчанию"""
    return {
        "message": f"{settings.PROJECT_NAME} API",
        "version": app.version,
        "docs": app.docs_url,
        "allowed_file_types": settings.ALLOWED_FILE_TYPES,
        "search": {
            "max_gap": settings.MAX_SEARCH_GAP,
            "preview_range": settings.PREVIEW_RANGE,
        },
    }


@app.get("/health")
async def health_check():
    """Проверка состояния API"""
    return {"status": "healthy"}
