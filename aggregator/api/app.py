"""
策略聚合系统 — FastAPI 应用

聚合器状态查询接口。
"""

from contextlib import asynccontextmanager

# 加载环境变量（必须在读取配置之前）
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from aggregator.common.config import get_settings
from aggregator.common.logging import configure_logging, get_logger
from aggregator.common.utils import utc_now

from .routes import aggregator_router

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    settings = get_settings()
    configure_logging(settings.logging.level, settings.logging.use_json)
    logger.info("API 服务启动", extra={"env": settings.env})

    _init_engine()
    yield
    logger.info("API 服务关闭")


def _init_engine() -> None:
    """独立运行时按配置创建聚合引擎；宿主已注入时跳过"""
    from . import dependencies
    from aggregator.strategy import AggregatorEngine, ServiceContainer

    if dependencies._engine is not None:
        return

    engine = AggregatorEngine(get_settings(), ServiceContainer())
    engine.setup()
    dependencies.init_services(engine)


def create_app() -> FastAPI:
    """
    创建 FastAPI 应用

    Returns:
        配置好的 FastAPI 实例
    """
    app = FastAPI(
        title="策略聚合系统 API",
        description="多策略加权投票聚合器的状态接口",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # 注册异常处理器
    register_exception_handlers(app)

    # 注册路由
    app.include_router(aggregator_router, prefix=API_PREFIX)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """HTTP 异常处理"""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "data": None,
                "error": exc.detail if isinstance(exc.detail, dict) else {
                    "code": "HTTP_ERROR",
                    "message": str(exc.detail),
                },
                "timestamp": utc_now().isoformat(),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """通用异常处理"""
        logger.error(f"未处理的异常: {exc}", exc_info=True)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "data": None,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "服务器内部错误",
                },
                "timestamp": utc_now().isoformat(),
            },
        )


app = create_app()
