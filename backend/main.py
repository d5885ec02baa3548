import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import (
    API_PREFIX,
    CLEANUP_HOUR,
    CORS_ORIGINS,
    DAILY_CLEANUP,
    HOST,
    LOG_LEVEL,
    PORT,
    RETENTION_DAYS,
)
from database import StorageUnavailable, log_store
from routers import logs_router, week_router, summary_router, maintenance_router
from services.retention import RetentionManager, RetentionScheduler

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 存储目录不可用时直接启动失败
    log_store.ensure_root()

    scheduler = None
    if DAILY_CLEANUP:
        scheduler = RetentionScheduler(RetentionManager(log_store, RETENTION_DAYS), hour=CLEANUP_HOUR)
        logger.info("Running log cleanup on startup...")
        scheduler.run_now()
        scheduler.start()
    else:
        logger.info("Daily cleanup is disabled")
    app.state.retention_scheduler = scheduler

    logger.info("Logs will be saved to: %s", log_store.root)
    logger.info("Retention policy: keep logs for %d days (today + %d previous days)",
                RETENTION_DAYS, RETENTION_DAYS - 1)
    try:
        yield
    finally:
        if scheduler:
            await scheduler.stop()

app = FastAPI(
    title="Shichi Wellness API",
    description="记录每日身心状态、生成花朵视图和周总结的后端服务",
    version="1.0.0",
    lifespan=lifespan
)

# 配置CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"success": False, "error": "Storage unavailable"})

# 注册路由
app.include_router(logs_router, prefix=API_PREFIX)
app.include_router(week_router, prefix=API_PREFIX)
app.include_router(summary_router, prefix=API_PREFIX)
app.include_router(maintenance_router, prefix=API_PREFIX)

@app.get("/")
async def root():
    return {"message": "Shichi wellness API is running", "version": "1.0.0"}

@app.get("/health")
@app.get(f"{API_PREFIX}/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
