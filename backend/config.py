import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# 存储配置
LOGS_DIR = os.getenv("LOGS_DIR", str(Path(__file__).parent / "wellness_logs"))

# 保留策略配置
RETENTION_DAYS = 7  # 今天 + 前6天
DAILY_CLEANUP = os.getenv("DAILY_CLEANUP", "true").lower() != "false"


def _parse_hour(value: str, default: int = 2) -> int:
    try:
        hour = int(value)
    except (TypeError, ValueError):
        return default
    return hour if 0 <= hour <= 23 else default


CLEANUP_HOUR = _parse_hour(os.getenv("CLEANUP_HOUR", "2"))

# 本地模型配置 (Ollama)
OLLAMA_URL = os.getenv("OLLAMA_URL", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "gemma3n:e4b")
OLLAMA_TIMEOUT = float(os.getenv("OLLAMA_TIMEOUT", "60"))

# 服务器配置
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))
API_PREFIX = "/api"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
