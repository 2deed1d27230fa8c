import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./sales.db")

# CORS - comma separated list, "*" allows every origin
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

# Default revisit interval (days) for customers created without one
DEFAULT_VISIT_FREQUENCY = int(os.getenv("DEFAULT_VISIT_FREQUENCY", "30"))

# In-process visit scheduler (checks the clock every tick, fires once per day)
VISIT_SCHEDULER_ENABLED = os.getenv("VISIT_SCHEDULER_ENABLED", "true").lower() == "true"
VISIT_SCHEDULER_INTERVAL_SECONDS = int(os.getenv("VISIT_SCHEDULER_INTERVAL_SECONDS", "60"))

# Local wall-clock time at which the daily visit rollover fires
VISIT_ROLLOVER_HOUR = int(os.getenv("VISIT_ROLLOVER_HOUR", "0"))
VISIT_ROLLOVER_MINUTE = int(os.getenv("VISIT_ROLLOVER_MINUTE", "0"))

# Redis for the ARQ worker (only needed when running `arq app.worker.WorkerSettings`)
REDIS_URL = os.getenv("REDIS_URL")
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"

# Connection pool sizing (ignored for SQLite)
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "20"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "30"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))

# Queries slower than the threshold (seconds) are logged as warnings
DB_LOG_SLOW_QUERIES = os.getenv("DB_LOG_SLOW_QUERIES", "true").lower() == "true"
DB_SLOW_QUERY_THRESHOLD = float(os.getenv("DB_SLOW_QUERY_THRESHOLD", "1.0"))
