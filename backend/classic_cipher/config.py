import os

# Service settings, overridable through the environment
HISTORY_LIMIT = int(os.getenv("CIPHER_HISTORY_LIMIT", "20"))
MAX_UPLOAD_MB = int(os.getenv("CIPHER_MAX_UPLOAD_MB", "5"))
MAX_CONCURRENT_FILE_OPS = int(os.getenv("CIPHER_MAX_CONCURRENT_FILE_OPS", "2"))
THREAD_WORKERS = int(os.getenv("CIPHER_THREAD_WORKERS", "4"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CIPHER_CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("CIPHER_LOG_LEVEL", "INFO").upper()
