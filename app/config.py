import os

SECRET_KEY = os.environ.get("SECRET_KEY", "TU_SECRET_KEY_TEMPORAL")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./taskmaster.db")

# Label suggestions. Set ENABLE_OPENAI=false to switch them off (e.g. when out of quota)
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "")
ENABLE_OPENAI = os.environ.get("ENABLE_OPENAI", "true").strip().lower() != "false"
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TIMEOUT_SECONDS = float(os.environ.get("OPENAI_TIMEOUT_SECONDS", 10))
LABEL_TEMPERATURE = float(os.environ.get("LABEL_TEMPERATURE", 0.3))
LABEL_MAX_TOKENS = int(os.environ.get("LABEL_MAX_TOKENS", 16))

# /ai/chat defaults
CHAT_TEMPERATURE = float(os.environ.get("CHAT_TEMPERATURE", 0.7))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
