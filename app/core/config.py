import os

def get_secret(secret_name: str) -> str | None:
    secret_path = f'/run/secrets/{secret_name}'
    try:
        with open(secret_path, 'r', encoding='utf-8') as secret_file:
            return secret_file.read().strip()
    except IOError:
        return os.getenv(secret_name)


DB_PASSWORD = get_secret('db_password')
SECRET_KEY = get_secret('secret_key') or "dev_secret_change_me"

POSTGRES_DB = os.getenv("POSTGRES_DB")
POSTGRES_USER = os.getenv("POSTGRES_USER")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
REDIS_URL = os.getenv("REDIS_URL")

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    if POSTGRES_USER and DB_PASSWORD and POSTGRES_DB:
        DATABASE_URL = f"postgresql+asyncpg://{POSTGRES_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{POSTGRES_DB}"
    else:
        raise ValueError("Can't build DATABASE_URL")

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 12 * 60
JWT_ISSUER = "billing-api"
JWT_AUDIENCE = "billing-web"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
REPORTING_TZ = os.getenv("REPORTING_TZ", "Asia/Kolkata")

INVOICE_SEQUENCE_KEY = "invoiceNumber"
INVOICE_NUMBER_BASE = 1000

MAX_BODY_BYTES = 1024 * 1024
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "2000"))
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
CORS_ORIGINS = list(dict.fromkeys(["http://localhost:3000", "http://localhost:3002", FRONTEND_URL]))

ACCESS_CODE_SEED = get_secret("ACCESS_CODE_SEED")

DOCUMENT_TITLE = os.getenv("DOCUMENT_TITLE", "SAND COMPANY INVOICE")
ISSUER_NAME = os.getenv("ISSUER_NAME", "Sand Delivery Services")
ISSUER_TAGLINE = os.getenv("ISSUER_TAGLINE", "Professional Sand Supply Solutions")
ISSUER_PHONE = os.getenv("ISSUER_PHONE", "+91 98765 43210")
ISSUER_GST = os.getenv("ISSUER_GST", "22AAAAA0000A1Z5")
SYSTEM_NAME = os.getenv("SYSTEM_NAME", "Sand Company Billing System")
GST_RATE = "0.18"
