import os
from pathlib import Path
from dotenv import load_dotenv

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")

SERVICE_NAME = "payment-gateway"

# tokenizer.credential / tokenizer.address
VAULT_TOKEN = os.getenv("VAULT_TOKEN")
VAULT_ADDR = os.getenv("VAULT_ADDR", "http://localhost:8200")
VAULT_TIMEOUT = float(os.getenv("VAULT_TIMEOUT", "5"))

# store.connection
DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_CONNECT_ATTEMPTS = int(os.getenv("DATABASE_CONNECT_ATTEMPTS", "5"))
DATABASE_CONNECT_DELAY = float(os.getenv("DATABASE_CONNECT_DELAY", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
