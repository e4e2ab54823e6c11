# config.py
"""
Application settings loaded from the environment.

Values come from the process environment, with a local .env file
loaded first for development.
"""
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Database configuration from environment
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")


def build_database_url() -> str:
     """
     Return DATABASE_URL if set, otherwise an MS SQL Server URL (pymssql)
     assembled from the DB_* variables.
     """
     url = os.getenv("DATABASE_URL")
     if url:
          return url
     safe_user = quote_plus(DB_USER or "")
     safe_pass = quote_plus(DB_PASS or "")
     return f"mssql+pymssql://{safe_user}:{safe_pass}@{DB_SERVER}:{DB_PORT}/{DB_NAME}"


DATABASE_URL = build_database_url()
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Comma-separated list of allowed origins
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

# Billing dates are stored naive in this zone; monthly reports use it too
REPORT_TIMEZONE = os.getenv("REPORT_TIMEZONE", "Asia/Bangkok")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")  # rotating file log when set

PORT = int(os.getenv("PORT", 10000))
