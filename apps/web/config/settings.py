"""
Settings for the Foodly ordering client.

Values come from the environment (or a .env file next to the project root)
so the same build can point at staging or production backends.
Run with: API_BASE_URL=https://... python scripts/check_orders.py
"""

from decimal import Decimal
from pathlib import Path

import environ  # type: ignore[import-untyped]

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    API_BASE_URL=(str, "https://foodly-backend-uv7m.onrender.com"),
    HTTP_TIMEOUT=(float, 30.0),
    ORDER_POLL_INTERVAL=(float, 5.0),
    ORDER_TRACK_INTERVAL=(float, 5.0),
    REVIEW_POLL_INTERVAL=(float, 10.0),
    CHAT_POLL_INTERVAL=(float, 3.0),
    SUPPORT_INBOX_POLL_INTERVAL=(float, 30.0),
    REVIEW_GATE_PATH=(str, str(Path.home() / ".foodly" / "review_gate.json")),
)

_env_file = BASE_DIR.parent.parent / ".env"
if _env_file.exists():
    environ.Env.read_env(str(_env_file))

# Backend
API_BASE_URL = env("API_BASE_URL").rstrip("/")
HTTP_TIMEOUT = env("HTTP_TIMEOUT")

# Polling intervals (seconds)
ORDER_POLL_INTERVAL = env("ORDER_POLL_INTERVAL")
ORDER_TRACK_INTERVAL = env("ORDER_TRACK_INTERVAL")
REVIEW_POLL_INTERVAL = env("REVIEW_POLL_INTERVAL")
CHAT_POLL_INTERVAL = env("CHAT_POLL_INTERVAL")
SUPPORT_INBOX_POLL_INTERVAL = env("SUPPORT_INBOX_POLL_INTERVAL")

# Checkout pricing - fixed business rules, not user-configurable
COUPON_DISCOUNT_RATE = Decimal("0.10")
COUPON_DISCOUNT_CAP = Decimal("50.00")
DELIVERY_FEE = Decimal("5.00")

# Where the review gate remembers which orders already prompted
REVIEW_GATE_PATH = Path(env("REVIEW_GATE_PATH"))
