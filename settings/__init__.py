"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("PARL_DB_PATH", "parliament.duckdb")

# Logging
LOG_DIR = Path(os.getenv("PARL_LOG_DIR", "logs"))

# API
API_BASE_URL = os.getenv("OPENPARLIAMENT_BASE_URL", "https://api.openparliament.ca")
COMMONS_VOTES_URL = os.getenv("COMMONS_VOTES_URL", "https://www.ourcommons.ca/Members/en/votes/xml")
API_TIMEOUT = float(os.getenv("PARL_API_TIMEOUT", "30"))
USER_AGENT = os.getenv("PARL_USER_AGENT", "commons-tracker/0.1 (+https://openparliament.ca/api/)")

# Rate limiting
MAX_CONCURRENT = 5
REQUEST_DELAY = float(os.getenv("PARL_REQUEST_DELAY", "0.25"))
BATCH_SIZE = 10
BILL_BATCH_SIZE = 50
BATCH_DELAY = float(os.getenv("PARL_BATCH_DELAY", "0.5"))

# Retry
MAX_RATE_LIMIT_RETRIES = 3
MAX_TIMEOUT_RETRIES = 3
RETRY_BASE_DELAY = 2.0
RETRY_MAX_DELAY = 60.0

# Fetch bounds
PAGE_SIZE = 100
MAX_BALLOTS_PER_LEGISLATOR = 500
MAX_VOTES_PER_BILL = 50
MAX_BALLOTS_PER_VOTE = 400
MAX_BILLS_PER_SYNC = 1000

# Cache TTLs (hours)
BALLOT_LIST_TTL_HOURS = 12
BILL_DETAIL_TTL_HOURS = 24
VOTE_DETAIL_TTL_HOURS = 168
MEMBERSHIP_TTL_HOURS = 336
LOYALTY_TTL_HOURS = 24
