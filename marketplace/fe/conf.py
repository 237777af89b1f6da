from datetime import datetime, timezone

# Fixed clock for deadline tests
NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)

ALLOWED_ORIGIN = "https://market.example"
PUBLIC_SITE_URL = "https://market.example"
