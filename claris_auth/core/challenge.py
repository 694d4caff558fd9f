# PASSWORD_VERIFIER claim: timestamp string + HMAC signature
import base64
from datetime import datetime, timezone
from typing import Optional

from claris_auth.core.hashing import hmac_sha256

# fixed English tables; Cognito parses the timestamp with this exact format
DAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def get_date_string(now: Optional[datetime] = None) -> str:
    """Format as "Thu Jan 1 00:00:00 UTC 2026" (day of month unpadded). now must be timezone-aware."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("get_date_string needs a timezone-aware datetime")
    now = now.astimezone(timezone.utc)
    return (
        f"{DAYS[now.isoweekday() % 7]} {MONTHS[now.month - 1]} {now.day} "
        f"{now.hour:02d}:{now.minute:02d}:{now.second:02d} UTC {now.year}"
    )


def compute_claim_signature(
    signing_key: bytes,
    pool_name: str,
    user_id_for_srp: str,
    secret_block: str,
    timestamp: str,
) -> str:
    message = b"".join([
        pool_name.encode("utf-8"),
        user_id_for_srp.encode("utf-8"),
        base64.b64decode(secret_block),
        timestamp.encode("utf-8"),
    ])
    return base64.b64encode(hmac_sha256(signing_key, message)).decode("ascii")
