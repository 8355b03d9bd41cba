from __future__ import annotations

import datetime as dt
import re

from .constants import BASE64_URI_TRANSLATE

_ESCAPE_RE = re.compile(r"[+/=]")


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def amz_timestamp(moment: dt.datetime) -> str:
    """Format ``moment`` as a basic ISO8601 UTC stamp (``YYYYMMDDThhmmssZ``).

    Naive datetimes are taken to already be in UTC.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(dt.timezone.utc)
    return moment.strftime("%Y%m%dT%H%M%SZ")


def base64_uri_escape(text: str) -> str:
    # AWS ids, secrets and tokens use the base64 alphabet; nothing else is escaped.
    return _ESCAPE_RE.sub(lambda m: BASE64_URI_TRANSLATE[m.group(0)], text.replace("\n", ""))
