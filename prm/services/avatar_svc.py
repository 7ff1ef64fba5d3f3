"""Avatar service - uploaded avatar URLs and Gravatar lookups."""

from __future__ import annotations

import hashlib
import logging
from pathlib import PurePosixPath

import httpx

from ..config import settings
from ..models.contact import Contact
from ..storage import PublicDisk, default_disk

log = logging.getLogger(__name__)


def get_avatar_url(contact: Contact, size: int, disk: PublicDisk | None = None) -> str | None:
    """Public URL of the ``size`` variant of the uploaded avatar.

    Resized variants live next to each other as ``avatars/<stem>_<size>.<ext>``.
    """
    if not contact.avatar_file_name:
        return None
    disk = disk or default_disk()
    name = PurePosixPath(contact.avatar_file_name)
    return disk.url(f"avatars/{name.stem}_{size}{name.suffix}")


def gravatar_url(email: str) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{settings.gravatar_base_url.rstrip('/')}/{digest}"


async def get_gravatar(
    contact: Contact,
    size: int,
    *,
    client: httpx.AsyncClient | None = None,
) -> str | None:
    """Gravatar URL for the contact's email, or None when there is none.

    Gravatar answers 404 for unknown emails when asked with ``d=404``. Any
    transport error or unexpected status is treated the same way.
    """
    if not contact.email:
        return None

    url = gravatar_url(contact.email)
    owns_client = client is None
    client = client or httpx.AsyncClient(
        timeout=httpx.Timeout(settings.gravatar_timeout_seconds),
    )
    try:
        resp = await client.head(url, params={"d": "404"})
    except httpx.HTTPError as e:
        log.warning("gravatar probe failed for contact %s: %s", contact.id, e)
        return None
    finally:
        if owns_client:
            await client.aclose()

    if resp.status_code == 404:
        return None
    if not resp.is_success:
        log.warning("gravatar probe for contact %s returned %s", contact.id, resp.status_code)
        return None
    return f"{url}?s={size}"
