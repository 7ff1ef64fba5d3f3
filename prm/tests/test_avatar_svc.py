"""Test avatar URLs and Gravatar probing."""

from __future__ import annotations

import hashlib

import httpx
import pytest

from prm.models.contact import Contact
from prm.services import avatar_svc
from prm.storage import PublicDisk, StorageError

EMAIL = "Jean.Dupont@Example.com "
DIGEST = hashlib.md5(b"jean.dupont@example.com").hexdigest()


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_avatar_url_for_size(tmp_path):
    disk = PublicDisk(tmp_path, "https://cdn.test/storage/")
    contact = Contact(first_name="Jean", has_avatar=True, avatar_file_name="avatars/abc123.jpg")

    assert avatar_svc.get_avatar_url(contact, 110, disk) == (
        "https://cdn.test/storage/avatars/abc123_110.jpg"
    )


def test_avatar_url_without_file(tmp_path):
    disk = PublicDisk(tmp_path, "https://cdn.test/storage")
    assert avatar_svc.get_avatar_url(Contact(first_name="Jean"), 110, disk) is None


def test_public_disk_rejects_escaping_paths(tmp_path):
    disk = PublicDisk(tmp_path, "/storage")
    with pytest.raises(StorageError):
        disk.url("../secrets.txt")
    with pytest.raises(StorageError):
        disk.path_for("")

    (tmp_path / "avatars").mkdir()
    (tmp_path / "avatars" / "a.png").write_bytes(b"png")
    assert disk.exists("/avatars/a.png")
    assert disk.url("avatars/my photo.png") == "/storage/avatars/my%20photo.png"


def test_gravatar_url_hashes_normalized_email():
    assert avatar_svc.gravatar_url(EMAIL).endswith("/" + DIGEST)


@pytest.mark.asyncio
async def test_get_gravatar_found():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    async with _client(handler) as client:
        url = await avatar_svc.get_gravatar(Contact(first_name="Jean", email=EMAIL), 200, client=client)

    assert url.endswith(f"/{DIGEST}?s=200")
    assert seen[0].method == "HEAD"
    assert seen[0].url.params["d"] == "404"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 500])
async def test_get_gravatar_missing_or_failing(status):
    async with _client(lambda request: httpx.Response(status)) as client:
        contact = Contact(first_name="Jean", email=EMAIL)
        assert await avatar_svc.get_gravatar(contact, 200, client=client) is None


@pytest.mark.asyncio
async def test_get_gravatar_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    async with _client(handler) as client:
        contact = Contact(first_name="Jean", email=EMAIL)
        assert await avatar_svc.get_gravatar(contact, 200, client=client) is None


@pytest.mark.asyncio
async def test_get_gravatar_without_email():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with _client(handler) as client:
        assert await avatar_svc.get_gravatar(Contact(first_name="Jean"), 200, client=client) is None
