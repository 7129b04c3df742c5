"""
Test helpers: fake image storage and request shortcuts.
"""
from typing import List, Optional, Tuple

from httpx import AsyncClient

from core.exceptions import UploadFailedError


class FakeMediaStorage:
    """Records uploads instead of calling Cloudinary"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: List[Tuple[str, str, int]] = []

    @property
    def is_configured(self) -> bool:
        return True

    async def upload(self, buffer: bytes, logical_name: str, folder: Optional[str] = None) -> str:
        if self.fail:
            raise UploadFailedError("Upload failed")
        self.uploads.append((logical_name, folder, len(buffer)))
        return f"https://res.cloudinary.com/demo/image/upload/{folder}/{logical_name}.jpg"


def registration_form(email: str = "alice@example.com", **overrides) -> dict:
    form = {
        "firstName": "Alice",
        "lastName": "Smith",
        "email": email,
        "phone": "+1 555 0100",
        "dob": "1990-04-12",
        "password": "correct horse",
    }
    form.update(overrides)
    return form


async def register_user(client: AsyncClient, email: str = "alice@example.com", files=None, **overrides) -> int:
    response = await client.post("/api/register", data=registration_form(email, **overrides), files=files)
    assert response.status_code == 200, response.text
    return response.json()["userId"]


async def login(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


async def admin_token(client: AsyncClient, email: str = "ops@example.com", password: str = "admin-pass") -> str:
    response = await client.post("/api/admin/create", json={
        "firstName": "Olive",
        "lastName": "Ops",
        "email": email,
        "password": password,
    })
    assert response.status_code == 200, response.text
    return await login(client, email, password)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
