"""
Registration, login, /api/me and profile updates over HTTP
"""
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from core.config import settings
from core.security import security_manager, ROLE_USER
from main import app
from tests.helpers import admin_token, bearer, login, register_user, registration_form

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_detailed_health(client):
    response = await client.get("/api/health/detailed")

    assert response.status_code == 200
    body = response.json()
    assert body["services"]["database"]["status"] == "ok"
    assert "timestamp" in body


class TestRegistration:

    @pytest.mark.asyncio
    async def test_register_without_files(self, client, media):
        response = await client.post("/api/register", data=registration_form())

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Registration successful. Identity verification in progress."
        assert isinstance(body["userId"], int)
        assert media.uploads == []

    @pytest.mark.asyncio
    async def test_register_uploads_present_artifacts_only(self, client, media):
        files = {
            "idFront": ("front.png", PNG, "image/png"),
            "selfie": ("me.png", PNG, "image/png"),
        }
        await register_user(client, files=files)
        token = await login(client, "alice@example.com", "correct horse")

        user = (await client.get("/api/me", headers=bearer(token))).json()["user"]
        assert user["idFrontUrl"].startswith("https://res.cloudinary.com/")
        assert "idFront_" in user["idFrontUrl"]
        assert user["idBackUrl"] == ""
        assert user["selfieUrl"].startswith("https://res.cloudinary.com/")
        assert [name.split("_")[0] for name, _, _ in media.uploads] == ["idFront", "selfie"]
        assert all(folder == "ann_investments/ids" for _, folder, _ in media.uploads)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["firstName", "lastName", "email", "phone", "dob", "password"])
    async def test_missing_required_field(self, client, missing):
        form = registration_form()
        form.pop(missing)

        response = await client.post("/api/register", data=form)

        assert response.status_code == 400
        assert response.json() == {"message": "Missing required fields"}

    @pytest.mark.asyncio
    async def test_blank_required_field_counts_as_missing(self, client):
        response = await client.post("/api/register", data=registration_form(phone=""))

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client, media):
        first_id = await register_user(client)

        files = {"idFront": ("front.png", PNG, "image/png")}
        response = await client.post(
            "/api/register",
            data=registration_form(firstName="Mallory"),
            files=files
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Email already registered"}
        assert media.uploads == []

        token = await login(client, "alice@example.com", "correct horse")
        user = (await client.get("/api/me", headers=bearer(token))).json()["user"]
        assert user["id"] == first_id
        assert user["firstName"] == "Alice"

    @pytest.mark.asyncio
    async def test_non_image_upload_rejected(self, client, media):
        files = {"idBack": ("notes.txt", b"hello", "text/plain")}
        response = await client.post("/api/register", data=registration_form(), files=files)

        assert response.status_code == 400
        assert media.uploads == []

    @pytest.mark.asyncio
    async def test_oversized_upload_rejected_before_upload(self, client, media, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", len(PNG) - 1)
        files = {"idFront": ("front.png", PNG, "image/png")}

        response = await client.post("/api/register", data=registration_form(), files=files)

        assert response.status_code == 400
        assert response.json() == {"message": "idFront exceeds the maximum upload size"}
        assert media.uploads == []

    @pytest.mark.asyncio
    async def test_upload_at_size_limit_accepted(self, client, media, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", len(PNG))
        files = {"idFront": ("front.png", PNG, "image/png")}

        response = await client.post("/api/register", data=registration_form(), files=files)

        assert response.status_code == 200
        assert media.uploads[0][2] == len(PNG)

    @pytest.mark.asyncio
    async def test_upload_failure_is_500_and_creates_nothing(self, client, media):
        media.fail = True
        files = {"idFront": ("front.png", PNG, "image/png")}

        response = await client.post("/api/register", data=registration_form(), files=files)

        assert response.status_code == 500
        assert response.json() == {"message": "Upload failed"}

        response = await client.post("/api/login", json={"email": "alice@example.com", "password": "correct horse"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_password_is_not_returned(self, client):
        await register_user(client)
        response = await client.post("/api/login", json={"email": "alice@example.com", "password": "correct horse"})

        user = response.json()["user"]
        assert "password" not in user
        assert "hashedPassword" not in user


class TestLogin:

    @pytest.mark.asyncio
    async def test_user_login(self, client):
        await register_user(client)

        response = await client.post("/api/login", json={"email": "alice@example.com", "password": "correct horse"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["role"] == "user"
        assert body["user"]["email"] == "alice@example.com"
        assert body["user"]["balance"] == 0
        assert body["user"]["transactions"] == []
        claims = security_manager.verify_access_token(body["token"])
        assert claims.role == ROLE_USER
        assert claims.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_admin_login(self, client):
        token = await admin_token(client)

        claims = security_manager.verify_access_token(token)
        assert claims.is_admin
        assert claims.email == "ops@example.com"

    @pytest.mark.asyncio
    async def test_wrong_password(self, client):
        await register_user(client)

        response = await client.post("/api/login", json={"email": "alice@example.com", "password": "nope"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_unknown_email(self, client):
        response = await client.post("/api/login", json={"email": "ghost@example.com", "password": "x"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid credentials"}

    @pytest.mark.asyncio
    async def test_missing_fields(self, client):
        response = await client.post("/api/login", json={"email": "alice@example.com"})

        assert response.status_code == 400
        assert response.json() == {"message": "Missing required fields"}


class TestProfile:

    @pytest.mark.asyncio
    async def test_me_with_login_token(self, client):
        user_id = await register_user(client)
        token = await login(client, "alice@example.com", "correct horse")

        response = await client.get("/api/me", headers=bearer(token))

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == user_id
        assert user["verified"] is False
        assert user["frozen"] is False
        assert "createdAt" in user

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client):
        response = await client.get("/api/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["Token abc", "bearer abc", "Bearer", "Bearer ", "Bearer a b"])
    async def test_malformed_authorization_header(self, client, header):
        response = await client.get("/api/me", headers={"Authorization": header})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_bearer_scheme_published_in_openapi(self, client):
        schema = (await client.get("/openapi.json")).json()

        schemes = schema["components"]["securitySchemes"]
        assert {"type": "http", "scheme": "bearer"}.items() <= schemes["HTTPBearer"].items()

    @pytest.mark.asyncio
    async def test_expired_token(self, client):
        user_id = await register_user(client)
        token = security_manager.create_access_token(
            str(user_id), "alice@example.com", ROLE_USER, expires_delta=timedelta(seconds=-5)
        )

        response = await client.get("/api/me", headers=bearer(token))

        assert response.status_code == 401
        assert response.json() == {"message": "Token has expired"}

    @pytest.mark.asyncio
    async def test_tampered_token(self, client):
        await register_user(client)
        token = await login(client, "alice@example.com", "correct horse")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        response = await client.get("/api/me", headers=bearer(tampered))

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_for_deleted_user(self, client):
        token = security_manager.create_access_token("999", "ghost@example.com", ROLE_USER)

        response = await client.get("/api/me", headers=bearer(token))

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    @pytest.mark.asyncio
    async def test_me_for_admin(self, client):
        token = await admin_token(client)

        response = await client.get("/api/me", headers=bearer(token))

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"
        assert response.json()["user"]["email"] == "ops@example.com"

    @pytest.mark.asyncio
    async def test_update_profile(self, client):
        await register_user(client)
        token = await login(client, "alice@example.com", "correct horse")

        response = await client.put(
            "/api/update-profile",
            headers=bearer(token),
            json={"city": "Lisbon", "zip": "1100", "balance": 1000000, "verified": True}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["user"]["city"] == "Lisbon"
        assert body["user"]["zip"] == "1100"
        assert body["user"]["balance"] == 0
        assert body["user"]["verified"] is False

    @pytest.mark.asyncio
    async def test_update_password(self, client):
        await register_user(client)
        token = await login(client, "alice@example.com", "correct horse")

        response = await client.put("/api/update-profile", headers=bearer(token), json={"password": "new-pass"})
        assert response.status_code == 200

        assert await login(client, "alice@example.com", "new-pass")
        response = await client.post("/api/login", json={"email": "alice@example.com", "password": "correct horse"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_profile_requires_token(self, client):
        response = await client.put("/api/update-profile", json={"city": "Lisbon"})

        assert response.status_code == 401


@pytest.mark.asyncio
async def test_unexpected_error_is_json_500(client, media, monkeypatch):
    async def explode(*args, **kwargs):
        raise RuntimeError("storage client crashed")

    monkeypatch.setattr(media, "upload", explode)
    files = {"idFront": ("front.png", PNG, "image/png")}

    # Starlette re-raises after the handler responds; keep the response instead
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as raw_client:
        response = await raw_client.post("/api/register", data=registration_form(), files=files)

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
