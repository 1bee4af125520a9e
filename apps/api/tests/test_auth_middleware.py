"""Authentication dependency and adapter tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import os
import unittest

from fastapi import Request
from fastapi.testclient import TestClient
import jwt

from devcamper.adapters.auth import AuthVerificationError, JwtTokenVerifier, MockTokenVerifier
from devcamper.core.config import Settings, get_settings
from devcamper.main import create_app
from devcamper.routes.dependencies import get_bootcamp_service, get_token_verifier
from devcamper.schemas.auth import Role
from devcamper.schemas.envelope import PagedEnvelope

_SECRET = "test-jwt-secret-0123456789abcdef0123"


def _jwt(claims: dict, *, secret: str = _SECRET, expires_in: timedelta = timedelta(hours=1)) -> str:
    payload = {"exp": datetime.now(UTC) + expires_in, **claims}
    return jwt.encode(payload, secret, algorithm="HS256")


class _CapturingBootcampService:
    def __init__(self) -> None:
        self.principals: list = []

    def delete_bootcamp(self, *, principal, bootcamp_id: str) -> None:
        self.principals.append((principal, bootcamp_id))

    def list_bootcamps(self, *, query) -> PagedEnvelope:
        return PagedEnvelope(count=0, pagination={}, data=[])


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "DEVCAMPER_AUTH_PROVIDER",
        "DEVCAMPER_JWT_SECRET",
        "DEVCAMPER_STORE_BACKEND",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["DEVCAMPER_AUTH_PROVIDER"] = "mock"
        os.environ["DEVCAMPER_JWT_SECRET"] = _SECRET
        os.environ["DEVCAMPER_STORE_BACKEND"] = "memory"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class AuthApiTests(_SettingsEnvCase):
    def test_openapi_lists_resource_paths(self) -> None:
        client = TestClient(create_app())

        response = client.get("/openapi.json")
        self.assertEqual(response.status_code, 200)
        paths = response.json()["paths"]

        for path in (
            "/api/v1/bootcamps",
            "/api/v1/bootcamps/{bootcampId}",
            "/api/v1/bootcamps/radius/{zipcode}/{distance}",
            "/api/v1/bootcamps/{bootcampId}/photo",
            "/api/v1/bootcamps/{bootcampId}/courses",
            "/api/v1/bootcamps/{bootcampId}/reviews",
            "/api/v1/courses/{courseId}",
            "/api/v1/reviews/{reviewId}",
            "/api/v1/users/{userId}",
            "/api/v1/health",
        ):
            self.assertIn(path, paths)
        self.assertIn("403", paths["/api/v1/bootcamps/{bootcampId}"]["put"]["responses"])

    def test_missing_authorization_header_returns_401_without_side_effects(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.delete("/api/v1/bootcamps/any-id")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Not authorized to access this route", "code": "UNAUTHORIZED"},
        )
        self.assertEqual(app.state.store.bootcamps.write_count, 0)

    def test_invalid_bearer_token_returns_401(self) -> None:
        client = TestClient(create_app())

        for token in ("not-a-valid-token", "test:", "test:user-1:superuser"):
            with self.subTest(token=token):
                response = client.delete("/api/v1/bootcamps/any-id", headers={"Authorization": f"Bearer {token}"})

                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json()["code"], "UNAUTHORIZED")

    def test_valid_bearer_token_resolves_principal_for_downstream_handler(self) -> None:
        app = create_app()
        capturing_service = _CapturingBootcampService()
        app.dependency_overrides[get_bootcamp_service] = lambda: capturing_service
        client = TestClient(app)

        response = client.delete("/api/v1/bootcamps/b-1", headers={"Authorization": "Bearer test:user-123:publisher"})

        self.assertEqual(response.status_code, 200)
        principal, bootcamp_id = capturing_service.principals[0]
        self.assertEqual(principal.user_id, "user-123")
        self.assertEqual(principal.role, Role.PUBLISHER)
        self.assertEqual(bootcamp_id, "b-1")

    def test_token_cookie_is_accepted_when_header_is_absent(self) -> None:
        app = create_app()
        capturing_service = _CapturingBootcampService()
        app.dependency_overrides[get_bootcamp_service] = lambda: capturing_service
        client = TestClient(app, cookies={"token": "test:cookie-user"})

        response = client.delete("/api/v1/bootcamps/b-1")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(capturing_service.principals[0][0].user_id, "cookie-user")
        self.assertEqual(capturing_service.principals[0][0].role, Role.USER)

    def test_auth_principal_is_attached_to_request_state(self) -> None:
        app = create_app()
        capturing_service = _CapturingBootcampService()
        observed: dict[str, str] = {}

        def _override(request: Request) -> _CapturingBootcampService:
            observed["user_id"] = request.state.auth_principal.user_id
            return capturing_service

        app.dependency_overrides[get_bootcamp_service] = _override
        client = TestClient(app)

        response = client.delete("/api/v1/bootcamps/b-1", headers={"Authorization": "Bearer test:user-state"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(observed.get("user_id"), "user-state")

    def test_public_reads_need_no_token(self) -> None:
        client = TestClient(create_app())

        response = client.get("/api/v1/bootcamps")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "count": 0, "pagination": {}, "data": []})

    def test_jwt_provider_accepts_signed_tokens(self) -> None:
        os.environ["DEVCAMPER_AUTH_PROVIDER"] = "jwt"
        get_settings.cache_clear()
        app = create_app()
        capturing_service = _CapturingBootcampService()
        app.dependency_overrides[get_bootcamp_service] = lambda: capturing_service
        client = TestClient(app)

        accepted = client.delete(
            "/api/v1/bootcamps/b-1",
            headers={"Authorization": f"Bearer {_jwt({'id': 'jwt-user', 'role': 'admin'})}"},
        )
        rejected = client.delete("/api/v1/bootcamps/b-1", headers={"Authorization": "Bearer test:user-1"})

        self.assertEqual(accepted.status_code, 200)
        self.assertEqual(capturing_service.principals[0][0].role, Role.ADMIN)
        self.assertEqual(rejected.status_code, 401)

    def test_correlation_id_is_echoed(self) -> None:
        client = TestClient(create_app())

        supplied = client.get("/api/v1/bootcamps", headers={"X-Correlation-Id": "corr-1"})
        generated = client.get("/api/v1/bootcamps")

        self.assertEqual(supplied.headers["X-Correlation-Id"], "corr-1")
        self.assertTrue(generated.headers["X-Correlation-Id"].startswith("req-"))


class AuthAdapterUnitTests(unittest.TestCase):
    def test_mock_token_verifier_normalizes_principal(self) -> None:
        verifier = MockTokenVerifier()

        principal = verifier.verify_token("test:user-999:admin")

        self.assertEqual(principal.user_id, "user-999")
        self.assertEqual(principal.role, Role.ADMIN)
        self.assertEqual(verifier.verify_token("test:user-1").role, Role.USER)

    def test_mock_token_verifier_rejects_invalid_token(self) -> None:
        verifier = MockTokenVerifier()

        for token in ("invalid", "test:", "test:user-1:root", "other:user-1"):
            with self.subTest(token=token):
                with self.assertRaises(AuthVerificationError):
                    verifier.verify_token(token)

    def test_dependency_selects_verifier_from_settings(self) -> None:
        jwt_settings = Settings(auth_provider="jwt", jwt_secret=_SECRET)
        mock_settings = Settings(auth_provider="mock")

        self.assertIsInstance(get_token_verifier(jwt_settings), JwtTokenVerifier)
        self.assertIsInstance(get_token_verifier(mock_settings), MockTokenVerifier)


class JwtVerifierUnitTests(unittest.TestCase):
    def test_reads_id_or_sub_and_role_claims(self) -> None:
        verifier = JwtTokenVerifier(secret=_SECRET)

        by_id = verifier.verify_token(_jwt({"id": "u-1", "role": "publisher"}))
        by_sub = verifier.verify_token(_jwt({"sub": "u-2"}))

        self.assertEqual((by_id.user_id, by_id.role), ("u-1", Role.PUBLISHER))
        self.assertEqual((by_sub.user_id, by_sub.role), ("u-2", Role.USER))

    def test_rejects_bad_signature_expiry_and_missing_claims(self) -> None:
        verifier = JwtTokenVerifier(secret=_SECRET)
        no_exp = jwt.encode({"id": "u-1"}, _SECRET, algorithm="HS256")

        for token in (
            _jwt({"id": "u-1"}, secret="another-secret-value-0123456789abcdef"),
            _jwt({"id": "u-1"}, expires_in=timedelta(seconds=-30)),
            _jwt({"role": "user"}),
            _jwt({"id": "u-1", "role": "root"}),
            no_exp,
        ):
            with self.subTest(token=token):
                with self.assertRaises(AuthVerificationError):
                    verifier.verify_token(token)

    def test_unconfigured_secret_rejects_everything(self) -> None:
        with self.assertRaises(AuthVerificationError):
            JwtTokenVerifier(secret=None).verify_token(_jwt({"id": "u-1"}))


if __name__ == "__main__":
    unittest.main()
