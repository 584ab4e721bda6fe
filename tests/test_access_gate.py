"""
==============================================================================
Access Gate Tests
==============================================================================

HTTP Basic Auth on the admin prefix: fails closed when unconfigured,
challenges on bad credentials, passes everything else through.

==============================================================================
"""

import base64

import pytest

from fimenu.core.access_gate import (
    WWW_AUTHENTICATE,
    credentials_match,
    is_admin_path,
    parse_basic_credentials,
)


ADMIN_URL = "/admin/api/products"


def header(raw: bytes) -> str:
    return "Basic " + base64.b64encode(raw).decode("ascii")


class TestParseCredentials:
    """Tests Authorization header parsing."""

    def test_valid_header(self):
        assert parse_basic_credentials(header(b"user:pass")) == ("user", "pass")

    def test_password_with_colon(self):
        assert parse_basic_credentials(header(b"user:a:b:c")) == ("user", "a:b:c")

    def test_scheme_is_case_insensitive(self):
        value = "basic " + base64.b64encode(b"user:pass").decode("ascii")
        assert parse_basic_credentials(value) == ("user", "pass")

    def test_utf8_credentials(self):
        assert parse_basic_credentials(header("jörg:pässword".encode("utf-8"))) == ("jörg", "pässword")

    @pytest.mark.parametrize("value", [
        None,
        "",
        "Basic",
        "Basic ",
        "Bearer abc.def.ghi",
        "Basic !!!notbase64",
        header(b"no-colon-here"),
        header(b"\xff\xfe:bad"),
    ])
    def test_malformed_headers(self, value):
        assert parse_basic_credentials(value) is None

    def test_credentials_match(self):
        assert credentials_match(header(b"user:pass"), "user", "pass") is True
        assert credentials_match(header(b"user:wrong"), "user", "pass") is False
        assert credentials_match(header(b"other:pass"), "user", "pass") is False
        assert credentials_match(None, "user", "pass") is False


class TestAdminPath:
    """Tests which paths the gate covers."""

    @pytest.mark.parametrize("path, expected", [
        ("/admin", True),
        ("/admin/", True),
        ("/admin/api/products", True),
        ("/administrator", False),
        ("/adminx/api", False),
        ("/api/v1/menu", False),
        ("/", False),
    ])
    def test_is_admin_path(self, path, expected):
        assert is_admin_path(path, "/admin") is expected


class TestGateUnconfigured:
    """Tests the admin area is closed when credentials are not set."""

    def test_admin_request_fails_closed(self, client):
        """Test 500 without credentials configured."""
        response = client.get(ADMIN_URL)

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "ADMIN_AUTH_NOT_CONFIGURED"
        assert "Admin auth not configured" in data["error"]["message"]

    def test_credentials_do_not_help(self, client, make_auth):
        response = client.get(ADMIN_URL, headers=make_auth("anyone", "anything"))
        assert response.status_code == 500

    def test_blank_credentials_count_as_unset(self, client, monkeypatch):
        from fimenu.config import get_settings

        monkeypatch.setenv("ADMIN_USER", "manager")
        monkeypatch.setenv("ADMIN_PASS", "")
        get_settings.cache_clear()

        assert client.get(ADMIN_URL).status_code == 500

    def test_prefix_root_is_gated(self, client):
        assert client.get("/admin").status_code == 500

    def test_public_routes_unaffected(self, client):
        assert client.get("/api/v1/health").status_code == 200
        assert client.get("/api/v1/menu").status_code == 200


class TestGateConfigured:
    """Tests the Basic Auth challenge."""

    def test_missing_credentials(self, client, admin_credentials):
        response = client.get(ADMIN_URL)

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == WWW_AUTHENTICATE
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_wrong_password(self, client, admin_credentials, make_auth):
        username, _ = admin_credentials
        response = client.get(ADMIN_URL, headers=make_auth(username, "wrong"))

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == 'Basic realm="Admin Area", charset="UTF-8"'

    def test_password_prefix_rejected(self, client, admin_credentials, make_auth):
        """Test the part of the password before its colon is not enough."""
        username, password = admin_credentials
        response = client.get(ADMIN_URL, headers=make_auth(username, password.split(":")[0]))
        assert response.status_code == 401

    def test_malformed_header(self, client, admin_credentials):
        response = client.get(ADMIN_URL, headers={"Authorization": "Basic %%%"})
        assert response.status_code == 401

    def test_correct_credentials(self, client, admin_headers):
        """Test a password containing ':' authenticates."""
        response = client.get(ADMIN_URL, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_non_ascii_credentials(self, client, monkeypatch, make_auth):
        """Test UTF-8 usernames and passwords authenticate."""
        from fimenu.config import get_settings

        monkeypatch.setenv("ADMIN_USER", "jörg")
        monkeypatch.setenv("ADMIN_PASS", "pässwörd:ü")
        get_settings.cache_clear()

        assert client.get(ADMIN_URL, headers=make_auth("jörg", "pässwörd:ü")).status_code == 200
        assert client.get(ADMIN_URL, headers=make_auth("jorg", "pässwörd:ü")).status_code == 401

    def test_writes_are_gated(self, client, admin_credentials):
        assert client.post(f"{ADMIN_URL}/reset").status_code == 401
        assert client.delete(f"{ADMIN_URL}/dent").status_code == 401

    def test_similar_prefix_not_gated(self, client, admin_credentials):
        """Test /administrator is outside the admin area."""
        assert client.get("/administrator").status_code == 404
