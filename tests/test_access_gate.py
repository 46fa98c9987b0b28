"""
Access gate in front of /admin and /user.
"""
from reportdesk.middleware.access_gate import path_matches


def _set_cookie_headers(resp):
    return [v.lower() for k, v in resp.headers.multi_items() if k.lower() == "set-cookie"]


class TestPathMatching:

    def test_exact_and_nested(self):
        assert path_matches("/admin", ("/admin",))
        assert path_matches("/admin/reports", ("/admin",))
        assert path_matches("/user/", ("/admin", "/user"))

    def test_similar_prefix_is_not_protected(self):
        assert not path_matches("/administrator", ("/admin",))
        assert not path_matches("/users", ("/user",))
        assert not path_matches("/reports", ("/admin", "/user"))


class TestAnonymous:

    def test_admin_path_redirects_to_entry(self, client):
        resp = client.get("/admin", follow_redirects=False)
        assert resp.status_code == 307
        assert resp.headers["location"] == "/"

    def test_user_path_reaches_handler_which_refuses(self, client):
        resp = client.get("/user", follow_redirects=False)
        assert resp.status_code == 401
        assert resp.json()["detail"] == "not_authenticated"

    def test_unprotected_path_untouched(self, client):
        assert client.get("/health").status_code == 200


class TestInvalidCredential:

    def test_user_path_redirects_and_clears_cookie(self, client):
        client.cookies.set("auth-token", "not-a-token")
        resp = client.get("/user", follow_redirects=False)
        assert resp.status_code == 307
        assert resp.headers["location"] == "/"
        cookies = _set_cookie_headers(resp)
        assert any(c.startswith("auth-token=") and "max-age=-1" in c for c in cookies)

    def test_admin_path_redirects_and_clears_cookie(self, client, admin, token_for):
        client.cookies.set("auth-token", token_for(admin, expires_minutes=-1))
        resp = client.get("/admin", follow_redirects=False)
        assert resp.status_code == 307
        assert resp.headers["location"] == "/"
        assert any(c.startswith("auth-token=") for c in _set_cookie_headers(resp))


class TestRoles:

    def test_plain_user_redirected_from_admin(self, client, plain_user, token_for):
        client.cookies.set("auth-token", token_for(plain_user))
        resp = client.get("/admin", follow_redirects=False)
        assert resp.status_code == 307
        assert resp.headers["location"] == "/user"

    def test_plain_user_sees_user_area(self, client, plain_user, token_for):
        client.cookies.set("auth-token", token_for(plain_user))
        resp = client.get("/user", follow_redirects=False)
        assert resp.status_code == 200
        body = resp.json()
        assert body["email"] == plain_user.email
        assert body["role"] == "user"
        assert body["user_id"] == str(plain_user.id)

    def test_admin_sees_admin_overview(self, admin_client, make_reports, admin):
        make_reports(3)
        make_reports(2, resolved_by=admin.id)
        resp = admin_client.get("/admin", follow_redirects=False)
        assert resp.status_code == 200
        body = resp.json()
        assert body["identity"]["role"] == "admin"
        assert body["reports"] == {"total": 5, "resolved": 2, "unresolved": 3}

    def test_admin_can_open_user_area(self, admin_client):
        resp = admin_client.get("/user", follow_redirects=False)
        assert resp.status_code == 200
        assert resp.json()["role"] == "admin"

    def test_admin_subpath_passes_gate(self, admin_client):
        # no such page, but the gate lets an admin through to routing
        assert admin_client.get("/admin/nothing-here", follow_redirects=False).status_code == 404
