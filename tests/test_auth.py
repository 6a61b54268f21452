"""
Tests for the authentication module – init, login state machine, logout, deinit.
"""

import unittest

import requests

from diaspora_api.auth.credentials import credentials_match, new_credential_digest
from diaspora_api.errors import ErrorKind

from fakes import (
    bookmarklet_page,
    logged_in_client,
    make_client,
    make_response,
    sign_in_page,
)


class TestCredentialDigest(unittest.TestCase):
    def test_matching_credentials(self):
        salt, digest = new_credential_digest("alice", "secret")
        self.assertTrue(credentials_match("alice", "secret", "alice", salt, digest))

    def test_wrong_password(self):
        salt, digest = new_credential_digest("alice", "secret")
        self.assertFalse(credentials_match("alice", "other", "alice", salt, digest))

    def test_wrong_username(self):
        salt, digest = new_credential_digest("alice", "secret")
        self.assertFalse(credentials_match("bob", "secret", "alice", salt, digest))

    def test_nothing_stored(self):
        self.assertFalse(credentials_match("alice", "secret", None, None, None))

    def test_salt_differs_per_digest(self):
        salt1, digest1 = new_credential_digest("alice", "secret")
        salt2, digest2 = new_credential_digest("alice", "secret")
        self.assertNotEqual(salt1, salt2)
        self.assertNotEqual(digest1, digest2)


class TestInit(unittest.TestCase):
    def test_init_fetches_token(self):
        client, http = make_client(sign_in_page(1))
        self.assertTrue(client.init())
        self.assertEqual(client.token, "tok-1")
        self.assertEqual(http.calls[0].method, "GET")
        self.assertEqual(http.calls[0].url, "https://example.org/users/sign_in")

    def test_repeated_init_reuses_token(self):
        client, http = make_client(sign_in_page(1))
        self.assertTrue(client.init())
        self.assertTrue(client.init())
        self.assertEqual(len(http.calls), 1)

    def test_init_same_pod_does_not_refetch(self):
        client, http = make_client(sign_in_page(1))
        client.init()
        self.assertTrue(client.init("example.org", True))
        self.assertEqual(len(http.calls), 1)

    def test_init_new_pod_forces_new_token(self):
        client, http = make_client(sign_in_page(1), sign_in_page(2))
        client.init()
        self.assertTrue(client.init("other.example", False))
        self.assertEqual(client.token, "tok-2")
        self.assertEqual(http.calls[1].url, "http://other.example/users/sign_in")
        self.assertEqual(client.get_pod_url(), "http://other.example")

    def test_init_new_pod_does_not_keep_old_token_on_failure(self):
        client, _ = make_client(sign_in_page(1), requests.ConnectionError("refused"))
        client.init()
        self.assertFalse(client.init("other.example"))
        self.assertIsNone(client.token)

    def test_init_switch_scheme_only(self):
        client, http = make_client(sign_in_page(1), sign_in_page(2))
        client.init()
        self.assertTrue(client.init(secure=False))
        self.assertEqual(http.calls[1].url, "http://example.org/users/sign_in")

    def test_init_without_token_fails(self):
        client, _ = make_client(make_response(503, "maintenance", reason="Service Unavailable"))
        self.assertFalse(client.init())
        error = client.last_error
        self.assertEqual(error.kind, ErrorKind.INIT_FAILED)
        self.assertIn('Failed to initialise connection to pod "https://example.org".', error.message)
        self.assertEqual(error.data["help"], "troubleshooting")
        self.assertEqual(error.status_code, 503)
        self.assertEqual(error.status_message, "Service Unavailable")

    def test_init_transport_error_message_included(self):
        client, _ = make_client(requests.ConnectionError("Connection refused"))
        self.assertFalse(client.init())
        self.assertEqual(client.last_error.kind, ErrorKind.INIT_FAILED)
        self.assertIn("Connection refused", client.last_error.message)
        self.assertIsNone(client.last_error.status_code)

    def test_init_clears_previous_error(self):
        client, _ = make_client(requests.ConnectionError("down"), sign_in_page(1))
        self.assertFalse(client.init())
        self.assertTrue(client.init())
        self.assertIsNone(client.last_error)


class TestLogin(unittest.TestCase):
    def test_login_success(self):
        client, http = make_client(
            sign_in_page(1),
            make_response(302, reason="Found", cookies={"_diaspora_session": "authed"}),
            bookmarklet_page(),
        )
        self.assertTrue(client.init())
        self.assertTrue(client.login("alice", "secret"))
        self.assertTrue(client.is_logged_in())

        sign_in = http.calls[1]
        self.assertEqual(sign_in.method, "POST")
        self.assertEqual(sign_in.url, "https://example.org/users/sign_in")
        self.assertEqual(
            sign_in.kwargs["data"],
            {"user[username]": "alice", "user[password]": "secret", "authenticity_token": "tok-1"},
        )
        self.assertEqual(sign_in.kwargs["cookies"], {"_diaspora_session": "s1"})

        probe = http.calls[2]
        self.assertEqual(probe.url, "https://example.org/bookmarklet")
        self.assertEqual(probe.kwargs["cookies"], {"_diaspora_session": "authed"})
        # The bookmarklet page rotates the token.
        self.assertEqual(client.token, "tok-after-login")

    def test_login_verification_403(self):
        client, _ = make_client(
            sign_in_page(1),
            make_response(
                200,
                '<div class="flash-message" id="flash-alert">Invalid login or password.</div>',
            ),
            make_response(403, "", reason="Forbidden"),
        )
        client.init()
        self.assertFalse(client.login("alice", "wrong"))
        self.assertFalse(client.is_logged_in())
        error = client.last_error
        self.assertEqual(error.kind, ErrorKind.LOGIN_FAILED)
        self.assertEqual(error.data["help"], "troubleshooting")
        self.assertEqual(error.data["server_message"], "Invalid login or password.")
        self.assertEqual(error.status_code, 403)

    def test_login_verification_redirect_is_failure(self):
        client, _ = make_client(
            sign_in_page(1),
            make_response(302, reason="Found"),
            make_response(302, reason="Found", headers={"Location": "https://example.org/users/sign_in"}),
        )
        client.init()
        self.assertFalse(client.login("alice", "wrong"))
        self.assertEqual(client.last_error.kind, ErrorKind.LOGIN_FAILED)

    def test_login_transport_error(self):
        client, _ = make_client(
            sign_in_page(1),
            requests.ConnectionError("reset"),
            requests.ConnectionError("reset"),
        )
        client.init()
        self.assertFalse(client.login("alice", "secret"))
        self.assertEqual(client.last_error.kind, ErrorKind.LOGIN_FAILED)
        self.assertNotIn("server_message", client.last_error.data)

    def test_login_requires_init(self):
        client, http = make_client()
        self.assertFalse(client.login("alice", "secret"))
        self.assertEqual(client.last_error.kind, ErrorKind.CONNECTION_NOT_INITIALIZED)
        self.assertEqual(http.calls, [])

    def test_login_rejects_blank_credentials(self):
        for username, password in (("", "secret"), ("alice", ""), ("   ", "secret"), ("alice", None)):
            client, http = make_client(sign_in_page(1))
            client.init()
            self.assertFalse(client.login(username, password))
            self.assertFalse(client.is_logged_in())
            self.assertEqual(client.last_error.kind, ErrorKind.LOGIN_FAILED)
            self.assertEqual(len(http.calls), 1)

    def test_second_login_same_credentials_no_network(self):
        client, http = logged_in_client()
        self.assertTrue(client.login("alice", "secret"))
        self.assertEqual(http.calls, [])

    def test_second_login_forced(self):
        client, http = logged_in_client(make_response(302, reason="Found"), bookmarklet_page())
        self.assertTrue(client.login("alice", "secret", force=True))
        self.assertEqual(len(http.calls), 2)

    def test_sign_in_transport_error_reports_previous_status(self):
        client, _ = logged_in_client(requests.ConnectionError("reset"), bookmarklet_page())
        self.assertTrue(client.login("alice", "secret", force=True))
        self.assertEqual(client.last_error.kind, ErrorKind.TRANSPORT_ERROR)
        self.assertEqual(client.last_error.status_code, 200)
        self.assertEqual(client.last_error.status_message, "OK")

    def test_second_login_other_password_hits_network(self):
        client, http = logged_in_client(make_response(302, reason="Found"), make_response(403, reason="Forbidden"))
        self.assertFalse(client.login("alice", "changed"))
        self.assertEqual(len(http.calls), 2)
        self.assertFalse(client.is_logged_in())

    def test_failed_login_after_success_logs_out(self):
        client, _ = logged_in_client(
            bookmarklet_page(),
            make_response(302, reason="Found"),
            make_response(403, reason="Forbidden"),
        )
        self.assertEqual(client.get_aspects(), {"public": "Public", 3: "Family", 7: "Work"})
        self.assertFalse(client.login("alice", "secret", force=True))
        self.assertFalse(client.is_logged_in())
        self.assertEqual(client._session.aspects, {})

    def test_password_is_not_stored(self):
        client, _ = logged_in_client()
        self.assertNotIn("secret", repr(client._session))
        self.assertNotIn("secret", repr(vars(client._session)))


class TestLogoutDeinit(unittest.TestCase):
    def test_logout_keeps_token_and_cookies(self):
        client, _ = logged_in_client(bookmarklet_page())
        client.get_services()
        client.logout()
        self.assertFalse(client.is_logged_in())
        self.assertIsNone(client._session.username)
        self.assertEqual(client._session.services, {})
        self.assertEqual(client.token, "tok-after-login")
        self.assertEqual(client._session.cookies, {"_diaspora_session": "authed", "remember_user_token": "r"})

    def test_login_after_logout_without_init(self):
        client, http = logged_in_client(make_response(302, reason="Found"), bookmarklet_page())
        client.logout()
        self.assertTrue(client.login("alice", "secret"))
        self.assertEqual(http.calls[0].kwargs["data"]["authenticity_token"], "tok-after-login")

    def test_deinit_resets_everything(self):
        client, http = logged_in_client(make_response(500, reason="Internal Server Error"))
        client.delete("comment", 1)
        self.assertIsNotNone(client.last_error)

        client.deinit()
        self.assertFalse(client.is_logged_in())
        self.assertIsNone(client.last_error)
        self.assertIsNone(client.token)
        self.assertEqual(client._session.cookies, {})
        self.assertIsNone(client.last_request)

        http.calls.clear()
        self.assertIsNone(client.post("hello"))
        self.assertEqual(client.last_error.kind, ErrorKind.CONNECTION_NOT_INITIALIZED)
        self.assertEqual(http.calls, [])


if __name__ == "__main__":
    unittest.main()
