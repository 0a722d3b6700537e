"""Tests for the session controller: gating, blocking and end-to-end flow."""

from unittest.mock import patch

import pytest

from passgen.cooldown import ALREADY_USED, COOLING_DOWN, READY
from passgen.presets import PresetStore
from passgen.session import PasswordSession
from passgen.share import ShareClient

FOUND = {"found": True, "count": 42, "status": "ok"}
CLEAN = {"found": False, "count": 0, "status": "ok"}
SHARED = {"success": True, "url": "https://pwpush.com/p/tok", "is_qr": False,
          "status": "ok", "log": ""}


@pytest.fixture
def session(tmp_path):
    store = PresetStore(tmp_path / "presets.json")
    store.load()
    return PasswordSession(store=store, share_client=ShareClient(), cooldown_seconds=10)


def _wait(session, seconds=10):
    for _ in range(seconds):
        session.tick()


class TestGenerate:
    @patch("passgen.generators.secrets.randbelow", return_value=0)
    def test_random_end_to_end(self, mock_randbelow, session):
        result = session.generate_random(12)
        assert result["success"] is True
        assert len(session.password) == 12
        report = session.score()
        assert report["pool_size"] == 68
        assert report["label"] == "Strong"

    def test_invalid_length_is_a_result(self, session):
        result = session.generate_random(40)
        assert result["success"] is False
        assert result["status"] == "invalid"
        assert session.password == ""

    def test_memorable(self, session):
        assert session.generate_memorable(3, "Swedish")["success"] is True
        assert session.params["language"] == "Swedish"

    def test_from_preset(self, session):
        session.generate_from_preset("Very Strong Password")
        assert len(session.password) == 20

    def test_from_missing_preset(self, session):
        assert session.generate_from_preset("Nope")["success"] is False

    def test_transliterate_current_password(self, session):
        session.set_password("a1")
        assert session.transliterate("NATO") == [("a", "Alpha"), ("1", "One")]


class TestBreachGate:
    @patch("passgen.session.breach.check_breach", return_value=CLEAN)
    def test_disabled_after_check(self, mock_check, session):
        session.set_password("S3cret!pass")
        assert session.check_breach()["success"] is True
        assert session.action_state()["breach"] == COOLING_DOWN

        again = session.check_breach()
        assert again["success"] is False
        assert again["status"] == "cooldown"
        assert mock_check.call_count == 1

    @patch("passgen.session.breach.check_breach", return_value=CLEAN)
    def test_already_used_until_password_changes(self, mock_check, session):
        session.set_password("S3cret!pass")
        session.check_breach()
        _wait(session)
        assert session.action_state()["breach"] == ALREADY_USED
        assert session.check_breach()["status"] == ALREADY_USED

        session.set_password("Other!pass1")
        assert session.action_state()["breach"] == READY
        assert session.check_breach()["success"] is True

    @patch("passgen.session.breach.check_breach", return_value=CLEAN)
    def test_change_mid_cooldown_still_waits(self, mock_check, session):
        session.set_password("S3cret!pass")
        session.check_breach()
        _wait(session, 3)
        session.set_password("Other!pass1")
        assert session.action_state()["breach"] == COOLING_DOWN
        _wait(session, 7)
        assert session.action_state()["breach"] == READY

    @patch("passgen.session.breach.check_breach",
           return_value={"found": False, "count": 0, "status": "error", "error": "boom"})
    def test_failure_still_starts_cooldown(self, mock_check, session):
        session.set_password("S3cret!pass")
        assert session.check_breach()["success"] is False
        assert session.action_state()["breach"] == COOLING_DOWN

    def test_regenerating_resets_flag(self, session):
        with patch("passgen.session.breach.check_breach", return_value=CLEAN):
            session.generate_random(16)
            session.check_breach()
        _wait(session)
        session.generate_random(16)
        assert session.action_state()["breach"] == READY

    def test_no_password(self, session):
        assert session.check_breach()["status"] == "invalid"


class TestShareGate:
    @patch("passgen.session.breach.check_breach", return_value=FOUND)
    def test_breached_password_is_blocked(self, mock_check, session):
        session.set_password("password")
        session.check_breach()
        with patch.object(session.share_client, "push") as mock_push:
            result = session.share()
        assert result["status"] == "blocked"
        mock_push.assert_not_called()

    @patch("passgen.session.breach.check_breach", return_value=FOUND)
    def test_block_lifts_on_new_password(self, mock_check, session):
        session.set_password("password")
        session.check_breach()
        session.set_password("N3w!password")
        with patch.object(session.share_client, "push", return_value=SHARED):
            assert session.share()["success"] is True

    def test_share_cooldown(self, session):
        session.set_password("S3cret!pass")
        with patch.object(session.share_client, "push", return_value=SHARED) as mock_push:
            assert session.share(expire_views=2)["success"] is True
            assert session.share()["status"] == COOLING_DOWN
            _wait(session)
            assert session.share()["status"] == ALREADY_USED
        mock_push.assert_called_once_with("S3cret!pass", expire_views=2)

    def test_share_and_breach_are_independent(self, session):
        session.set_password("S3cret!pass")
        with patch.object(session.share_client, "push", return_value=SHARED):
            session.share()
        assert session.action_state() == {"breach": READY, "share": COOLING_DOWN}

    def test_history_shared_with_client(self, session):
        assert session.history is session.share_client.history

    def test_expire_link_delegates(self, session):
        with patch.object(session.share_client, "expire",
                          return_value={"success": True, "status": "ok", "log": ""}) as mock_expire:
            assert session.expire_link("tok")["success"] is True
        mock_expire.assert_called_once_with("tok")


class TestPresets:
    def test_list_presets(self, session):
        listing = session.list_presets()
        assert len(listing["presets"]) == 6
        assert listing["default"] == "Strong Password"

    def test_list_skips_disabled(self, session):
        session.store.set_enabled("Medium Password", False)
        names = [p.name for p in session.list_presets()["presets"]]
        assert "Medium Password" not in names
