"""Tests for the service availability probes."""

from unittest.mock import Mock, patch

import pytest
import requests

from passgen import config
from passgen.errors import ServiceUnavailableError
from passgen.probe import hibp_available, require_available, share_available


class TestHibpAvailable:
    @patch("passgen.probe.requests.get")
    def test_ok(self, mock_get):
        mock_get.return_value = Mock(status_code=200)
        assert hibp_available() is True
        assert mock_get.call_args[0][0].endswith("/range/00000")

    @patch("passgen.probe.requests.get")
    def test_non_200(self, mock_get):
        mock_get.return_value = Mock(status_code=503)
        assert hibp_available() is False

    @patch("passgen.probe.requests.get")
    def test_exception(self, mock_get):
        mock_get.side_effect = requests.Timeout()
        assert hibp_available() is False


class TestShareAvailable:
    @patch("passgen.probe.requests.head")
    def test_client_error_still_counts_as_up(self, mock_head):
        mock_head.return_value = Mock(status_code=405)
        assert share_available() is True

    @patch("passgen.probe.requests.head")
    def test_server_error(self, mock_head):
        mock_head.return_value = Mock(status_code=502)
        assert share_available() is False

    @patch("passgen.probe.requests.head")
    def test_connection_error(self, mock_head):
        mock_head.side_effect = requests.ConnectionError()
        assert share_available() is False


class TestRequireAvailable:
    @patch("passgen.probe.share_available", return_value=False)
    def test_raises_named_condition(self, mock_probe):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            require_available(config.SHARE_NAME)
        assert exc_info.value.service == config.SHARE_NAME
        assert str(exc_info.value) == f"{config.SHARE_NAME} unavailable"

    @patch("passgen.probe.hibp_available", return_value=True)
    def test_passes(self, mock_probe):
        require_available(config.HIBP_NAME)
        mock_probe.assert_called_once()

    def test_unknown_service(self):
        with pytest.raises(ValueError):
            require_available("Nope")
