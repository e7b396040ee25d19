"""Tests for the CLI module."""

from __future__ import annotations

import argparse
import json
from unittest.mock import MagicMock, patch

import pytest

from freshservice_tools.cli import (
    build_parser,
    cmd_canned_response_folders,
    cmd_canned_response_list,
    cmd_config_setup,
    cmd_config_show,
    cmd_onboarding_list,
    cmd_onboarding_tickets,
    cmd_release_restore,
    cmd_ticket_filter,
    cmd_ticket_get,
    cmd_ticket_list,
    cmd_ticket_restore,
    main,
)
from freshservice_tools.core.exceptions import NotAuthenticatedError, ValidationError
from freshservice_tools.core.models import Result, ResultStatus
from freshservice_tools.freshservice.credentials import FreshserviceCredentials


def mock_client(**methods: object) -> MagicMock:
    """Create a MagicMock client usable as a context manager."""
    client = MagicMock(**methods)
    client.__enter__ = MagicMock(return_value=client)
    client.__exit__ = MagicMock(return_value=False)
    return client


# =============================================================================
# Ticket Command Tests
# =============================================================================


class TestTicketCommands:
    """Tests for ticket commands."""

    def test_cmd_ticket_get(self, sample_ticket: dict, capsys: pytest.CaptureFixture) -> None:
        """Test getting a ticket."""
        client = mock_client()
        client.get.return_value = sample_ticket
        args = argparse.Namespace(ticket_id="42", json=False)

        with patch("freshservice_tools.freshservice.TicketClient", return_value=client):
            result = cmd_ticket_get(args)

        assert result == 0
        client.get.assert_called_once_with("42")
        assert "Printer on fire" in capsys.readouterr().out

    def test_cmd_ticket_get_json(self, sample_ticket: dict, capsys: pytest.CaptureFixture) -> None:
        """Test raw JSON output."""
        client = mock_client()
        client.get.return_value = sample_ticket
        args = argparse.Namespace(ticket_id="42", json=True)

        with patch("freshservice_tools.freshservice.TicketClient", return_value=client):
            cmd_ticket_get(args)

        assert json.loads(capsys.readouterr().out) == sample_ticket

    def test_cmd_ticket_list_limit(self, capsys: pytest.CaptureFixture) -> None:
        """Test --limit stops consuming pages early."""
        client = mock_client()
        client.iter.return_value = iter([{"id": i, "subject": f"T{i}"} for i in range(10)])
        args = argparse.Namespace(updated_since=None, limit=3, json=False)

        with patch("freshservice_tools.freshservice.TicketClient", return_value=client):
            result = cmd_ticket_list(args)

        assert result == 0
        assert "Found 3 record(s)" in capsys.readouterr().out

    def test_cmd_ticket_filter_empty(self, capsys: pytest.CaptureFixture) -> None:
        """Test a filter without matches."""
        client = mock_client()
        client.filter.return_value = iter([])
        args = argparse.Namespace(query="status:5", json=False)

        with patch("freshservice_tools.freshservice.TicketClient", return_value=client):
            result = cmd_ticket_filter(args)

        assert result == 0
        client.filter.assert_called_once_with("status:5")
        assert "No records found" in capsys.readouterr().out

    def test_cmd_ticket_restore(self) -> None:
        """Test restoring a ticket."""
        client = mock_client()
        client.restore.return_value = Result(status=ResultStatus.SUCCESS, message="Restored ticket 42")
        args = argparse.Namespace(ticket_id="42")

        with patch("freshservice_tools.freshservice.TicketClient", return_value=client):
            assert cmd_ticket_restore(args) == 0

    def test_cmd_ticket_restore_failed(self, capsys: pytest.CaptureFixture) -> None:
        """Test a failed restore returns 1."""
        client = mock_client()
        client.restore.return_value = Result(status=ResultStatus.FAILED, message="Expected 204, got 200")
        args = argparse.Namespace(ticket_id="42")

        with patch("freshservice_tools.freshservice.TicketClient", return_value=client):
            assert cmd_ticket_restore(args) == 1

        assert "Expected 204" in capsys.readouterr().err


# =============================================================================
# Other Resource Command Tests
# =============================================================================


class TestResourceCommands:
    """Tests for release, canned response and onboarding commands."""

    def test_cmd_release_restore(self) -> None:
        """Test restoring a release."""
        client = mock_client()
        client.restore.return_value = Result(status=ResultStatus.SUCCESS, message="Restored release 7")

        with patch("freshservice_tools.freshservice.ReleaseClient", return_value=client):
            assert cmd_release_restore(argparse.Namespace(release_id="7")) == 0

        client.restore.assert_called_once_with("7")

    def test_cmd_canned_response_list_folder(self) -> None:
        """Test listing a folder's canned responses."""
        client = mock_client()
        client.list_folder_responses.return_value = [{"id": 1, "title": "Hi"}]
        args = argparse.Namespace(folder="5", json=False)

        with patch("freshservice_tools.freshservice.CannedResponseClient", return_value=client):
            assert cmd_canned_response_list(args) == 0

        client.list_folder_responses.assert_called_once_with("5")
        client.list.assert_not_called()

    def test_cmd_canned_response_folders(self, capsys: pytest.CaptureFixture) -> None:
        """Test listing folders."""
        client = mock_client()
        client.list_folders.return_value = [{"id": 5, "name": "General"}]

        with patch("freshservice_tools.freshservice.CannedResponseClient", return_value=client):
            assert cmd_canned_response_folders(argparse.Namespace(json=False)) == 0

        assert "[5] General" in capsys.readouterr().out

    def test_cmd_onboarding_list_offboarding(self) -> None:
        """Test --offboarding selects the offboarding client."""
        onboarding = mock_client()
        offboarding = mock_client()
        offboarding.list.return_value = []
        args = argparse.Namespace(offboarding=True, json=False)

        with (
            patch("freshservice_tools.freshservice.OnboardingRequestClient", return_value=onboarding),
            patch("freshservice_tools.freshservice.OffboardingRequestClient", return_value=offboarding),
        ):
            assert cmd_onboarding_list(args) == 0

        offboarding.list.assert_called_once()
        onboarding.list.assert_not_called()

    def test_cmd_onboarding_tickets(self) -> None:
        """Test listing tickets of an onboarding request."""
        client = mock_client()
        client.list_tickets.return_value = [{"id": 100, "subject": "Laptop"}]
        args = argparse.Namespace(offboarding=False, request_id="3", json=False)

        with patch("freshservice_tools.freshservice.OnboardingRequestClient", return_value=client):
            assert cmd_onboarding_tickets(args) == 0

        client.list_tickets.assert_called_once_with("3")


# =============================================================================
# Config Command Tests
# =============================================================================


class TestConfigCommands:
    """Tests for config commands."""

    def test_cmd_config_show(self, capsys: pytest.CaptureFixture) -> None:
        """Test the API key is masked."""
        creds = FreshserviceCredentials(
            base_url="https://acme.freshservice.com", api_key="secret-key-1234", throttle=True
        )
        with patch(
            "freshservice_tools.freshservice.credentials.get_credentials", return_value=creds
        ):
            assert cmd_config_show(argparse.Namespace()) == 0

        out = capsys.readouterr().out
        assert "****1234" in out
        assert "secret-key" not in out
        assert "Throttle: on" in out

    def test_cmd_config_show_not_configured(self, capsys: pytest.CaptureFixture) -> None:
        """Test output without a base URL."""
        with patch(
            "freshservice_tools.freshservice.credentials.get_credentials",
            side_effect=ValueError("Missing Freshservice base URL"),
        ):
            assert cmd_config_show(argparse.Namespace()) == 0

        assert "Not configured" in capsys.readouterr().out

    def test_cmd_config_setup_saves(self) -> None:
        """Test credentials are saved after a successful probe."""
        client = mock_client()
        args = argparse.Namespace(
            base_url="https://acme.freshservice.com", api_key="k", throttle=True
        )

        with (
            patch("freshservice_tools.freshservice.FreshserviceClient", return_value=client),
            patch("freshservice_tools.freshservice.credentials.save_credentials") as mock_save,
        ):
            assert cmd_config_setup(args) == 0

        client.test_connection.assert_called_once()
        mock_save.assert_called_once_with("https://acme.freshservice.com", "k", throttle=True)

    def test_cmd_config_setup_failure(self) -> None:
        """Test nothing is saved when the probe fails."""
        client = mock_client()
        client.test_connection.side_effect = NotAuthenticatedError("No key")
        args = argparse.Namespace(
            base_url="https://acme.freshservice.com", api_key="", throttle=False
        )

        with (
            patch("freshservice_tools.freshservice.FreshserviceClient", return_value=client),
            patch("freshservice_tools.freshservice.credentials.save_credentials") as mock_save,
        ):
            assert cmd_config_setup(args) == 1

        mock_save.assert_not_called()


# =============================================================================
# Main Entry Point Tests
# =============================================================================


class TestMain:
    """Tests for argument parsing and dispatch."""

    def test_parser_requires_command(self) -> None:
        """Test that a command is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_parser_onboarding_flag(self) -> None:
        """Test the onboarding group flag."""
        args = build_parser().parse_args(["onboarding", "--offboarding", "get", "3", "--json"])
        assert args.offboarding is True
        assert args.request_id == "3"
        assert args.json is True

    def test_main_dispatches(self) -> None:
        """Test main routes to the command handler."""
        with patch("freshservice_tools.cli.cmd_ticket_get", return_value=0) as handler:
            with patch.dict(
                "freshservice_tools.cli.COMMANDS",
                {"ticket": ("ticket_command", {"get": handler})},
            ):
                assert main(["ticket", "get", "42"]) == 0

        handler.assert_called_once()

    def test_main_reports_api_errors(self, capsys: pytest.CaptureFixture) -> None:
        """Test API errors become exit code 1 with a message."""
        client = mock_client()
        client.get.side_effect = ValidationError("Validation failed: email field - is required")

        with patch("freshservice_tools.freshservice.TicketClient", return_value=client):
            assert main(["ticket", "get", "42"]) == 1

        assert "email field - is required" in capsys.readouterr().err

    def test_main_reports_configuration_errors(self, capsys: pytest.CaptureFixture) -> None:
        """Test configuration errors become exit code 1."""
        with patch(
            "freshservice_tools.freshservice.ReleaseClient",
            side_effect=ValueError("Missing Freshservice base URL"),
        ):
            assert main(["release", "list"]) == 1

        assert "Configuration error" in capsys.readouterr().err
