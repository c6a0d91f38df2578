"""
Unit tests for Redfish Client

Tests the RedfishClient implementation including:
- Session creation and token handling
- Collection traversal (referenced and inline members, paging, skipped members)
- Error handling and exceptions
- Connection bootstrap results
"""

import pytest
import responses
from requests.exceptions import ConnectionError, ConnectTimeout

from redfish_exporter.config import Settings
from redfish_exporter.services.redfish import (
    RedfishClient,
    RedfishException,
    open_connection,
)

from factories import make_log_service, make_manager

BASE = "https://bmc.example.com"


@pytest.fixture
def client():
    """Create RedfishClient instance"""
    return RedfishClient("bmc.example.com", timeout=5)


def add_session(status=201, token="token-123"):
    headers = {"X-Auth-Token": token} if token else {}
    responses.add(
        responses.POST,
        f"{BASE}/redfish/v1/SessionService/Sessions",
        json={"Id": "1"},
        headers=headers,
        status=status
    )


class TestRedfishClientInitialization:
    """Test RedfishClient initialization"""

    def test_client_init_basic(self, client):
        assert client.base_url == "https://bmc.example.com"
        assert client.timeout == 5
        assert client.verify is False
        assert client.token is None

    def test_from_settings_with_ca_bundle(self):
        settings = Settings(
            REDFISH_HOST="10.0.0.1:8443",
            REDFISH_SCHEME="https",
            REDFISH_CA_BUNDLE="/etc/ssl/bmc.pem",
            _env_file=None
        )
        client = RedfishClient.from_settings(settings)

        assert client.base_url == "https://10.0.0.1:8443"
        assert client.verify == "/etc/ssl/bmc.pem"

    def test_from_settings_host_override(self, test_settings):
        client = RedfishClient.from_settings(test_settings, host="other-bmc")
        assert client.host == "other-bmc"


class TestSession:
    """Test session creation"""

    @responses.activate
    def test_create_session_sets_token(self, client):
        add_session()
        responses.add(responses.GET, f"{BASE}/redfish/v1/Managers", json={"Members": []}, status=200)

        token = client.create_session("root", "calvin")
        client.get_managers()

        assert token == "token-123"
        assert responses.calls[0].request.body is not None
        assert responses.calls[1].request.headers["X-Auth-Token"] == "token-123"

    @responses.activate
    def test_close_forgets_token(self, client):
        add_session()
        responses.add(responses.GET, f"{BASE}/redfish/v1/Managers", json={"Members": []}, status=200)

        client.create_session("root", "calvin")
        client.close()
        client.get_managers()

        assert client.token is None
        assert "X-Auth-Token" not in responses.calls[1].request.headers

    @responses.activate
    def test_create_session_without_token_header(self, client):
        add_session(token=None)

        with pytest.raises(RedfishException, match="X-Auth-Token"):
            client.create_session("root", "calvin")

    @responses.activate
    def test_create_session_unauthorized(self, client):
        add_session(status=401)

        with pytest.raises(RedfishException, match="HTTP error"):
            client.create_session("root", "wrong")


class TestCollections:
    """Test collection traversal"""

    @responses.activate
    def test_get_managers_follows_member_links(self, client):
        responses.add(
            responses.GET,
            f"{BASE}/redfish/v1/Managers",
            json={"Members": [{"@odata.id": "/redfish/v1/Managers/BMC"}]},
            status=200
        )
        responses.add(
            responses.GET,
            f"{BASE}/redfish/v1/Managers/BMC",
            json={
                "@odata.id": "/redfish/v1/Managers/BMC",
                "Id": "BMC",
                "Name": "Manager",
                "Model": "iDRAC 9",
                "ManagerType": "BMC",
                "PowerState": "On",
                "Status": {"State": "Enabled", "Health": "OK"},
                "LogServices": {"@odata.id": "/redfish/v1/Managers/BMC/LogServices"}
            },
            status=200
        )

        managers = client.get_managers()

        assert len(managers) == 1
        assert managers[0].id == "BMC"
        assert managers[0].status.health == "OK"
        assert managers[0].log_services.odata_id == "/redfish/v1/Managers/BMC/LogServices"

    @responses.activate
    def test_inline_members_are_not_fetched(self, client):
        responses.add(
            responses.GET,
            f"{BASE}/redfish/v1/Managers/BMC/LogServices/SEL/Entries",
            json={"Members": [
                {"@odata.id": "/e/1", "Id": "1", "Severity": "Critical"},
                {"@odata.id": "/e/2", "Id": "2", "Severity": "OK"},
            ]},
            status=200
        )

        entries = client.get_log_entries(make_log_service())

        assert [entry.severity for entry in entries] == ["Critical", "OK"]
        assert len(responses.calls) == 1

    @responses.activate
    def test_failing_member_does_not_drop_siblings(self, client):
        responses.add(
            responses.GET,
            f"{BASE}/redfish/v1/Managers",
            json={"Members": [
                {"@odata.id": "/redfish/v1/Managers/A"},
                {"@odata.id": "/redfish/v1/Managers/B"},
            ]},
            status=200
        )
        responses.add(responses.GET, f"{BASE}/redfish/v1/Managers/A", json={"error": "boom"}, status=500)
        responses.add(
            responses.GET,
            f"{BASE}/redfish/v1/Managers/B",
            json={"@odata.id": "/redfish/v1/Managers/B", "Id": "B", "Status": {"Health": "OK"}},
            status=200
        )

        managers = client.get_managers()

        assert [manager.id for manager in managers] == ["B"]

    @responses.activate
    def test_follows_next_link(self, client):
        entries_url = f"{BASE}/redfish/v1/Managers/BMC/LogServices/SEL/Entries"
        responses.add(
            responses.GET,
            entries_url,
            json={
                "Members": [
                    {"@odata.id": "/e/1", "Id": "1", "Severity": "OK"},
                    {"@odata.id": "/e/2", "Id": "2", "Severity": "Warning"},
                ],
                "Members@odata.nextLink": "/redfish/v1/Managers/BMC/LogServices/SEL/Entries/Page2",
            },
            status=200
        )
        responses.add(
            responses.GET,
            f"{entries_url}/Page2",
            json={"Members": [{"@odata.id": "/e/3", "Id": "3", "Severity": "Critical"}]},
            status=200
        )

        entries = client.get_log_entries(make_log_service())

        assert [entry.severity for entry in entries] == ["OK", "Warning", "Critical"]
        assert len(responses.calls) == 2

    @responses.activate
    def test_next_link_loop_stops(self, client):
        url = f"{BASE}/redfish/v1/Systems"
        responses.add(
            responses.GET,
            url,
            json={
                "Members": [{"@odata.id": "/s/1", "Id": "1"}],
                "Members@odata.nextLink": "/redfish/v1/Systems",
            },
            status=200
        )

        systems = client.get_systems()

        assert len(systems) == 1
        assert len(responses.calls) == 1

    def test_missing_link_returns_empty(self, client):
        manager = make_manager(log_services=False)
        assert client.get_log_services(manager) == []


class TestErrorHandling:
    """Test error mapping to RedfishException"""

    @responses.activate
    def test_timeout(self, client):
        responses.add(responses.GET, f"{BASE}/redfish/v1/Managers", body=ConnectTimeout("timed out"))

        with pytest.raises(RedfishException, match="timed out"):
            client.get_managers()

    @responses.activate
    def test_connection_error(self, client):
        responses.add(responses.GET, f"{BASE}/redfish/v1/Systems", body=ConnectionError("refused"))

        with pytest.raises(RedfishException):
            client.get_systems()

    @responses.activate
    def test_server_error(self, client):
        responses.add(responses.GET, f"{BASE}/redfish/v1/Managers", body="boom", status=500)

        with pytest.raises(RedfishException, match="HTTP error"):
            client.get_managers()

    @responses.activate
    def test_malformed_json(self, client):
        responses.add(responses.GET, f"{BASE}/redfish/v1/Managers", body="<html>", status=200)

        with pytest.raises(RedfishException, match="Malformed JSON"):
            client.get_managers()

    @responses.activate
    def test_invalid_member_is_skipped(self, client):
        responses.add(
            responses.GET,
            f"{BASE}/redfish/v1/Managers",
            json={"Members": [
                {"@odata.id": "/m/1", "Id": "1", "Status": "broken"},
                {"@odata.id": "/m/2", "Id": "2", "Status": {"Health": "OK"}},
            ]},
            status=200
        )

        managers = client.get_managers()

        assert [manager.id for manager in managers] == ["2"]

    @responses.activate
    def test_invalid_collection_payload(self, client):
        responses.add(
            responses.GET,
            f"{BASE}/redfish/v1/Managers",
            json={"Members": "none"},
            status=200
        )

        with pytest.raises(RedfishException, match="Invalid collection"):
            client.get_managers()


class TestOpenConnection:
    """Test connection bootstrap"""

    @responses.activate
    def test_bootstrap_success(self, test_settings):
        responses.add(responses.GET, f"{BASE}/redfish/v1/", json={"Id": "RootService"}, status=200)
        add_session()

        result = open_connection(test_settings)

        assert result.up is True
        assert result.up_value == 1.0
        assert result.host == "bmc.example.com"
        assert result.client.token == "token-123"
        assert result.error is None

    @responses.activate
    def test_bootstrap_auth_failure(self, test_settings):
        responses.add(responses.GET, f"{BASE}/redfish/v1/", json={"Id": "RootService"}, status=200)
        add_session(status=401)

        result = open_connection(test_settings)

        assert result.up is False
        assert result.up_value == 0.0
        assert result.client is None
        assert "HTTP error" in result.error

    @responses.activate
    def test_bootstrap_unreachable(self, test_settings):
        responses.add(responses.GET, f"{BASE}/redfish/v1/", body=ConnectionError("no route to host"))

        result = open_connection(test_settings)

        assert result.up is False
        assert len(responses.calls) == 1

    def test_bootstrap_without_target(self):
        settings = Settings(REDFISH_HOST="", _env_file=None)

        result = open_connection(settings)

        assert result.up is False
        assert result.error == "no target configured"
