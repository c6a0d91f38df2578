"""
Redfish Client Service - Authenticated access to a BMC's Redfish API.

The client opens one session per target and then only performs read requests.
Every failure (transport, HTTP status, malformed payload) is raised as
RedfishException so collectors can treat them identically.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import requests
from pydantic import ValidationError

from redfish_exporter.config import Settings
from redfish_exporter.models.redfish import (
    ComputerSystem,
    LogEntry,
    LogService,
    Manager,
    MemoryModule,
    RedfishModel,
    ResourceCollection,
)

logger = logging.getLogger(__name__)

SERVICE_ROOT = "/redfish/v1/"
SESSIONS_PATH = "/redfish/v1/SessionService/Sessions"
MANAGERS_PATH = "/redfish/v1/Managers"
SYSTEMS_PATH = "/redfish/v1/Systems"

AUTH_TOKEN_HEADER = "X-Auth-Token"

ModelT = TypeVar("ModelT", bound=RedfishModel)


class RedfishException(Exception):
    """Custom exception for Redfish client errors."""
    pass


class RedfishClient:
    """
    A client for reading inventory from a Redfish service.

    Each call goes through ``requests.request``. The only state kept between
    calls is the session token set once by ``create_session``.
    """

    def __init__(
        self,
        host: str,
        scheme: str = "https",
        timeout: int = 30,
        verify: Union[str, bool] = False,
    ):
        self.host = host
        self.base_url = f"{scheme}://{host}".rstrip('/')
        self.timeout = timeout
        self.verify = verify
        self.headers: Dict[str, str] = {"Accept": "application/json"}
        self.token: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings, host: Optional[str] = None) -> "RedfishClient":
        verify: Union[str, bool] = settings.REDFISH_VERIFY_TLS
        if settings.REDFISH_CA_BUNDLE:
            verify = settings.REDFISH_CA_BUNDLE
        return cls(
            host=host or settings.REDFISH_HOST,
            scheme=settings.REDFISH_SCHEME,
            timeout=settings.REDFISH_TIMEOUT,
            verify=verify,
        )

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            response = requests.request(
                method,
                self._url(path),
                json=json,
                headers=dict(self.headers),
                timeout=self.timeout,
                verify=self.verify
            )
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            raise RedfishException(f"Request to {path} timed out: {e}") from e
        except requests.exceptions.HTTPError as e:
            raise RedfishException(f"HTTP error occurred: {e} - {e.response.text}") from e
        except requests.exceptions.RequestException as e:
            raise RedfishException(f"An error occurred while querying {path}: {e}") from e

    def get_json(self, path: str) -> Dict[str, Any]:
        """GET a resource and return its JSON body."""
        response = self._request("get", path)
        try:
            body = response.json()
        except ValueError as e:
            raise RedfishException(f"Malformed JSON from {path}: {e}") from e
        if not isinstance(body, dict):
            raise RedfishException(f"Unexpected payload from {path}: expected an object")
        return body

    def get_resource(self, path: str, model: Type[ModelT]) -> ModelT:
        body = self.get_json(path)
        try:
            return model.model_validate(body)
        except ValidationError as e:
            raise RedfishException(f"Invalid {model.__name__} payload from {path}: {e}") from e

    def _resolve_member(self, path: str, member: Dict[str, Any], model: Type[ModelT]) -> Optional[ModelT]:
        member_id = member.get("@odata.id")
        if set(member) - {"@odata.id"}:
            try:
                return model.model_validate(member)
            except ValidationError as e:
                raise RedfishException(f"Invalid {model.__name__} member in {path}: {e}") from e
        if member_id:
            return self.get_resource(member_id, model)
        return None

    def get_members(self, path: str, model: Type[ModelT]) -> List[ModelT]:
        """
        Resolve every member of a collection.

        Members that are expanded inline are parsed directly; bare references
        are fetched one by one. ``Members@odata.nextLink`` pages are followed
        until the last one. A member that cannot be fetched or parsed is
        logged and skipped.

        Raises:
            RedfishException: If a collection page itself cannot be read
        """
        resources = []
        visited = set()
        page: Optional[str] = path
        while page and page not in visited:
            visited.add(page)
            body = self.get_json(page)
            try:
                collection = ResourceCollection.model_validate(body)
            except ValidationError as e:
                raise RedfishException(f"Invalid collection payload from {page}: {e}") from e

            for member in collection.members:
                try:
                    resource = self._resolve_member(page, member, model)
                except RedfishException as e:
                    logger.warning(f"Skipping member {member.get('@odata.id', '?')} of {path}: {e}")
                    continue
                if resource is not None:
                    resources.append(resource)

            page = collection.next_link
        return resources

    def service_root(self) -> Dict[str, Any]:
        return self.get_json(SERVICE_ROOT)

    def create_session(self, username: str, password: str) -> str:
        """
        Create an authenticated session and attach its token to the client.

        Returns:
            The session token

        Raises:
            RedfishException: If the session cannot be created
        """
        response = self._request("post", SESSIONS_PATH, json={"UserName": username, "Password": password})
        token = response.headers.get(AUTH_TOKEN_HEADER)
        if not token:
            raise RedfishException(f"Session created without an {AUTH_TOKEN_HEADER} header")
        self.token = token
        self.headers[AUTH_TOKEN_HEADER] = token
        return token

    def get_managers(self) -> List[Manager]:
        return self.get_members(MANAGERS_PATH, Manager)

    def get_systems(self) -> List[ComputerSystem]:
        return self.get_members(SYSTEMS_PATH, ComputerSystem)

    def get_log_services(self, resource: Union[Manager, ComputerSystem]) -> List[LogService]:
        if resource.log_services is None:
            return []
        return self.get_members(resource.log_services.odata_id, LogService)

    def get_log_entries(self, log_service: LogService) -> List[LogEntry]:
        if log_service.entries is None:
            return []
        return self.get_members(log_service.entries.odata_id, LogEntry)

    def get_memory(self, system: ComputerSystem) -> List[MemoryModule]:
        if system.memory is None:
            return []
        return self.get_members(system.memory.odata_id, MemoryModule)

    def close(self) -> None:
        """Forget the session token."""
        self.token = None
        self.headers.pop(AUTH_TOKEN_HEADER, None)


@dataclass
class ConnectionResult:
    """Outcome of connection bootstrap for one target."""
    host: str
    client: Optional[RedfishClient] = None
    up: bool = False
    error: Optional[str] = None

    @property
    def up_value(self) -> float:
        return 1.0 if self.up and self.client is not None else 0.0


def open_connection(settings: Settings, host: Optional[str] = None) -> ConnectionResult:
    """
    Open an authenticated Redfish session for a target.

    Never raises for remote failures: the outcome is returned as a
    ConnectionResult and the caller decides whether to serve degraded
    responses or stop.
    """
    target = host or settings.REDFISH_HOST
    if not target:
        logger.error("No Redfish target configured")
        return ConnectionResult(host="", error="no target configured")

    client = RedfishClient.from_settings(settings, host=target)
    logger.info(f"Connecting to Redfish service at {client.base_url}")

    try:
        client.service_root()
        client.create_session(settings.REDFISH_USERNAME, settings.REDFISH_PASSWORD)
    except RedfishException as e:
        logger.error(f"Failed to open Redfish session with {target}: {e}")
        client.close()
        return ConnectionResult(host=target, error=str(e))

    return ConnectionResult(host=target, client=client, up=True)
