"""
Redfish Resource Models - Typed views over Redfish JSON payloads.

Only the fields the collectors read are modelled; everything else in a payload
is ignored. Field names follow the Redfish schema through aliases, and string
identity fields default to "" so they can always be used as label values.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RedfishModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class ODataLink(RedfishModel):
    """Reference to another resource."""
    odata_id: str = Field(..., alias="@odata.id", description="Resource URI")


class ResourceCollection(RedfishModel):
    """Redfish collection (Managers, Systems, LogServices, Entries, Memory)."""
    odata_id: Optional[str] = Field(None, alias="@odata.id")
    name: Optional[str] = Field(None, alias="Name")
    members: List[Dict[str, Any]] = Field(default_factory=list, alias="Members")
    next_link: Optional[str] = Field(None, alias="Members@odata.nextLink")


class Status(RedfishModel):
    """Common Redfish Status object."""
    state: Optional[str] = Field(None, alias="State", description="Enabled, Disabled, Absent, ...")
    health: Optional[str] = Field(None, alias="Health", description="OK, Warning, Critical")


class Resource(RedfishModel):
    """Base for resources that carry an identity and a status."""
    odata_id: Optional[str] = Field(None, alias="@odata.id")
    id: str = Field("", alias="Id")
    name: str = Field("", alias="Name")
    status: Status = Field(default_factory=Status, alias="Status")

    @field_validator("id", "name", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _missing_status(cls, value):
        return {} if value is None else value


class Manager(Resource):
    model: str = Field("", alias="Model")
    manager_type: str = Field("", alias="ManagerType")
    power_state: Optional[str] = Field(None, alias="PowerState")
    log_services: Optional[ODataLink] = Field(None, alias="LogServices")

    @field_validator("model", "manager_type", mode="before")
    @classmethod
    def _none_to_empty_str(cls, value):
        return "" if value is None else value


class LogService(Resource):
    entries: Optional[ODataLink] = Field(None, alias="Entries")


class LogEntry(Resource):
    severity: str = Field("", alias="Severity", description="OK, Warning, Critical")
    message: Optional[str] = Field(None, alias="Message")

    @field_validator("severity", mode="before")
    @classmethod
    def _none_to_empty_severity(cls, value):
        return "" if value is None else value


class ComputerSystem(Resource):
    power_state: Optional[str] = Field(None, alias="PowerState")
    memory: Optional[ODataLink] = Field(None, alias="Memory")
    log_services: Optional[ODataLink] = Field(None, alias="LogServices")


class MemoryModule(Resource):
    capacity_mib: Optional[float] = Field(None, alias="CapacityMiB")
    memory_device_type: str = Field("", alias="MemoryDeviceType")
    manufacturer: Optional[str] = Field(None, alias="Manufacturer")

    @field_validator("memory_device_type", mode="before")
    @classmethod
    def _none_to_empty_type(cls, value):
        return "" if value is None else value
