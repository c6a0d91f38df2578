from .redfish import RedfishClient, RedfishException, ConnectionResult, open_connection

__all__ = ["RedfishClient", "RedfishException", "ConnectionResult", "open_connection"]
