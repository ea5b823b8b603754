r"""Operations of the compute service."""

from __future__ import annotations

__all__ = ["Compute", "Network"]

from typing import TYPE_CHECKING

from pydantic import BaseModel

from stackrest.exceptions import StackRestError
from stackrest.request import JsonRequestData

if TYPE_CHECKING:
    from stackrest.client import StackClient

COMPUTE_SERVICE = "compute"
API_NETWORKS = "os-networks"


class Network(BaseModel):
    r"""A labeled network.

    Attributes:
        id: The UUID of the network.
        label: The user-provided name of the network range.
        cidr: The IP range covered by the network.
    """

    id: str
    label: str
    cidr: str | None = None


class _NetworkList(BaseModel):
    networks: list[Network]


class Compute:
    r"""Access to the compute service.

    Args:
        client: The client used to send the requests.
    """

    def __init__(self, client: StackClient) -> None:
        self.client = client

    def list_networks(self) -> list[Network]:
        r"""List the available networks.

        Returns:
            The networks.

        Raises:
            StackRestError: If the networks cannot be listed.
        """
        data = JsonRequestData(response_type=_NetworkList)
        try:
            self.client.send_request("GET", COMPUTE_SERVICE, API_NETWORKS, data)
        except StackRestError as exc:
            raise StackRestError(exc.method, exc.url, "failed to get list of networks") from exc
        if data.response_value is None:
            return []
        return data.response_value.networks
