r"""Operations of the object storage service.

Containers and objects are addressed as ``/<container>`` and
``/<container>/<object>`` below the ``object-store`` service root.
"""

from __future__ import annotations

__all__ = ["ContainerContents", "ObjectStorage"]

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from stackrest.exceptions import StackRestError
from stackrest.request import BinaryRequestData, JsonRequestData

if TYPE_CHECKING:
    import httpx

    from stackrest.client import StackClient
    from stackrest.request import RequestData

logger: logging.Logger = logging.getLogger(__name__)

OBJECT_STORE_SERVICE = "object-store"


class ContainerContents(BaseModel):
    r"""An entry of a container listing.

    A listing made with a ``delimiter`` rolls the names sharing a prefix
    up into pseudo-directory entries. Such an entry only has ``subdir``
    set, and the object fields keep their empty defaults.
    """

    name: str = ""
    hash: str = ""
    length_bytes: int = Field(default=0, alias="bytes")
    content_type: str = ""
    last_modified: str = ""
    subdir: str | None = None


class ObjectStorage:
    r"""Access to the object storage service.

    Args:
        client: The client used to send the requests.

    Example:
        ```pycon
        >>> from stackrest import StackClient
        >>> from stackrest.services import ObjectStorage
        >>> client = StackClient(
        ...     auth_token="secret", endpoints={"object-store": "https://swift.example.com/v1/acct"}
        ... )
        >>> storage = ObjectStorage(client)
        >>> storage.put_object("photos", "cat.jpg", b"...")  # doctest: +SKIP
        >>> storage.get_object("photos", "cat.jpg")  # doctest: +SKIP
        b'...'

        ```
    """

    def __init__(self, client: StackClient) -> None:
        self.client = client

    def create_container(self, container: str) -> None:
        r"""Create a container.

        The container is made publicly readable.

        Args:
            container: The container name.

        Raises:
            StackRestError: If the container cannot be created.
        """
        data = JsonRequestData(headers={"X-Container-Read": ".r:*"}, expected_status=(201, 202))
        try:
            self.client.send_request("PUT", OBJECT_STORE_SERVICE, f"/{container}", data)
        except StackRestError as exc:
            raise StackRestError(
                exc.method, exc.url, f"failed to create container: {container}"
            ) from exc

    def delete_container(self, container: str) -> None:
        r"""Delete a container.

        Args:
            container: The container name.

        Raises:
            StackRestError: If the container cannot be deleted.
        """
        data = JsonRequestData(expected_status=(204,))
        try:
            self.client.send_request("DELETE", OBJECT_STORE_SERVICE, f"/{container}", data)
        except StackRestError as exc:
            raise StackRestError(
                exc.method, exc.url, f"failed to delete container: {container}"
            ) from exc

    def head_object(self, container: str, name: str) -> httpx.Headers:
        r"""Retrieve the metadata and standard HTTP headers of an object.

        Args:
            container: The container name.
            name: The object name.

        Returns:
            The response headers.
        """
        data = BinaryRequestData()
        self._touch_object("HEAD", container, name, data)
        return data.response_headers

    def get_object(self, container: str, name: str) -> bytes:
        r"""Retrieve the content of an object.

        Args:
            container: The container name.
            name: The object name.

        Returns:
            The object content.
        """
        data = BinaryRequestData()
        self._touch_object("GET", container, name, data)
        return data.response_data or b""

    def put_object(self, container: str, name: str, content: bytes) -> None:
        r"""Write, or overwrite, the content of an object.

        Args:
            container: The container name.
            name: The object name.
            content: The object content.
        """
        self._touch_object(
            "PUT", container, name, BinaryRequestData(data=content, expected_status=(201,))
        )

    def delete_object(self, container: str, name: str) -> None:
        r"""Remove an object permanently.

        Args:
            container: The container name.
            name: The object name.
        """
        self._touch_object("DELETE", container, name, BinaryRequestData(expected_status=(204,)))

    def list_objects(
        self,
        container: str,
        prefix: str = "",
        delimiter: str = "",
        marker: str = "",
        limit: int = 0,
    ) -> list[ContainerContents]:
        r"""List the objects of a container.

        Args:
            container: The container name.
            prefix: Only list the objects whose name starts with ``prefix``.
            delimiter: Roll up the names sharing a prefix up to ``delimiter``.
            marker: Only list the objects whose name sorts after ``marker``.
            limit: Maximum number of entries, or 0 for the service default.

        Returns:
            The container entries.

        Raises:
            StackRestError: If the container cannot be listed.
        """
        params = [("prefix", prefix), ("delimiter", delimiter), ("marker", marker)]
        if limit > 0:
            params.append(("limit", str(limit)))
        data = JsonRequestData(params=params, response_type=list[ContainerContents])
        try:
            self.client.send_request("GET", OBJECT_STORE_SERVICE, f"/{container}", data)
        except StackRestError as exc:
            raise StackRestError(
                exc.method, exc.url, f"failed to list contents of container: {container}"
            ) from exc
        return data.response_value or []

    def url(self, container: str, name: str) -> str:
        r"""Return the public, unsigned URL of an object.

        The URL only works for publicly readable containers.

        Args:
            container: The container name.
            name: The object name.

        Returns:
            The object URL.
        """
        return self.client.make_service_url(OBJECT_STORE_SERVICE, container, name)

    def _touch_object(self, method: str, container: str, name: str, data: RequestData) -> None:
        logger.debug(f"{method} object {name} of container {container}")
        try:
            self.client.send_request(method, OBJECT_STORE_SERVICE, f"/{container}/{name}", data)
        except StackRestError as exc:
            raise StackRestError(
                exc.method,
                exc.url,
                f"failed to {method} object {name} from container {container}",
            ) from exc
