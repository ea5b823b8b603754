r"""Service operations built on ``StackClient``."""

from __future__ import annotations

__all__ = ["Compute", "ContainerContents", "Network", "ObjectStorage"]

from stackrest.services.nova import Compute, Network
from stackrest.services.swift import ContainerContents, ObjectStorage
