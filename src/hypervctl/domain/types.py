"""Records decoded from PowerShell output."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class Vm(BaseModel):
    """A Hyper-V virtual machine as listed by ``Get-VM``.

    Field aliases match the PowerShell property names (``Id``, ``Name``).
    """

    model_config = {"frozen": True, "extra": "ignore"}

    id: UUID = Field(alias="Id")
    name: str = Field(alias="Name", strict=True)
