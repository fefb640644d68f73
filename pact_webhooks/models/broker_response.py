from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Link(BaseModel):
    model_config = ConfigDict(extra="ignore")

    href: str
    title: Optional[str] = None
    name: Optional[str] = None


class BrokerResponse(BaseModel):
    """HAL envelope returned by the broker on create and update."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    links: Dict[str, Link] = Field(default_factory=dict, alias="_links")
