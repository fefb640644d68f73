from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Pacticipant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: StrictStr


class WebhookEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class Request(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str = ""
    method: str = ""
    username: Optional[str] = None
    password: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Any = None

    @property
    def has_body(self) -> bool:
        # an explicit JSON null counts as a body
        return "body" in self.model_fields_set

    def broker_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude={"body"}, exclude_none=True)
        if self.has_body:
            payload["body"] = self.body
        return payload


class Webhook(BaseModel):
    """A rule that sends ``request`` whenever one of ``events`` occurs between
    ``consumer`` and ``provider``.

    ``id`` is assigned by the broker on creation and never sent back to it in
    a request body; it travels in the resource URL instead.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    description: str = ""
    enabled: bool = True
    provider: Optional[Pacticipant] = None
    consumer: Optional[Pacticipant] = None
    events: List[WebhookEvent] = Field(default_factory=list)
    request: Request

    def broker_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude={"id", "request"}, exclude_none=True)
        payload["request"] = self.request.broker_payload()
        return payload
