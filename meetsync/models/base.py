"""Base model for wire-facing data and the millisecond clock."""

import time
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class WireModel(BaseModel):
    """Base class for models exchanged with clients.

    Provides:
    - camelCase aliases on the wire (``userId``), snake_case in Python
    - acceptance of either spelling on input
    - ``to_wire`` for JSON-ready dictionaries

    String values are kept exactly as received; relayed SDP bodies end in
    CRLF and must reach the peer unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict using wire names."""
        return self.model_dump(mode="json", by_alias=True)


def fill_display_name(data: Any) -> Any:
    """Default a missing or blank display name to the user id.

    Used as a ``mode="before"`` validator so it also works on frozen models.
    """
    if not isinstance(data, dict):
        return data
    name = data.get("displayName", data.get("display_name"))
    if isinstance(name, str) and name.strip():
        return data
    data = {k: v for k, v in data.items() if k not in ("displayName", "display_name")}
    data["displayName"] = data.get("userId", data.get("user_id"))
    return data
