"""Progress notifications emitted while a transformer runs."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class ProgressEvent(BaseModel):
    """Transient notification consumed by the UI collaborator. Never persisted."""

    model_config = ConfigDict(frozen=True)

    type: Literal["execution"] = "execution"
    sub_type: Literal["currentInput", "progress", "outputCreated"]
    file_path: Optional[str] = None
    output_uri: Optional[str] = None
    message: Optional[str] = None
