from pydantic import BaseModel, Field
from typing import Annotated, Literal

from ..schemas.quiz_schemas import ScreenOut, ToastOut


class ClientAction(BaseModel):
    type: Literal["action"] = "action"
    action: Literal["next", "previous", "question", "true", "false"]


class ClientSave(BaseModel):
    type: Literal["save"] = "save"


class ServerScreen(ScreenOut):
    type: Literal["screen"] = "screen"


class ServerToast(ToastOut):
    type: Literal["toast"] = "toast"


class ServerSaved(BaseModel):
    type: Literal["saved"] = "saved"
    index: int


class ServerError(BaseModel):
    type: Literal["error"] = "error"
    message: str


# the "type" tag must be present in every client message
EventPayload = Annotated[ClientAction | ClientSave, Field(discriminator="type")]
