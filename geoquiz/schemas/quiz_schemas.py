from typing import Literal, Optional
from pydantic import BaseModel, Field

class ScreenCreateIn(BaseModel):
    # reuse a previous id to restore its saved position
    sessionId: Optional[str] = Field(None, min_length=1, max_length=128)

class AnswerIn(BaseModel):
    answer: bool

class ScreenOut(BaseModel):
    sessionId: str
    index: int
    total: int
    prompt: str
    text: str

class ToastOut(BaseModel):
    correct: bool
    message: str
    durationMs: int

class AnswerOut(BaseModel):
    screen: ScreenOut
    toast: ToastOut

class SavedOut(BaseModel):
    sessionId: str
    index: int

LifecycleEvent = Literal["start", "resume", "pause", "stop"]
