from fastapi import APIRouter, HTTPException, status
from ....schemas.quiz_schemas import (
    AnswerIn,
    AnswerOut,
    LifecycleEvent,
    SavedOut,
    ScreenCreateIn,
    ScreenOut,
)
from ....services.quiz_screen import ScreenNotFoundError
from ...deps import ServiceDep

router = APIRouter(prefix="/quiz/sessions", tags=["quiz"])

def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Screen session not found")

@router.post("/", response_model=ScreenOut, status_code=status.HTTP_201_CREATED)
async def create_screen(svc: ServiceDep, payload: ScreenCreateIn | None = None):
    return await svc.create(payload.sessionId if payload else None)

@router.get("/{session_id}", response_model=ScreenOut)
async def get_screen(session_id: str, svc: ServiceDep):
    try:
        return svc.render(session_id)
    except ScreenNotFoundError:
        raise _not_found()

async def _navigate(svc, session_id: str, action: str) -> dict:
    try:
        return svc.dispatch(session_id, action)["screen"]
    except ScreenNotFoundError:
        raise _not_found()

@router.post("/{session_id}/next", response_model=ScreenOut)
async def next_question(session_id: str, svc: ServiceDep):
    return await _navigate(svc, session_id, "next")

@router.post("/{session_id}/previous", response_model=ScreenOut)
async def previous_question(session_id: str, svc: ServiceDep):
    return await _navigate(svc, session_id, "previous")

@router.post("/{session_id}/question", response_model=ScreenOut)
async def tap_question(session_id: str, svc: ServiceDep):
    return await _navigate(svc, session_id, "question")

@router.post("/{session_id}/answer", response_model=AnswerOut)
async def answer(session_id: str, payload: AnswerIn, svc: ServiceDep):
    try:
        return svc.answer(session_id, payload.answer)
    except ScreenNotFoundError:
        raise _not_found()

@router.post("/{session_id}/lifecycle/{event}", status_code=status.HTTP_204_NO_CONTENT)
async def lifecycle(session_id: str, event: LifecycleEvent, svc: ServiceDep):
    try:
        svc.lifecycle(session_id, event)
    except ScreenNotFoundError:
        raise _not_found()
    return None

@router.post("/{session_id}/save", response_model=SavedOut)
async def save_position(session_id: str, svc: ServiceDep):
    try:
        index = await svc.save_instance_state(session_id)
    except ScreenNotFoundError:
        raise _not_found()
    return {"sessionId": session_id, "index": index}

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def destroy_screen(session_id: str, svc: ServiceDep):
    try:
        svc.destroy(session_id)
    except ScreenNotFoundError:
        raise _not_found()
    return None
