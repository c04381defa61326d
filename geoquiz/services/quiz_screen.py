import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, MutableMapping, Optional, Sequence

from ..domain.model import Question, QuizState
from ..domain.question_bank import QUESTION_BANK, prompt_text
from ..repositories.position_repository import PositionRepository

log = logging.getLogger(__name__)

LIFECYCLE_EVENTS = ("start", "resume", "pause", "stop")

# Each user action maps to exactly one QuizState call
NAVIGATION: Dict[str, Callable[[QuizState], None]] = {
    "next": QuizState.advance,
    "previous": QuizState.retreat,
    "question": QuizState.advance,  # tap on the question text
}
ANSWERS: Dict[str, bool] = {
    "true": True,
    "false": False,
}


class ScreenNotFoundError(KeyError):
    pass


class UnknownActionError(ValueError):
    pass


@dataclass
class Screen:
    state: QuizState
    # open WebSocket connections driving this screen
    attached: int = 0
    touched_at: float = field(default_factory=time.monotonic)


class QuizScreenService:
    """
    Controller for the quiz screen.

    Owns one QuizState per active screen session, binds user actions to
    state calls, and saves/restores the cursor through the repository so a
    recreated screen resumes on the same question. All state mutation is
    synchronous; only repository calls are awaited.

    Screens with no attached socket that go unused for ``idle_ttl_seconds``
    are evicted on the next create. Their saved position expires in Redis
    after the same period.
    """

    def __init__(
        self,
        repo: PositionRepository,
        screens: MutableMapping[str, Screen],
        questions: Sequence[Question] = QUESTION_BANK,
        toast_duration_ms: int = 2000,
        idle_ttl_seconds: float = 6 * 60 * 60,
    ) -> None:
        self.repo = repo
        self.screens = screens
        self.questions = questions
        self.toast_duration_ms = toast_duration_ms
        self.idle_ttl_seconds = idle_ttl_seconds

    def _get(self, session_id: str) -> QuizState:
        try:
            screen = self.screens[session_id]
        except KeyError:
            raise ScreenNotFoundError(session_id) from None
        screen.touched_at = time.monotonic()
        return screen.state

    def _reuse(self, session_id: str, attach: bool) -> dict:
        if attach:
            self.screens[session_id].attached += 1
        return self.render(session_id)

    # --- lifecycle ---

    async def create(self, session_id: Optional[str] = None, attach: bool = False) -> dict:
        session_id = session_id or str(uuid.uuid4())
        self.sweep()
        if session_id in self.screens:
            log.debug("create() on active screen %s, reusing state", session_id)
            return self._reuse(session_id, attach)

        state = QuizState(self.questions)
        saved = await self.repo.load(session_id)
        # another create for this id may have finished while we waited
        if session_id in self.screens:
            log.debug("create() raced on screen %s, reusing state", session_id)
            return self._reuse(session_id, attach)

        if saved is not None:
            restored = state.restore_position(saved)
            log.debug("Restored screen %s: saved=%s index=%s", session_id, saved, restored)
        self.screens[session_id] = Screen(state, attached=1 if attach else 0)
        log.debug("create() called for screen %s", session_id)
        return self.render(session_id)

    def detach(self, session_id: str) -> bool:
        """Drops one socket from the screen; True when it was the last one."""
        screen = self.screens.get(session_id)
        if screen is None:
            return False
        screen.attached = max(screen.attached - 1, 0)
        return screen.attached == 0

    def lifecycle(self, session_id: str, event: str) -> None:
        if event not in LIFECYCLE_EVENTS:
            raise UnknownActionError(f"Unknown lifecycle event: {event}")
        self._get(session_id)
        log.debug("%s() called for screen %s", event, session_id)

    async def save_instance_state(self, session_id: str) -> int:
        index = self._get(session_id).serialize_position()
        await self.repo.save(session_id, index)
        log.info("save_instance_state for screen %s: index=%s", session_id, index)
        return index

    def destroy(self, session_id: str) -> None:
        self._get(session_id)
        del self.screens[session_id]
        log.debug("destroy() called for screen %s", session_id)

    def discard(self, session_id: str) -> None:
        """destroy() that tolerates a screen already gone."""
        if self.screens.pop(session_id, None) is not None:
            log.debug("destroy() called for screen %s", session_id)

    def sweep(self, now: Optional[float] = None) -> int:
        now = time.monotonic() if now is None else now
        idle = [
            sid
            for sid, screen in self.screens.items()
            if screen.attached == 0 and now - screen.touched_at > self.idle_ttl_seconds
        ]
        for sid in idle:
            del self.screens[sid]
        if idle:
            log.info("Evicted %d idle screens", len(idle))
        return len(idle)

    # --- actions ---

    def dispatch(self, session_id: str, action: str) -> dict:
        state = self._get(session_id)
        if action in NAVIGATION:
            NAVIGATION[action](state)
            return {"screen": self.render(session_id)}
        if action in ANSWERS:
            return self.answer(session_id, ANSWERS[action])
        raise UnknownActionError(f"Unknown action: {action}")

    def answer(self, session_id: str, user_guess: bool) -> dict:
        correct = self._get(session_id).check_answer(user_guess)
        message = prompt_text("correct_toast" if correct else "incorrect_toast")
        return {
            "screen": self.render(session_id),
            "toast": {
                "correct": correct,
                "message": message,
                "durationMs": self.toast_duration_ms,
            },
        }

    def render(self, session_id: str) -> dict:
        state = self._get(session_id)
        question = state.current_question()
        return {
            "sessionId": session_id,
            "index": state.current_index,
            "total": len(state),
            "prompt": question.prompt,
            "text": prompt_text(question.prompt),
        }
