"""
One-time image captcha challenges.

Challenges live in process memory, so they are only visible to the process that
issued them. Running more than one server instance needs a shared store such
as Redis in place of ``CaptchaStore``.
"""
import base64
import logging
import secrets
import string
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from captcha.image import ImageCaptcha

from ..config.settings import get_settings

logger = logging.getLogger(__name__)

# Confusable characters are left out of the alphabet
CAPTCHA_ALPHABET = "".join(
    c for c in string.ascii_lowercase + string.digits if c not in "0o1il"
)


@dataclass
class _Challenge:
    answer: str
    expires_at: float


@dataclass
class CaptchaChallenge:
    captcha_id: str
    image: str  # data URI


class CaptchaStore:
    """Time-boxed, single-use answer store keyed by an opaque id."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._challenges: Dict[str, _Challenge] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._challenges)

    def put(self, answer: str) -> str:
        captcha_id = secrets.token_urlsafe(16)
        with self._lock:
            self._sweep_locked()
            self._challenges[captcha_id] = _Challenge(
                answer=answer.lower(),
                expires_at=self._clock() + self.ttl_seconds,
            )
        return captcha_id

    def verify(self, captcha_id: Optional[str], user_input: Optional[str]) -> bool:
        """
        Checks an answer case-insensitively. The challenge is consumed by the
        first attempt whatever its outcome.
        """
        if not captcha_id or user_input is None:
            return False
        with self._lock:
            challenge = self._challenges.pop(captcha_id, None)
        if challenge is None:
            return False
        if self._clock() > challenge.expires_at:
            return False
        return secrets.compare_digest(
            challenge.answer.encode("utf-8"), user_input.strip().lower().encode("utf-8")
        )

    def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked()

    def _sweep_locked(self) -> int:
        now = self._clock()
        expired = [cid for cid, c in self._challenges.items() if now > c.expires_at]
        for cid in expired:
            del self._challenges[cid]
        return len(expired)


def random_answer(length: int) -> str:
    return "".join(secrets.choice(CAPTCHA_ALPHABET) for _ in range(length))


def render_captcha_image(text: str) -> str:
    settings = get_settings()
    generator = ImageCaptcha(width=settings.captcha_width, height=settings.captcha_height)
    png = generator.generate(text, format="png").getvalue()
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def issue_captcha(store: "CaptchaStore") -> CaptchaChallenge:
    settings = get_settings()
    answer = random_answer(settings.captcha_length)
    captcha_id = store.put(answer)
    logger.debug("Issued captcha %s (%d pending)", captcha_id, len(store))
    return CaptchaChallenge(captcha_id=captcha_id, image=render_captcha_image(answer))


captcha_store = CaptchaStore(ttl_seconds=get_settings().captcha_ttl_seconds)


def get_captcha_store() -> CaptchaStore:
    return captcha_store
