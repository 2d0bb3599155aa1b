"""
Unit tests for password hashing, session tokens and the captcha store.
"""
from datetime import timedelta

from jose import jwt

from easyjob_app.backend import security
from easyjob_app.backend.services.captcha_service import (
    CAPTCHA_ALPHABET,
    CaptchaStore,
    issue_captcha,
    random_answer,
)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = security.get_password_hash("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert security.verify_password("s3cret-pass", hashed)
        assert not security.verify_password("wrong-pass", hashed)

    def test_same_password_hashes_differently(self):
        assert security.get_password_hash("repeat-me") != security.get_password_hash("repeat-me")

    def test_malformed_hash_does_not_verify(self):
        assert not security.verify_password("anything", "not-a-bcrypt-hash")


class TestSessionTokens:

    def test_token_round_trip(self):
        token = security.create_access_token("user-1", "user@example.com")

        assert security.decode_access_token(token) == {"user_id": "user-1", "email": "user@example.com"}

    def test_expired_token_is_rejected(self):
        token = security.create_access_token("user-1", "user@example.com", expires_delta=timedelta(seconds=-5))

        assert security.decode_access_token(token) is None

    def test_tampered_token_is_rejected(self):
        token = security.create_access_token("user-1", "user@example.com")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        assert security.decode_access_token(tampered) is None

    def test_token_signed_with_other_key_is_rejected(self):
        forged = jwt.encode({"sub": "user-1", "email": "user@example.com"}, "another-key", algorithm="HS256")

        assert security.decode_access_token(forged) is None

    def test_token_without_email_is_rejected(self):
        token = jwt.encode({"sub": "user-1"}, security.SECRET_KEY, algorithm=security.ALGORITHM)

        assert security.decode_access_token(token) is None

    def test_garbage_is_rejected(self):
        assert security.decode_access_token("not.a.token") is None


class TestCaptchaStore:

    def test_correct_answer_verifies_case_insensitively(self):
        store = CaptchaStore(ttl_seconds=300)
        captcha_id = store.put("aB3x")

        assert store.verify(captcha_id, "  AB3X ")

    def test_captcha_is_single_use(self):
        store = CaptchaStore(ttl_seconds=300)
        captcha_id = store.put("abcd")

        assert store.verify(captcha_id, "abcd")
        assert not store.verify(captcha_id, "abcd")

    def test_wrong_answer_consumes_captcha(self):
        store = CaptchaStore(ttl_seconds=300)
        captcha_id = store.put("abcd")

        assert not store.verify(captcha_id, "wxyz")
        assert not store.verify(captcha_id, "abcd")

    def test_expired_captcha_fails(self):
        clock = FakeClock()
        store = CaptchaStore(ttl_seconds=300, clock=clock)
        captcha_id = store.put("abcd")

        clock.now += 301
        assert not store.verify(captcha_id, "abcd")

    def test_expired_entries_swept_on_issue(self):
        clock = FakeClock()
        store = CaptchaStore(ttl_seconds=300, clock=clock)
        store.put("abcd")
        store.put("efgh")

        clock.now += 301
        store.put("jkmn")
        assert len(store) == 1

    def test_unknown_or_missing_input_fails(self):
        store = CaptchaStore(ttl_seconds=300)

        assert not store.verify("missing", "abcd")
        assert not store.verify(None, "abcd")
        assert not store.verify(store.put("abcd"), None)

    def test_non_ascii_answer_does_not_raise(self):
        store = CaptchaStore(ttl_seconds=300)

        assert not store.verify(store.put("abcd"), "äbcd")

    def test_random_answer_avoids_confusable_characters(self):
        answer = random_answer(200)

        assert len(answer) == 200
        assert not set(answer) & set("0o1il")
        assert set(answer) <= set(CAPTCHA_ALPHABET)

    def test_issue_captcha_renders_png(self):
        store = CaptchaStore(ttl_seconds=300)
        challenge = issue_captcha(store)

        assert challenge.image.startswith("data:image/png;base64,")
        assert len(store) == 1
