from datetime import timedelta

from streakquest.config import Settings
from streakquest.security import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_round_trip():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong", hashed)


def test_token_is_bound_to_settings_secret():
    settings = Settings(SECRET_KEY="one")
    token = create_access_token({"sub": "7"}, settings)

    assert decode_access_token(token, settings)["sub"] == "7"
    assert decode_access_token(token, Settings(SECRET_KEY="two")) is None


def test_expired_token_is_rejected():
    settings = Settings(SECRET_KEY="one")
    token = create_access_token({"sub": "7"}, settings, expires_delta=timedelta(seconds=-1))

    assert decode_access_token(token, settings) is None
