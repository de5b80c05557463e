from __future__ import annotations

import pytest

from chirpy.chirps import MAX_CHIRP_LENGTH, validate_chirp
from chirpy.errors import ChirpTooLongError, ValidationError


def test_accepts_body_just_below_limit() -> None:
    body = "a" * (MAX_CHIRP_LENGTH - 1)
    assert validate_chirp(body) == body


@pytest.mark.parametrize("length", [MAX_CHIRP_LENGTH, MAX_CHIRP_LENGTH + 1, 500])
def test_rejects_body_at_or_above_limit(length: int) -> None:
    with pytest.raises(ChirpTooLongError) as excinfo:
        validate_chirp("a" * length)

    assert isinstance(excinfo.value, ValidationError)
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Chirp is too long"


def test_returns_cleaned_body() -> None:
    assert validate_chirp("what a kerfuffle") == "what a ****"


def test_length_is_checked_before_cleaning() -> None:
    # "****" is shorter than the masked word, but the raw body decides.
    body = ("kerfuffle " * 14).rstrip()
    assert len(body) == 139
    assert validate_chirp(body) == " ".join(["****"] * 14)
    with pytest.raises(ChirpTooLongError):
        validate_chirp(body + "!")
