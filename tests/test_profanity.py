from __future__ import annotations

import pytest

from chirpy.profanity import MASK, PROFANE_WORDS, clean_profanity


def test_masks_banned_word() -> None:
    body = "This is a kerfuffle opinion I need to share with the world"
    assert clean_profanity(body) == "This is a **** opinion I need to share with the world"


@pytest.mark.parametrize("token", ["Kerfuffle", "SHARBERT", "fOrNaX", "fornax!", "unkerfuffled"])
def test_masks_tokens_containing_banned_word_case_insensitively(token: str) -> None:
    assert clean_profanity(f"hello {token} there") == f"hello {MASK} there"


def test_leaves_clean_text_untouched() -> None:
    body = "I had something interesting for breakfast"
    assert clean_profanity(body) == body


def test_empty_string() -> None:
    assert clean_profanity("") == ""


def test_only_single_spaces_separate_tokens() -> None:
    assert clean_profanity("nice\tkerfuffle") == MASK
    assert clean_profanity("a  sharbert") == f"a  {MASK}"
    assert clean_profanity("fornax\nkerfuffle ok") == f"{MASK} ok"


def test_is_idempotent() -> None:
    body = "Sharbert and fornax walk into a kerfuffle bar"
    once = clean_profanity(body)
    assert clean_profanity(once) == once
    assert not any(word in once.lower() for word in PROFANE_WORDS)
