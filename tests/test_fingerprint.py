import hashlib

from news_watch.processing.fingerprint import generate_fingerprint


def test_fingerprint_is_deterministic_sha256_hex() -> None:
    fp = generate_fingerprint("title", "content", "source")
    assert fp == generate_fingerprint("title", "content", "source")
    assert fp == hashlib.sha256("title|content|source".encode("utf-8")).hexdigest()
    assert len(fp) == 64
    assert fp == fp.lower()


def test_fingerprint_only_uses_first_200_content_chars() -> None:
    base = "x" * 200
    assert generate_fingerprint("t", base + "tail-a", "s") == generate_fingerprint("t", base + "tail-b", "s")
    assert generate_fingerprint("t", "y" + base[1:], "s") != generate_fingerprint("t", base, "s")


def test_fingerprint_changes_with_any_single_field() -> None:
    fp = generate_fingerprint("Title", "Body", "Src")
    assert generate_fingerprint("title", "Body", "Src") != fp
    assert generate_fingerprint("Title", "body", "Src") != fp
    assert generate_fingerprint("Title", "Body", "src") != fp


def test_fingerprint_accepts_empty_strings() -> None:
    assert generate_fingerprint("", "", "") == hashlib.sha256(b"||").hexdigest()


def test_fingerprint_handles_arabic_text() -> None:
    fp = generate_fingerprint("قصف قرب دوار حيدر", "تفاصيل", "GazaNewsNow")
    assert len(fp) == 64
