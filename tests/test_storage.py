from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from cyberbot.errors import ValidationError
from cyberbot.storage import MemoryStore, format_profile, parse_line


def test_record_keyword_counts_and_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    store = MemoryStore(path)
    for _ in range(4):
        store.record_keyword("Password")

    assert store.get_keyword_count("password") == 4
    assert store.get_keyword_count("phishing") == 0

    reloaded = MemoryStore(path)
    assert reloaded.get_keyword_count("password") == 4


def test_record_keyword_ignores_blank_input(tmp_path: Path) -> None:
    store = MemoryStore(tmp_path / "memory.txt")

    assert store.record_keyword("   ") == 0
    assert store.record_keyword(None) == 0
    assert store.profile.keyword_counts == {}


def test_malformed_lines_are_skipped_on_load(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    path.write_text(
        "password:3\n"
        "foo:bar\n"
        ":5\n"
        "phishing:-1\n"
        "just some words\n"
        "[interest] vpn\n"
        "[favorite] Lock your screen\n"
        "email:2\n",
        encoding="utf-8",
    )

    store = MemoryStore(path)

    assert store.profile.keyword_counts == {"password": 3, "email": 2}
    assert store.current_interest == "vpn"
    assert store.favorites == ["Lock your screen"]


def test_missing_file_is_created_empty(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "memory.txt"
    store = MemoryStore(path)

    assert path.exists()
    assert store.profile.keyword_counts == {}
    assert not store.has_interest()


def test_explicit_load_reads_the_configured_file(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    store = MemoryStore(path, autoload=False)
    path.write_text("wifi:2\n[interest] wifi\n", encoding="utf-8")

    store.load()

    assert store.get_keyword_count("wifi") == 2
    assert store.current_interest == "wifi"


def test_save_rewrites_the_whole_file(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    path.write_text("edited by hand\nwifi:1\n", encoding="utf-8")
    store = MemoryStore(path)

    store.record_keyword("vpn")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert "edited by hand" not in lines
    assert lines == ["wifi:1", "vpn:1"]


def test_load_merges_without_double_counting(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    path.write_text("scam:2\n[favorite] Use 2FA\n", encoding="utf-8")
    store = MemoryStore(path)

    store.load()
    store.load()

    assert store.get_keyword_count("scam") == 2
    assert store.favorites == ["Use 2FA"]


def test_set_name_validates_and_is_not_persisted(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    store = MemoryStore(path)

    assert store.set_name("  Alice Smith ") == "Alice Smith"
    store.record_keyword("privacy")
    assert "Alice" not in path.read_text(encoding="utf-8")

    for bad in ("", "   ", "R2D2", "bob!", None):
        with pytest.raises(ValidationError):
            store.set_name(bad)
    assert store.name == "Alice Smith"


def test_interest_is_normalised_and_persisted(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    store = MemoryStore(path)

    with pytest.raises(ValidationError):
        store.set_interest("  ")
    assert not store.has_interest()

    store.set_interest(" Phishing ")
    assert store.current_interest == "phishing"
    assert store.is_current_interest("PHISHING")
    assert "[interest] phishing" in path.read_text(encoding="utf-8")
    assert MemoryStore(path).current_interest == "phishing"


def test_favorites_append_in_order(tmp_path: Path) -> None:
    path = tmp_path / "memory.txt"
    store = MemoryStore(path)

    store.add_favorite("Use a password manager ")
    store.add_favorite("Check links before clicking")
    with pytest.raises(ValidationError):
        store.add_favorite("   ")

    assert MemoryStore(path).favorites == ["Use a password manager", "Check links before clicking"]


def test_unreadable_file_degrades_to_session_memory(tmp_path: Path) -> None:
    warnings: List[str] = []
    store = MemoryStore(tmp_path, on_warning=warnings.append)

    assert not store.persistent
    assert len(warnings) == 1
    assert store.record_keyword("password") == 1


def test_write_failure_warns_once_and_keeps_counting(tmp_path: Path) -> None:
    warnings: List[str] = []
    store = MemoryStore(tmp_path / "memory.txt", on_warning=warnings.append)
    blocked = tmp_path / "blocked"
    blocked.mkdir()
    store.path = blocked

    store.record_keyword("vpn")
    store.record_keyword("vpn")

    assert len(warnings) == 1
    assert "save failed" in warnings[0]
    assert not store.persistent
    assert store.get_keyword_count("vpn") == 2


def test_session_only_store_never_touches_disk(tmp_path: Path) -> None:
    store = MemoryStore(None)
    store.record_keyword("https")

    assert store.get_keyword_count("https") == 1
    assert list(tmp_path.iterdir()) == []


def test_line_codec() -> None:
    assert parse_line("password:7") == ("count", "password", 7)
    assert parse_line("  ") is None
    assert parse_line("password:seven") is None
    assert parse_line("[interest]") is None
    assert parse_line("[favorite] Back up: files") == ("favorite", "Back up: files", "Back up: files")

    store = MemoryStore(None)
    store.record_keyword("email")
    store.set_interest("email")
    store.add_favorite("Verify senders")
    assert format_profile(store.profile) == ["email:1", "[interest] email", "[favorite] Verify senders"]
