from __future__ import annotations

from adapters.sqlite_storage import SQLiteStorage


def _storage(tmp_path) -> SQLiteStorage:
    storage = SQLiteStorage(str(tmp_path / "relink.db"))
    storage.init_db()
    return storage


def test_set_get_and_overwrite_credential(tmp_path) -> None:
    storage = _storage(tmp_path)

    storage.set_credential(1, "  first-key ")
    assert storage.get_credential(1) == "first-key"
    assert storage.has_credential(1)

    storage.set_credential(1, "second-key")
    assert storage.get_credential(1) == "second-key"
    assert storage.count_users() == 1


def test_unknown_user_has_no_credential(tmp_path) -> None:
    storage = _storage(tmp_path)
    assert storage.get_credential(99) is None
    assert not storage.has_credential(99)
    assert storage.get_stats(99) is None


def test_empty_credential_is_rejected(tmp_path) -> None:
    storage = _storage(tmp_path)
    for user_id, key in ((1, ""), (1, "   "), (0, "key")):
        try:
            storage.set_credential(user_id, key)
        except ValueError:
            continue
        raise AssertionError(f"expected ValueError for {user_id!r}, {key!r}")
    assert storage.count_users() == 0


def test_remove_credential(tmp_path) -> None:
    storage = _storage(tmp_path)
    storage.set_credential(1, "k")

    assert storage.remove_credential(1) is True
    assert storage.remove_credential(1) is False
    assert storage.get_credential(1) is None


def test_stats_accumulate(tmp_path) -> None:
    storage = _storage(tmp_path)
    storage.set_credential(1, "k")

    stats = storage.get_stats(1)
    assert stats is not None and stats.total_urls_shortened == 0

    storage.update_stats(1, 3)
    storage.update_stats(1)
    stats = storage.get_stats(1)
    assert stats is not None
    assert stats.total_urls_shortened == 4
    assert stats.first_use is not None and stats.last_use is not None
    assert stats.last_use >= stats.first_use


def test_stats_without_key_create_row(tmp_path) -> None:
    storage = _storage(tmp_path)
    storage.update_stats(5, 2)
    stats = storage.get_stats(5)
    assert stats is not None and stats.total_urls_shortened == 2
    assert storage.count_users() == 0


def test_list_user_ids(tmp_path) -> None:
    storage = _storage(tmp_path)
    storage.set_credential(3, "c")
    storage.set_credential(1, "a")
    assert storage.list_user_ids() == [1, 3]
    assert storage.count_users() == 2
