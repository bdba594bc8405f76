from pathlib import Path

import db


def test_get_missing_key_returns_none(temp_db_path: Path):
    assert db.get_value("nope") is None


def test_set_overwrites_and_remove(temp_db_path: Path):
    db.set_value("ecolive_theme", "dark")
    assert db.get_value("ecolive_theme") == "dark"

    db.set_value("ecolive_theme", "light")
    assert db.get_value("ecolive_theme") == "light"

    db.remove_value("ecolive_theme")
    assert db.get_value("ecolive_theme") is None
    # removing again is harmless
    db.remove_value("ecolive_theme")


def test_initialize_database_keeps_existing_values(temp_db_path: Path):
    db.set_value("k", "v")
    db.initialize_database()
    assert db.get_value("k") == "v"
