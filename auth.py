from __future__ import annotations

import config
import db
from constants import LOGIN_KEY


def check_credentials(username: str, password: str) -> bool:
    return username.strip() == config.DEMO_USERNAME and password == config.DEMO_PASSWORD


def login(username: str, password: str) -> bool:
    if not check_credentials(username, password):
        return False
    db.set_value(LOGIN_KEY, "true")
    return True


def logout() -> None:
    db.remove_value(LOGIN_KEY)


def is_logged_in() -> bool:
    return db.get_value(LOGIN_KEY) == "true"
