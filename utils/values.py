from __future__ import annotations

import random
from typing import Optional


class InvalidSensorInput(ValueError):
    """Form input that cannot be stored; the message is shown to the user."""


class AutoValueConfirmationRequired(Exception):
    """No value was typed and the user has not yet agreed to a generated one."""


def random_demo_value() -> float:
    """Demo reading between 0.0 and 100.0, one decimal place."""
    return round(random.uniform(0.0, 100.0), 1)


def parse_sensor_value(
    raw: Optional[str], *, auto: bool, confirm_auto: Optional[bool] = None
) -> float:
    """
    Turn the form's value field into a reading.

    ``confirm_auto`` is the user's answer to "generate a demo value?", asked
    only when the field is empty and ``auto`` is off. None means not asked yet.
    """
    if auto:
        return random_demo_value()
    text = (raw or "").strip()
    if text:
        try:
            return float(text)
        except ValueError:
            raise InvalidSensorInput("Invalid manual value.") from None
    if confirm_auto is None:
        raise AutoValueConfirmationRequired()
    if not confirm_auto:
        raise InvalidSensorInput("No value entered; sensor not saved.")
    return random_demo_value()
