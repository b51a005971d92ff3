from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from discords import Discord, log_event


def test_discord_model_helpers() -> None:
    discord = Discord(distance=2.5, location=40, window_size=10, rank=2, strategy="heuristic")
    assert discord.as_tuple() == (2.5, 40)
    assert discord.end == 50
    assert discord.short_label() == "heuristic#2@40"


def test_discord_rejects_negative_values() -> None:
    with pytest.raises(ValidationError):
        Discord(distance=-0.1, location=0, window_size=4)
    with pytest.raises(ValidationError):
        Discord(distance=0.1, location=-1, window_size=4)


def test_log_event_json(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("discords.test")
    with caplog.at_level(logging.INFO, logger="discords.test"):
        log_event(logger, "search_complete", json_logs=True, discords=3)
    assert json.loads(caplog.records[-1].getMessage()) == {"event": "search_complete", "discords": 3}
