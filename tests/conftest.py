# SPDX-License-Identifier: MIT

from pathlib import Path

import pendulum
import pytest

from cadence import configuration
from cadence.model.cadence_rule import CadenceRule
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.note import NOTE_REPO
from cadence.repository.review_ledger import REVIEW_LEDGER_REPO
from cadence.template.cadence_rule import get_cadence_rule_template
from cadence.view import state as view_state


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every config and data file at a temporary directory."""
    config_path = tmp_path / "config"
    data_path = tmp_path / "data"
    config_path.mkdir()
    data_path.mkdir()

    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", data_path)
    monkeypatch.setattr(configuration, "DATA_NOTES_PATH", data_path / "notes.yaml")
    monkeypatch.setattr(configuration, "DATA_REVIEWS_PATH", data_path / "reviews.yaml")

    # Repositories are module singletons, drop anything cached by earlier tests
    monkeypatch.setattr(NOTE_REPO, "_notes", None)
    monkeypatch.setattr(NOTE_REPO, "is_dirty", False)
    monkeypatch.setattr(REVIEW_LEDGER_REPO, "_reviews", None)
    monkeypatch.setattr(REVIEW_LEDGER_REPO, "is_dirty", False)
    CONFIGURATION_REPO.reset()

    view_state.set_show_header(False)
    return tmp_path


@pytest.fixture
def make_rule():
    def _make_rule(kind: str = "every-x-hours", **fields) -> CadenceRule:
        rule = get_cadence_rule_template(kind)  # type: ignore[arg-type]
        rule.update(fields)  # type: ignore[typeddict-item]
        return rule

    return _make_rule


@pytest.fixture
def utc():
    def _utc(*args: int) -> pendulum.DateTime:
        return pendulum.datetime(*args, tz="UTC")

    return _utc
