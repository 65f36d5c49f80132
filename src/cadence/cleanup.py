# SPDX-License-Identifier: MIT

import atexit

from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.repository.note import NOTE_REPO
from cadence.repository.review_ledger import REVIEW_LEDGER_REPO


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()
    NOTE_REPO.flush()
    REVIEW_LEDGER_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
