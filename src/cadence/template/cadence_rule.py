# SPDX-License-Identifier: MIT

from cadence.model.cadence_rule import CadenceKind, CadenceRule


def get_cadence_rule_template(kind: CadenceKind = "every-x-hours") -> CadenceRule:
    return {
        "kind": kind,
        "hours": 0,
        "minutes": 0,
        "time": None,
        "weekdays": None,
        "day_of_month": None,
        "month": None,
        "start_date": None,
        "end_date": None,
    }
