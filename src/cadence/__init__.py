# SPDX-License-Identifier: MIT

from cadence.cleanup import register_cleanup
from cadence.initialize import initialize
from cadence.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
