from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI controller and installs an exception hook so
unexpected crashes are logged before the process exits.
"""

import logging
import sys
import traceback
from types import TracebackType
from typing import Optional, Type


def global_exception_handler(
        exctype: Type[BaseException],
        value: BaseException,
        tb: Optional[TracebackType],
) -> None:
    """Log an unhandled exception with its stack trace and print it on stderr."""
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))

    logger = logging.getLogger("drivemap.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {value}\n{stack_trace}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (DRIVEMAP CLI)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)


def main() -> int:
    sys.excepthook = global_exception_handler
    try:
        from drivemap.interface.cli.app import main as cli_main
        return cli_main()
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
