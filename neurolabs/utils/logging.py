"""Print-based logging for the labs.

Lab sessions run inside notebooks and small host loops, where standard
logging handlers are easy to lose. Messages are printed to stdout (and an
optional extra stream) under a ruled header naming the source and level.

A process-wide threshold silences chatter: set_level("WARNING") before a
long parameter sweep keeps only warnings and errors.

Usage:
    from neurolabs.utils import get_logger
    log = get_logger("simulation.session")
    log.info("Captured ghost trace with %d samples", 500)
"""

import sys
from datetime import datetime

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}
RULE = "_" * 72

_threshold = LEVELS["DEBUG"]


def set_level(level):
    """Set the lowest level printed by every lab logger.

    Parameters
    ----------
    level : str
        One of DEBUG, INFO, WARNING, ERROR.

    Returns
    -------
    str
        The previous level, so callers can restore it.
    """
    global _threshold
    key = level.upper()
    if key not in LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Available: {list(LEVELS)}")
    previous = get_level()
    _threshold = LEVELS[key]
    return previous


def get_level():
    for name, value in LEVELS.items():
        if value == _threshold:
            return name
    return "DEBUG"


def _render(msg, args):
    if not args:
        return str(msg)
    try:
        return msg % args
    except TypeError:
        # Leave malformed format strings readable.
        return str(msg)


def get_logger(name, out=None):
    """Create a print-based logger.

    Parameters
    ----------
    name : str
        Source shown in every header, prefixed with "neurolabs:".
    out : file-like, optional
        Additional output stream (e.g., an open log file).

    Returns
    -------
    callable
        log(level, msg, args) with .debug, .info, .warning, .error shortcuts.
    """
    source = f"neurolabs:{name}"

    def log(level, msg, args=()):
        if LEVELS[level] < _threshold:
            return
        stamp = datetime.now().strftime("%H:%M:%S")
        text = _render(msg, args)
        # stdout is looked up per message so redirected streams are honoured.
        for dest in [sys.stdout] + ([out] if out else []):
            print(RULE, file=dest)
            print(f"{source} {level} [{stamp}]", file=dest)
            print(text, file=dest)

    log.debug = lambda msg, *args: log("DEBUG", msg, args)
    log.info = lambda msg, *args: log("INFO", msg, args)
    log.warning = lambda msg, *args: log("WARNING", msg, args)
    log.error = lambda msg, *args: log("ERROR", msg, args)

    return log
