import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from cdt.common.setup import PATHS
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Number of per-run debug logs kept in logs/debug.
DEBUG_RUNS_KEPT = 10

# Attaches `handler` under a "<logger>:<role>" name, unless one with that name is already there. Returns whether
# it was added, so repeated get_logger() calls never double up output.
def _attach(logger: logging.Logger, role, make_handler, level):
    handler_name = f"{logger.name}:{role}"
    if any(h.get_name() == handler_name for h in logger.handlers):
        return False
    handler = make_handler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT))
    handler.set_name(handler_name)
    logger.addHandler(handler)
    return True

# Keeps only the newest `keep` debug logs for this logger.
def _prune_debug_runs(debug_dir: Path, name, keep):
    runs = sorted(debug_dir.glob(f"{name}_*.log"),key=lambda p: p.stat().st_mtime,reverse=True)
    for run in runs[keep:]:
        try: run.unlink()
        except OSError: pass

# Builds the program logger: a size-rotated cdt.log for INFO and up, a latest.log rewritten every run, and one
# full DEBUG log per run under logs/debug.
def get_logger(name = "cdt", level = logging.DEBUG, log_dir: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    debug_dir = log_dir / "debug"
    debug_dir.mkdir(parents=True,exist_ok=True)

    _attach(logger, "persistent", lambda: RotatingFileHandler(
        filename=log_dir / f"{name}.log", maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8",
    ), logging.INFO)
    _attach(logger, "latest", lambda: logging.FileHandler(
        filename=log_dir / "latest.log", mode="w", encoding="utf-8",
    ), level)
    added = _attach(logger, "debug_run", lambda: logging.FileHandler(
        filename=debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log", encoding="utf-8",
    ), logging.DEBUG)
    if added:
        _prune_debug_runs(debug_dir, name, DEBUG_RUNS_KEPT)

    return logger

# Mirrors the log onto stderr, used by --verbose. Safe to call more than once.
def enable_console(logger: logging.Logger, level=logging.DEBUG):
    _attach(logger, "console", logging.StreamHandler, level)

log = get_logger()
log.info("=== INITIALIZED NEW SESSION ===")
