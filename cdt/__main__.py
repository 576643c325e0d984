import argparse
import sys
from pathlib import Path
from cdt.common.logger import log, enable_console
from cdt.core.config import load_settings
from cdt.core.duration import FormatError, parse_duration


# argparse type hook, so a bad duration is reported as a usage error (exit code 2).
def _duration_arg(text):
    try:
        return parse_duration(text)
    except FormatError as e:
        raise argparse.ArgumentTypeError(str(e)) from e

def _positive_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' is not an integer") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value

def build_parser():
    parser = argparse.ArgumentParser(prog="cdt", description="Countdown timer window. Space pauses, Escape quits.")
    parser.add_argument("duration", type=_duration_arg, help="time to count down, as hh:mm:ss")
    parser.add_argument("--dvd", action="store_true", help="bounce the time around the window")
    parser.add_argument("--precise", action="store_true", help="show hundredths of a second")
    parser.add_argument("--fps", type=_positive_int, help="frames per second (default from settings, 60)")
    parser.add_argument("--exit-on-expiry", action="store_true", help="quit as soon as the countdown reaches zero")
    parser.add_argument("--config", type=Path, help="alternate settings.json to read")
    parser.add_argument("-v", "--verbose", action="store_true", help="also log to stderr")
    return parser

# Folds command line overrides onto the loaded settings.
def resolve_settings(args):
    settings = load_settings(args.config)
    if args.dvd:
        settings["display_mode"] = "dvd"
    if args.precise:
        settings["show_hundredths"] = True
    if args.fps is not None:
        settings["fps"] = args.fps
    if args.exit_on_expiry:
        settings["exit_on_expiry"] = True
    return settings

# Entry point for `python -m cdt` and the `cdt` script
def run(argv=None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        enable_console(log)
    log.info(f"Starting countdown of {args.duration} seconds")

    # Imported late so argument errors never need Qt.
    from cdt.ui.app import DisplayError, main
    try:
        code = main(args.duration, resolve_settings(args))
    except SystemExit:
        raise
    except DisplayError as e:
        log.error(f"Display initialization failed: {e}")
        print(f"cdt: error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)
    sys.exit(code)

if __name__ == "__main__":
    run()
