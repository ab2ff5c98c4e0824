import argparse
import logging
import typing

import colorlog

from . import reconcile
from .config import Config
from .utils import Error, config_file, load


def options(args: typing.Sequence[str] = None):
    config = load(Config, config_file())
    p = argparse.ArgumentParser(description=reconcile.help.capitalize())
    p.add_argument(
        "--vendor-directory",
        "-V",
        type=str,
        metavar="DIR",
        help=f"Where vendored projects live (`{config.vendor_directory}` by default)",
    )
    p.add_argument(
        "--lock-file",
        "-L",
        type=str,
        metavar="NAME",
        help=f"Name of the lock files to compare (`{config.lock_file}` by default)",
    )
    p.add_argument(
        "--resolver",
        "-R",
        type=str,
        metavar="CMD",
        help=f"Command validating an updated lock file (`{config.resolver_name}` by default)",
    )
    p.add_argument("--verbose", "-v", action="store_true")
    reconcile.add_arguments(p)
    p.set_defaults(command=reconcile.run, config=config)
    ret = p.parse_args(args)
    if ret.vendor_directory:
        config.vendor_directory = ret.vendor_directory
    if ret.lock_file:
        config.lock_file = ret.lock_file
    if ret.resolver:
        config.resolver = ret.resolver
    return ret


class LogFormatter(colorlog.ColoredFormatter):
    def __init__(self):
        super().__init__(
            "{log_color}{levelname}{reset}{message_log_color}: {message}",
            secondary_log_colors={
                "message": {
                    "DEBUG": "white",
                    "WARNING": "bold",
                    "ERROR": "bold",
                    "CRITICAL": "bold",
                },
            },
            style="{",
        )

    def format(self, record):
        if record.levelno == logging.INFO:
            return record.getMessage()
        return super().format(record)


def main(args: typing.Sequence[str] = None) -> int:
    handler = colorlog.StreamHandler()
    handler.setFormatter(LogFormatter())
    logging.basicConfig(level=logging.INFO, handlers=[handler], force=True)
    verbose = False
    try:
        opts = options(args)
        verbose = opts.verbose
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        logging.debug(opts.__dict__)
        return opts.command(opts)
    except Error as e:
        logging.error(e)
    except Exception as e:
        logging.exception(e, exc_info=verbose)
    return 1
