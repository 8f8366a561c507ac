import logging
import sys
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler


def logger():
    return logging.getLogger("fallible")


def configure_logger(debug: bool, rich: bool = True):
    class BackTickHighlighter(RegexHighlighter):
        highlights = [r"`(?P<bold>[^`]*)`"]

    level = logging.DEBUG if debug else logging.INFO
    if rich:
        handler: logging.Handler = RichHandler(show_path=debug, highlighter=BackTickHighlighter())
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stdout)

    log = logger()
    log.setLevel(level)
    log.handlers = [handler]
    log.propagate = False
    return log
