"""
Central logging setup.

One line per entry:
<RunId>|<Date> <Time>|<Level>|<File:Line>|<Module.Func>|<Detail>

Modules call get_logger(__name__) instead of logging.basicConfig() so the
handler is installed once per process.
"""
import datetime
import logging
import uuid

RUN_ID: str = uuid.uuid4().hex[:8]


class PipeFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.datetime.fromtimestamp(record.created)
        line = (
            f"{RUN_ID}|{ts:%Y-%m-%d %H:%M:%S}|{record.levelname}|"
            f"{record.filename}:{record.lineno}|"
            f"{record.module}.{record.funcName}|{record.getMessage()}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def init_logging(level=None) -> None:
    """Attach the pipe formatter to the package logger, once.

    ``level`` overrides the current level; without it the logger starts at
    INFO the first time and is left alone afterwards.
    """
    base = logging.getLogger("pantry")
    if level is not None:
        base.setLevel(level)
    elif base.level == logging.NOTSET:
        base.setLevel(logging.INFO)
    if any(isinstance(h.formatter, PipeFormatter) for h in base.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(PipeFormatter())
    base.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    init_logging()
    return logging.getLogger(name)
