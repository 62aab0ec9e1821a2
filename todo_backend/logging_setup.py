import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """
    Один консольный обработчик на корневом логгере.
    Вызывать ОДИН раз при старте процесса, до первого logger.info.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Убираем уже установленные обработчики, чтобы не было дублей
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # uvicorn по умолчанию пишет свой access-лог, у нас есть собственный
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
