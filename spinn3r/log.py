import logging


def setup_logging(
    level=logging.WARNING, log_file: str | None = None, propagate=False
):
    """
    Configure package-wide logging.

    Runs once on import with the defaults: records of the ``spinn3r`` logger
    go to stderr and do not propagate to the root logger. Applications that
    route everything through their own root configuration can call
    ``setup_logging(propagate=True)``, which drops the package handler.
    """
    logger = logging.getLogger("spinn3r")
    # Clear any existing handlers
    logger.handlers.clear()
    logger.setLevel(level)

    if propagate:
        logger.propagate = True
        return logger

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        fileHandler = logging.FileHandler(log_file)
        fileHandler.setFormatter(formatter)
        logger.addHandler(fileHandler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False
    return logger


class TraceLogger(logging.LoggerAdapter):
    """
    Per-instance view of a shared logger.

    With ``trace`` set, DEBUG records of this instance are emitted even when
    the shared logger sits at a higher level. Other instances using the same
    logger are unaffected.
    """

    def __init__(self, logger: logging.Logger, trace: bool = False):
        super().__init__(logger, {})
        self.trace = trace

    def isEnabledFor(self, level: int) -> bool:
        if self.trace and level >= logging.DEBUG:
            return True
        return self.logger.isEnabledFor(level)

    def log(self, level, msg, *args, **kwargs):
        if self.logger.isEnabledFor(level):
            self.logger.log(level, msg, *args, **kwargs)
        elif self.isEnabledFor(level):
            msg, kwargs = self.process(msg, kwargs)
            record = self.logger.makeRecord(
                self.logger.name,
                level,
                "(unknown file)",
                0,
                msg,
                args,
                None,
                extra=kwargs.get("extra"),
            )
            self.logger.handle(record)


logger = setup_logging()
