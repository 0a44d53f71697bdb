# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging


class SlideDiffError(ValueError):
    """Base class of all errors raised by slidediff."""


class DiffFormatError(SlideDiffError):
    """A change record or change set is not well formed."""


class SerializationError(SlideDiffError):
    """A tree node cannot be written in canonical text form."""

    def __init__(self, message, path=None):
        super(SerializationError, self).__init__(message)
        self.path = path

    def __str__(self):
        msg = super(SerializationError, self).__str__()
        if self.path is None:
            return msg
        return "%s (at %r)" % (msg, str(self.path))


class AmbiguousIdentityError(SlideDiffError):
    """An array holds the same identity twice and strict mode is on."""

    def __init__(self, path, field, key):
        super(AmbiguousIdentityError, self).__init__(
            "Duplicate identity %s=%r in array at %r" % (field, key, str(path)))
        self.path = path
        self.field = field
        self.key = key


class OutputError(SlideDiffError):
    """The output sink did not accept the rendered text."""


def init_logging(level=logging.INFO):
    """Sets up logging for slidediff entry points.

    Call this in all entry points (if __name__ == "__main__").
    Sets the log level for all slidediff loggers to `level`,
    unless `level` is given as `None`.
    """
    format = '[%(levelname)1.1s %(module)s:%(lineno)d] %(message)s'
    logging.basicConfig(format=format, level=level)
    logging.captureWarnings(True)


def set_slidediff_log_level(level, set_main=True):
    """Set a log level for slidediff loggers"""
    logger.setLevel(level)
    if set_main:
        _baseLogger = logging.getLogger()
        _baseLogger.setLevel(level)


logger = logging.getLogger('slidediff')

debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception
critical = logger.critical
