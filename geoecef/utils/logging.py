"""Package logger for geoecef"""

__all__ = ['LOGGER', 'warn_once']

import logging

LOGGER = logging.getLogger('geoecef')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_HANDLER.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
LOGGER.addHandler(_LOG_HANDLER)

_SEEN = set()


def warn_once(msg: str, *args):
    """
    Logs a warning the first time a message template is used. Later calls
    with the same template are dropped, whatever their arguments.

    Args:
        msg:
            A %-style message template

        *args:
            Arguments for the template, formatted lazily by the logger
    """
    if msg in _SEEN:
        return

    _SEEN.add(msg)
    LOGGER.warning(msg + ' (this warning will not repeat)', *args)
