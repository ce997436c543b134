"""Module for initializing settings related to the built-in ledger logger
Functions:
-get_logger"""

import logging, coloredlogs
import os

VALID_LVLS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
_LOG_LVL = os.getenv('LOG_LEVEL', None)
if _LOG_LVL:
    assert _LOG_LVL in VALID_LVLS, "Log level {} not in valid levels {}".format(_LOG_LVL, VALID_LVLS)
    _LOG_LVL = getattr(logging, _LOG_LVL)
else:
    _LOG_LVL = logging.WARNING


format = '%(asctime)s.%(msecs)03d %(name)s[%(process)d] <{}> %(levelname)-2s %(message)s'.format(
    os.getenv('HOST_NAME', 'Ledger'))

"""
Custom Styling
"""

coloredlogs.DEFAULT_LEVEL_STYLES = {
    'critical': {'color': 'white', 'bold': True, 'background': 'red'},
    'error': {'color': 'red'},
    'warning': {'color': 'yellow'},
    'info': {'color': 'white'},
    'debug': {'color': 'green'},
}
coloredlogs.DEFAULT_FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'hostname': {'color': 'magenta'},
    'levelname': {'color': 'black', 'bright': True},
    'name': {'color': 'blue'},
    'programname': {'color': 'cyan'}
}


class ColoredStreamHandler(logging.StreamHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.setFormatter(
            coloredlogs.ColoredFormatter(format)
        )


def get_logger(name=''):
    log = logging.getLogger(name)

    if not log.handlers:
        log.addHandler(ColoredStreamHandler())

    log.setLevel(_LOG_LVL)

    return log