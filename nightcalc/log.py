import sys
from datetime import datetime

from .config import config


class Log:
    def __init__(self, stream=None):
        self.stream = stream

    @staticmethod
    def timestamp():
        return datetime.now().astimezone().strftime('%Y/%m/%d %H:%M:%S')

    def print(self, *args, **kwargs):
        kwargs.setdefault('file', self.stream or sys.stderr)

        print(f'[{self.timestamp()}]', *args, **kwargs)

    def debug(self, *args, **kwargs):
        if not config.gimme('log.debug'):
            return

        self.print('debug:', *args, **kwargs)


log = Log()
