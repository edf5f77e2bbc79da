import logging
import sys

LOG_LEVEL = logging.WARNING
LOG_FILE = 'marathon-deploy.log'

FORMAT_FIELD_SEP = ' '
FORMAT = '%(asctime)s{0}%(name)s{0}%(levelname)s{0}%(message)s'.format(
    FORMAT_FIELD_SEP)
FORMAT_DATE = '%Y-%m-%dT%H:%M:%SZ'

BUILD_LOG_PREFIX = '[Marathon]'


def get_logger(name=__name__, log_level=LOG_LEVEL, stream=None):
    if stream:
        logging.basicConfig(format=FORMAT, datefmt=FORMAT_DATE,
                            level=log_level, stream=stream)
    else:
        logging.basicConfig(filename=LOG_FILE, format=FORMAT,
                            datefmt=FORMAT_DATE, level=log_level)
    logger = logging.getLogger(name)
    return logger


class Logger(object):
    def __init__(self):
        self.log = get_logger('%s.%s' % (__name__, self.__class__.__name__))


class BuildLog(Logger):
    """Line oriented build console.

    Lines go to `sink`, which is either a file-like object or a callable
    taking one string, and are mirrored to the Python logger.  Written lines
    are kept so that the step result can be inspected after the run.
    """

    def __init__(self, sink=None, prefix=BUILD_LOG_PREFIX):
        super(BuildLog, self).__init__()
        self.sink = sys.stdout if sink is None else sink
        self.prefix = prefix
        self.lines = []

    def println(self, msg, level=logging.INFO):
        line = '%s %s' % (self.prefix, msg) if self.prefix else msg
        self.lines.append(line)
        if callable(self.sink):
            self.sink(line)
        else:
            self.sink.write(line + '\n')
            self.sink.flush()
        self.log.log(level, msg)

    def warning(self, msg):
        self.println(msg, logging.WARNING)

    def error(self, msg):
        self.println(msg, logging.ERROR)

    def contains(self, text):
        return any(text in line for line in self.lines)

    @property
    def text(self):
        return '\n'.join(self.lines)
