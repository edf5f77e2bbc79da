"""
Build step configuration.
"""

import collections
from configparser import ConfigParser

from .defaults import DEFAULT_MANIFEST_FILE, DEFAULT_RETRIES, \
    DEFAULT_RETRY_INTERVAL, DEFAULT_CONFIG_FILE, DEFAULT_CONFIG_SECTION
from .exceptions import ConfigurationError

# Host job definition key -> StepConfig field.
HOST_KEYS = {
    'url': 'url',
    'id': 'id',
    'appid': 'appid',
    'filename': 'filename',
    'json': 'json',
    'docker': 'docker',
    'dockerForcePull': 'docker_force_pull',
    'uris': 'uris',
    'labels': 'labels',
    'forceUpdate': 'force_update',
    'timeout': 'timeout',
    'retries': 'retries',
    'retryInterval': 'retry_interval',
    'username': 'username',
    'password': 'password',
    'token': 'token',
    'insecure': 'insecure',
}

TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off', '')

_StepConfig = collections.namedtuple('StepConfig', [
    'url',
    'id',
    'appid',
    'filename',
    'json',
    'docker',
    'docker_force_pull',
    'uris',
    'labels',
    'force_update',
    'timeout',
    'retries',
    'retry_interval',
    'username',
    'password',
    'token',
    'insecure',
])


def to_bool(value):
    if value is None or isinstance(value, bool):
        return value
    if str(value).strip().lower() in TRUE_VALUES:
        return True
    if str(value).strip().lower() in FALSE_VALUES:
        return False
    raise ConfigurationError("Not a boolean value: '%s'" % value)


def _to_number(value, convert, name):
    if value is None or value == '':
        return None
    try:
        return convert(value)
    except (TypeError, ValueError):
        raise ConfigurationError("Invalid value for '%s': '%s'" % (name, value))


def _uris_to_list(uris):
    """
    Input: 'http://a/x, http://b/y' or ['http://a/x']
    Result: ['http://a/x', 'http://b/y']
    """
    if not uris:
        return []
    if isinstance(uris, str):
        uris = uris.split(',')
    return [u.strip() for u in uris if u and u.strip()]


def _labels_str_to_dict(labels_conf_str):
    """
    Input: 'foo=bar, baz'
    Result: {'foo': 'bar', 'baz': ''}
    """
    labels = collections.OrderedDict()
    if len(labels_conf_str.strip()) == 0:
        return labels
    for lbl in labels_conf_str.split(','):
        lbl_t = lbl.strip().split('=', 1)
        if len(lbl_t) == 1:
            labels[lbl_t[0]] = ''
        else:
            labels[lbl_t[0].strip()] = lbl_t[1].strip()
    return labels


def _labels_to_dict(labels):
    if not labels:
        return collections.OrderedDict()
    if isinstance(labels, str):
        return _labels_str_to_dict(labels)
    if hasattr(labels, 'items'):
        labels = labels.items()
    return collections.OrderedDict(
        (str(k), '' if v is None else str(v)) for k, v in labels)


def _labels_to_pairs(labels):
    return tuple(_labels_to_dict(labels).items())


class StepConfig(_StepConfig):
    """Immutable configuration of one build step invocation.

    Only `url` is required.  `appid` is the deprecated alias of `id`.
    `labels` is kept as a tuple of (name, value) pairs.
    """

    __slots__ = ()

    def __new__(cls, url, id=None, appid=None,
                filename=DEFAULT_MANIFEST_FILE, json=None, docker=None,
                docker_force_pull=None, uris=None, labels=None,
                force_update=False, timeout=None, retries=DEFAULT_RETRIES,
                retry_interval=DEFAULT_RETRY_INTERVAL, username=None,
                password=None, token=None, insecure=False):
        if not url or not str(url).strip():
            raise ConfigurationError("Marathon URL is not set.")

        retries = _to_number(retries, int, 'retries')
        if retries is None:
            retries = DEFAULT_RETRIES
        if retries < 1:
            raise ConfigurationError(
                "'retries' must be at least 1, got %s" % retries)

        retry_interval = _to_number(retry_interval, float, 'retry_interval')
        if retry_interval is None:
            retry_interval = DEFAULT_RETRY_INTERVAL

        timeout = _to_number(timeout, float, 'timeout')
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(
                "'timeout' must be positive, got %s" % timeout)

        if password and not username:
            raise ConfigurationError("A password requires a username.")

        return super(StepConfig, cls).__new__(
            cls, str(url).strip(), id or None, appid or None,
            filename or DEFAULT_MANIFEST_FILE, json, docker or None,
            to_bool(docker_force_pull), tuple(_uris_to_list(uris)),
            _labels_to_pairs(labels), bool(to_bool(force_update)), timeout,
            retries, retry_interval, username or None, password or None,
            token or None, bool(to_bool(insecure)))

    @classmethod
    def from_mapping(cls, params):
        """Builds configuration from the host job definition.

        :param params: step parameters keyed as in the job definition
                       (e.g. `forceUpdate`); field names are accepted too.
        :type  params: dict
        :rtype: StepConfig
        """
        kwargs = {}
        for key, value in params.items():
            field = HOST_KEYS.get(key, key)
            if field not in cls._fields:
                raise ConfigurationError("Unknown parameter '%s'." % key)
            kwargs[field] = value
        if 'url' not in kwargs:
            raise ConfigurationError("Marathon URL is not set.")
        return cls(**kwargs)

    @property
    def credentials(self):
        return (self.username, self.password or '') if self.username else None


def read_config(config_file=DEFAULT_CONFIG_FILE,
                section=DEFAULT_CONFIG_SECTION, overrides=None):
    """Reads step configuration from `section` of an INI file.

    :param config_file: path to the INI file
    :param section: section holding the step parameters
    :param overrides: parameters taking precedence over the file
    :type  overrides: dict
    :rtype: StepConfig
    """
    config = ConfigParser(interpolation=None)
    config.optionxform = str
    if not config.read(config_file):
        raise ConfigurationError("Could not read configuration file '%s'"
                                 % config_file)
    if not config.has_section(section):
        raise ConfigurationError("Section [%s] not found in '%s'"
                                 % (section, config_file))
    params = dict(config.items(section))
    params.update(overrides or {})
    return StepConfig.from_mapping(params)
