"""
HTTP session to the Marathon REST API implemented over `requests`.
"""

import re
import logging
from http.client import HTTPConnection

import requests
import urllib3

from .defaults import HTTP_CONNECT_TIMEOUT, HTTP_TIMEOUTS
from .log import get_logger

CONTENT_TYPE_JSON = 'application/json'
TOKEN_AUTH_HEADER = 'Authorization'
TOKEN_AUTH_FORMAT = 'token=%s'


def init_http_logging(log_level, http_detail=False):
    requests_log = get_logger("urllib3")
    requests_log.setLevel(log_level)
    requests_log.propagate = True

    if http_detail and logging.DEBUG == log_level:
        HTTPConnection.debuglevel = 3
    else:
        HTTPConnection.debuglevel = 0


def has_key(_dict, key):
    """Case insensitive search for a key in a map.
    """
    return any(map(lambda k: re.match('%s$' % key, k, re.I), _dict))


def set_json_headers(headers):
    if not has_key(headers, 'accept'):
        headers['Accept'] = CONTENT_TYPE_JSON
    if not has_key(headers, 'content-type'):
        headers['Content-Type'] = CONTENT_TYPE_JSON
    return headers


class MarathonSession(requests.Session):
    """A ``requests.Session`` subclass talking JSON to Marathon.

    One session is used per build step invocation.
    """

    def __init__(self, insecure=False, credentials=None, token=None,
                 log_http_detail=False):
        """
        :param insecure: If set to True, don't validate server certificate.
        :type  insecure: bool

        :param credentials: Username and password for HTTP basic auth.
        :type  credentials: (str, str)

        :param token: Token sent as 'Authorization: token=<token>'.
        :type  token: str

        :param log_http_detail: If set to True, increases HTTP level logging.
        :type  log_http_detail: bool
        """
        super(MarathonSession, self).__init__()
        self._init_logging(log_http_detail)
        self._init_security(insecure)
        self._init_auth(credentials, token)

    def _init_logging(self, http_detail=False):
        self.log = get_logger('%s.%s' % (__name__, self.__class__.__name__))
        init_http_logging(self.log.getEffectiveLevel(), http_detail)

    def _init_security(self, insecure):
        self.verify = (insecure is False)
        if insecure:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _init_auth(self, credentials, token):
        if credentials:
            self.auth = tuple(credentials)
        if token:
            self.headers[TOKEN_AUTH_HEADER] = TOKEN_AUTH_FORMAT % token

    @staticmethod
    def _update_request_params(kwargs):
        kwargs['headers'] = set_json_headers(kwargs.get('headers') or {})

        if kwargs.get('timeout') is not None:
            if not isinstance(kwargs['timeout'], (tuple, list)):
                # Only 'read timeout' is set; prepend 'connect timeout'.
                kwargs['timeout'] = (HTTP_CONNECT_TIMEOUT,
                                     float(kwargs['timeout']))
        else:
            kwargs['timeout'] = HTTP_TIMEOUTS

    def request(self, method, url, **kwargs):
        """Generic HTTP request expecting HTTP verb and URL.

        :param method: HTTP verb
        :type  method: str

        :param url: HTTP URL
        :type  url: str

        :param kwargs: see requests.Session.request()
        :type  kwargs: dict

        :keyword timeout: read timeout, or connect timeout and read timeout
        :type    timeout: float or (float, float)

        :return: requests.models.Response
        """
        self._update_request_params(kwargs)
        self.log.debug('Request: %s %s', method, url)
        response = super(MarathonSession, self).request(method, url, **kwargs)
        self._log_response(response)
        return response

    def _log_response(self, resp, max_characters=1000):
        msg = 'Received response: %s\nWith content: %s' % (resp, resp.text)
        if len(msg) > max_characters:
            msg = '%s\n                         %s' % (
                msg[:max_characters], '::::: Content truncated :::::')
        self.log.debug(msg)
