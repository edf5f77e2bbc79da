"""
Submission of application definitions to Marathon.
"""

import json
import socket
import time
from contextlib import closing
from random import random
from http.client import HTTPException

import requests

from . import models
from .defaults import DEFAULT_RETRIES, DEFAULT_RETRY_INTERVAL
from .exceptions import AbortException
from .log import Logger

# Client Errors
CONFLICT_ERROR = 409

UNKNOWN = 'unknown'

RETRIABLE_STATUSES = (CONFLICT_ERROR,)

TRANSPORT_ERRORS = (socket.error,
                    requests.exceptions.RequestException,
                    HTTPException)


def serialize(manifest):
    return json.dumps(manifest).encode('utf-8')


def build_request(endpoint, manifest, force_update=False):
    """
    :param endpoint: <marathon>/v2/apps/<id>
    :param manifest: application definition with the resolved id
    :param force_update: override a deployment in progress
    :rtype: marathon_deploy.models.ResolvedRequest
    """
    params = {'force': 'true'} if force_update else None
    return models.ResolvedRequest(endpoint, serialize(manifest), 'PUT',
                                  params)


def error_reason(response):
    """Human readable reason of a failed response: `message` of a JSON
    body when there is one, the HTTP reason phrase otherwise.
    """
    try:
        message = response.json().get('message')
    except (ValueError, AttributeError):
        message = None
    return message or response.reason or UNKNOWN


def classify(response, attempts):
    """Maps an HTTP response to an outcome.

    :param response: HTTP response
    :type  response: requests.models.Response
    :param attempts: number of requests issued so far
    :rtype: one of marathon_deploy.models outcomes
    """
    status = response.status_code
    if 200 <= status < 300:
        return _handle2xx(response, attempts)
    elif 400 <= status < 500:
        return models.ClientError(status, error_reason(response),
                                  response.text, attempts)
    else:
        # 5xx, or 1xx/3xx that the HTTP library did not resolve.
        return models.ServerError(status, error_reason(response),
                                  response.text, attempts)


def _handle2xx(response, attempts):
    try:
        result = response.json()
    except ValueError:
        result = {}
    if not isinstance(result, dict):
        result = {}
    return models.Success(result.get('deploymentId') or UNKNOWN,
                          result.get('version') or UNKNOWN,
                          response.status_code, attempts)


class DeploymentClient(Logger):
    """Issues the deployment request and retries it while Marathon reports
    a deployment already in progress (409).
    """

    def __init__(self, session, timeout=None, retries=DEFAULT_RETRIES,
                 retry_interval=DEFAULT_RETRY_INTERVAL, cancel=None):
        """
        :param session: Object providing request() method for making HTTP
                        requests.
        :type  session: requests.Session like object
        :param timeout: read timeout in seconds, None for the default
        :param retries: maximum number of attempts, including the first one
        :type  retries: int
        :param retry_interval: seconds to wait between attempts
        :param cancel: set by the host to abort the deployment
        :type  cancel: threading.Event
        """
        super(DeploymentClient, self).__init__()
        self.session = session
        self.timeout = timeout
        self.retries = max(1, retries)
        self.retry_interval = retry_interval
        self.cancel = cancel

    def _check_cancelled(self):
        if self.cancel is not None and self.cancel.is_set():
            raise AbortException('Deployment aborted.')

    def _wait(self, sleep):
        sleep += (random() * sleep * 0.2) - (sleep * 0.1)
        self.log.debug('Retrying in %s seconds.', sleep)
        if self.cancel is not None:
            if self.cancel.wait(sleep):
                raise AbortException('Deployment aborted while waiting to '
                                     'retry.')
        elif sleep > 0:
            time.sleep(sleep)

    def _send(self, request):
        return self.session.request(request.method, request.endpoint,
                                    data=request.body,
                                    params=request.params,
                                    headers={'Content-Type':
                                             'application/json'},
                                    timeout=self.timeout)

    def attempt(self, request, attempts):
        """Issues one request and classifies its result."""
        try:
            response = self._send(request)
        except TRANSPORT_ERRORS as ex:
            self.log.debug('HTTP call error: %s', ex)
            return models.TransportError(str(ex) or ex.__class__.__name__,
                                         attempts)
        with closing(response):
            return classify(response, attempts)

    def deploy(self, request):
        """Runs the request until a terminal outcome is reached.

        :param request: deployment request
        :type  request: marathon_deploy.models.ResolvedRequest
        :return: terminal outcome
        """
        attempts = 0
        try:
            while True:
                self._check_cancelled()
                attempts += 1
                self.log.debug('Attempt %s of %s: %s %s', attempts,
                               self.retries, request.method, request.endpoint)
                outcome = self.attempt(request, attempts)
                if not self._should_retry(outcome, attempts):
                    return outcome
                self.log.info('Marathon returned %s, deployment in progress.',
                              outcome.status)
                self._wait(self.retry_interval)
        except AbortException as ex:
            return models.Aborted(ex.reason, attempts)

    def _should_retry(self, outcome, attempts):
        return (isinstance(outcome, models.ClientError) and
                outcome.status in RETRIABLE_STATUSES and
                attempts < self.retries)
