"""
Build result reporting.
"""

from . import models


class BuildResult(object):
    SUCCESS = 'SUCCESS'
    FAILURE = 'FAILURE'

    def __init__(self):
        self.result = None

    def set(self, result):
        self.result = result

    @property
    def is_success(self):
        return self.result == self.SUCCESS


def report(outcome, build_log, build_result=None):
    """Logs the outcome to the build console and signals the build result.

    :param outcome: terminal outcome of the deployment
    :param build_log: build console
    :type  build_log: marathon_deploy.log.BuildLog
    :param build_result: host build outcome signal
    :type  build_result: BuildResult
    :return: BuildResult.SUCCESS or BuildResult.FAILURE
    """
    if isinstance(outcome, models.Success):
        build_log.println('Deployment %s started, application version: %s'
                          % (outcome.deployment_id, outcome.version))
        result = BuildResult.SUCCESS
    elif isinstance(outcome, models.ClientError):
        build_log.error('Client Error: %s' % outcome.reason)
        build_log.error('http status: %s' % outcome.status)
        result = BuildResult.FAILURE
    elif isinstance(outcome, models.ServerError):
        build_log.error('Server Error: %s' % outcome.reason)
        build_log.error('http status: %s' % outcome.status)
        result = BuildResult.FAILURE
    elif isinstance(outcome, models.TransportError):
        build_log.error('Could not reach Marathon: %s' % outcome.cause)
        result = BuildResult.FAILURE
    elif isinstance(outcome, models.Aborted):
        build_log.error(outcome.reason)
        result = BuildResult.FAILURE
    else:
        raise TypeError('Unknown outcome: %r' % (outcome,))

    if build_result is not None:
        build_result.set(result)
    return result


def report_error(error, build_log, build_result=None):
    """Reports a failure raised before any request was sent."""
    build_log.error(str(error))
    if build_result is not None:
        build_result.set(BuildResult.FAILURE)
    return BuildResult.FAILURE
