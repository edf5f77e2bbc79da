"""
The Marathon build step: load, resolve, expand, deploy, report.
"""

from .client import DeploymentClient, build_request
from .config import StepConfig
from .exceptions import MarathonDeployError
from .http import MarathonSession
from .identifier import resolve_id
from .log import Logger, BuildLog
from .macro import expand_url
from .manifest import Workspace, get_manifest
from .reporter import BuildResult, report, report_error


class StepResult(object):
    def __init__(self, result, outcome=None, request=None, error=None):
        self.result = result
        self.outcome = outcome
        self.request = request
        self.error = error

    @property
    def is_success(self):
        return self.result == BuildResult.SUCCESS


class MarathonStep(Logger):
    """One invocation of the deployment step.

    The host provides the workspace, the build variables, the build console
    and the build result signal.  Nothing is shared between invocations.
    """

    def __init__(self, config, workspace=None, env=None, build_log=None,
                 build_result=None, session=None, cancel=None):
        """
        :param config: step configuration
        :type  config: marathon_deploy.config.StepConfig
        :param workspace: object providing read_text(filename)
        :param env: build variables, e.g. BUILD_NUMBER
        :type  env: dict
        :param build_log: build console
        :type  build_log: marathon_deploy.log.BuildLog
        :param build_result: host build outcome signal
        :type  build_result: marathon_deploy.reporter.BuildResult
        :param session: HTTP session to use instead of a new one; it is
                        not closed by the step.
        :param cancel: set by the host to abort the deployment
        :type  cancel: threading.Event
        """
        super(MarathonStep, self).__init__()
        self.config = config
        self.workspace = workspace or Workspace()
        self.env = dict(env or {})
        self.build_log = build_log or BuildLog()
        self.build_result = build_result or BuildResult()
        self.session = session
        self.cancel = cancel

    def _new_session(self):
        return MarathonSession(insecure=self.config.insecure,
                               credentials=self.config.credentials,
                               token=self.config.token)

    def prepare(self):
        """Builds the deployment request without sending it.

        :rtype: marathon_deploy.models.ResolvedRequest
        """
        manifest = get_manifest(self.config, self.workspace, self.env)
        app_id = resolve_id(self.config, manifest, self.build_log, self.env)
        endpoint = expand_url(self.config.url, app_id, self.env)
        return build_request(endpoint, manifest, self.config.force_update)

    def run(self):
        """
        :return: result of the step; the build result signal is set too.
        :rtype: StepResult
        """
        try:
            request = self.prepare()
        except MarathonDeployError as e:
            self.log.debug('Step failed before deployment: %s', e)
            return StepResult(
                report_error(e, self.build_log, self.build_result), error=e)
        except BaseException:
            self.build_result.set(BuildResult.FAILURE)
            raise

        self.build_log.println('Deploying to %s' % request.endpoint)
        owned = self.session is None
        session = self._new_session() if owned else self.session
        try:
            client = DeploymentClient(session,
                                      timeout=self.config.timeout,
                                      retries=self.config.retries,
                                      retry_interval=self.config.retry_interval,
                                      cancel=self.cancel)
            outcome = client.deploy(request)
        except BaseException:
            self.build_result.set(BuildResult.FAILURE)
            raise
        finally:
            if owned:
                session.close()

        result = report(outcome, self.build_log, self.build_result)
        return StepResult(result, outcome=outcome, request=request)


def run_step(params, workspace=None, env=None, build_log=None, **kwargs):
    """Runs the step from host job parameters.

    :param params: step parameters as in the job definition
    :type  params: dict
    :rtype: StepResult
    """
    build_log = build_log or BuildLog()
    try:
        config = StepConfig.from_mapping(params)
    except MarathonDeployError as e:
        build_result = kwargs.get('build_result')
        return StepResult(report_error(e, build_log, build_result), error=e)
    return MarathonStep(config, workspace=workspace, env=env,
                        build_log=build_log, **kwargs).run()
