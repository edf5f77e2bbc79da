import io
import json

from mock import Mock

from marathon_deploy.log import BuildLog

MARATHON_URL = 'http://localhost:8080/'

REASONS = {200: 'OK',
           201: 'Created',
           400: 'Bad Request',
           404: 'Not Found',
           409: 'Conflict',
           500: 'Internal Server Error',
           503: 'Service Unavailable'}

DEFAULT_MANIFEST = '{"id": "testing", "cmd": "sleep 60"}'

ALL_FIELDS_MANIFEST = """{
  "id": "test-app",
  "container": {
    "type": "DOCKER",
    "docker": {
      "image": "mesosphere/test-app:latest",
      "forcePullImage": true,
      "network": "BRIDGE",
      "portMappings": [
        {"hostPort": 80, "containerPort": 80, "protocol": "tcp"}
      ]
    }
  },
  "acceptedResourceRoles": ["agent_public"],
  "labels": {"lastChangedBy": "test@example.com"},
  "uris": ["http://www.example.com/file"],
  "instances": 1,
  "cpus": 0.1,
  "mem": 128,
  "healthChecks": [
    {
      "protocol": "TCP",
      "gracePeriodSeconds": 600,
      "intervalSeconds": 30,
      "portIndex": 0,
      "timeoutSeconds": 10,
      "maxConsecutiveFailures": 2
    }
  ],
  "upgradeStrategy": {"minimumHealthCapacity": 0},
  "backoffSeconds": 1,
  "backoffFactor": 1.15,
  "maxLaunchDelaySeconds": 3600
}"""


class DictWorkspace(object):
    """Workspace backed by a dict of file name -> content."""

    def __init__(self, files=None):
        self.files = dict(files or {})

    def read_text(self, filename):
        try:
            return self.files[filename]
        except KeyError:
            raise FileNotFoundError(filename)


def mk_response(status=200, body=None, reason=None):
    if isinstance(body, (dict, list)):
        text = json.dumps(body)
    else:
        text = body or ''
    response = Mock()
    response.status_code = status
    response.reason = REASONS.get(status, '') if reason is None else reason
    response.text = text
    response.json = Mock(side_effect=lambda: json.loads(text))
    return response


def mk_success(deployment_id='someid-here', version='one'):
    return mk_response(200, {'version': version,
                             'deploymentId': deployment_id})


def mk_session(*responses):
    """Session returning `responses` in order; an exception instance in
    the list is raised instead.
    """
    session = Mock()
    session.request = Mock(side_effect=list(responses))
    return session


def mk_build_log():
    return BuildLog(sink=io.StringIO())


def sent_url(session, call=-1):
    args, _ = session.request.call_args_list[call]
    return args[1]


def sent_body(session, call=-1):
    _, kwargs = session.request.call_args_list[call]
    return json.loads(kwargs['data'].decode('utf-8'))
