import collections

ResolvedRequest = collections.namedtuple('ResolvedRequest', [
    'endpoint',
    'body',
    'method',
    'params',
])

# Outcomes of a deployment request.

Success = collections.namedtuple('Success', [
    'deployment_id',
    'version',
    'status',
    'attempts',
])

ClientError = collections.namedtuple('ClientError', [
    'status',
    'reason',
    'body',
    'attempts',
])

ServerError = collections.namedtuple('ServerError', [
    'status',
    'reason',
    'body',
    'attempts',
])

TransportError = collections.namedtuple('TransportError', [
    'cause',
    'attempts',
])

Aborted = collections.namedtuple('Aborted', [
    'reason',
    'attempts',
])


def is_success(outcome):
    return isinstance(outcome, Success)
