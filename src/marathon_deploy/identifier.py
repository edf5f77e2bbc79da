"""
Resolution of the Marathon application id.
"""

import logging

from .exceptions import MissingIdentifierError
from .macro import replace_macro
from .manifest import ID_FIELD, set_field

DEPRECATION_MESSAGE = ("DEPRECATION WARNING: 'appid' is deprecated and will "
                       "be removed in a future release. Use 'id' instead.")

log = logging.getLogger(__name__)


def resolve_id(config, manifest, build_log=None, env=None):
    """Determines the application id and sets it on `manifest`.

    Precedence: `id`, then the deprecated `appid`, then the manifest `id`.

    :param config: step configuration
    :type  config: marathon_deploy.config.StepConfig
    :param manifest: application definition, updated in place
    :type  manifest: collections.OrderedDict
    :param build_log: build console receiving the deprecation warning
    :type  build_log: marathon_deploy.log.BuildLog
    :param env: build variables for macro expansion of configured ids
    :return: resolved id
    :rtype: str
    """
    if config.id:
        app_id = replace_macro(config.id, env)
    elif config.appid:
        if build_log is not None:
            build_log.warning(DEPRECATION_MESSAGE)
        else:
            log.warning(DEPRECATION_MESSAGE)
        app_id = replace_macro(config.appid, env)
    else:
        app_id = manifest.get(ID_FIELD) or ''

    if not app_id.strip('/'):
        raise MissingIdentifierError(
            "No application id: set 'id' in the step configuration or in "
            "the application definition (got '%s')." % app_id)

    log.debug('Resolved application id: %s', app_id)
    set_field(manifest, ID_FIELD, app_id)
    return app_id
