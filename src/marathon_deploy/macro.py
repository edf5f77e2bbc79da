"""
Macro expansion of build variables and Marathon endpoint composition.
"""

import re
from urllib.parse import quote

from .defaults import APPS_RESOURCE

# $VAR or ${VAR}
MACRO_RE = re.compile(r'\$(?:\{([A-Za-z0-9_.]+)\}|([A-Za-z0-9_]+))')


def replace_macro(template, env):
    """Replaces `${VAR}` and `$VAR` tokens with values from `env`.

    Tokens whose variable is not in `env` are left untouched.

    :param template: string with macros
    :type  template: str
    :param env: build variables
    :type  env: dict
    :rtype: str
    """
    if not template or not env:
        return template

    def _replace(m):
        name = m.group(1) or m.group(2)
        value = env.get(name)
        return m.group(0) if value is None else str(value)

    return MACRO_RE.sub(_replace, template)


def app_path(app_id):
    """URL path of the application; '/' is kept as group separator."""
    return quote(app_id.strip('/'), safe='/')


def build_endpoint(base_url, app_id):
    """
    :param base_url: expanded Marathon URL
    :param app_id: resolved application id
    :return: <base_url>/v2/apps/<app_id>
    """
    return '{}/{}/{}'.format(base_url.rstrip('/'), APPS_RESOURCE,
                             app_path(app_id))


def expand_url(url_template, app_id, env):
    return build_endpoint(replace_macro(url_template, env), app_id)
