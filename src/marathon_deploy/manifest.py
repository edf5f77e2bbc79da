"""
Loading of the Marathon application definition and merging of step overrides.
"""

import collections
import io
import json
import logging
import os

from .defaults import DEFAULT_MANIFEST_FILE
from .exceptions import ManifestError, ManifestNotFoundError, \
    MalformedManifestError
from .macro import replace_macro

ID_FIELD = 'id'
CONTAINER_FIELD = 'container'
DOCKER_FIELD = 'docker'
DOCKER_IMAGE_FIELD = 'image'
DOCKER_FORCE_PULL_FIELD = 'forcePullImage'
URIS_FIELD = 'uris'
LABELS_FIELD = 'labels'
CONTAINER_TYPE_DOCKER = 'DOCKER'

log = logging.getLogger(__name__)


class Workspace(object):
    """Build workspace giving read access to files by relative path."""

    def __init__(self, path='.'):
        self.path = path

    def read_text(self, filename, encoding='utf-8'):
        with io.open(os.path.join(self.path, filename), encoding=encoding) as f:
            return f.read()


def parse_manifest(content, source='<inline>'):
    """Parses JSON text into an ordered mapping.

    :param content: JSON document
    :type  content: str or bytes
    :param source: name used in error messages
    :rtype: collections.OrderedDict
    """
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedManifestError(
                "'%s' is not UTF-8 encoded: %s" % (source, e))
    try:
        manifest = json.loads(content,
                              object_pairs_hook=collections.OrderedDict)
    except ValueError as e:
        raise MalformedManifestError(
            "'%s' is not valid JSON: %s" % (source, e))
    return check_manifest(manifest, source)


def check_manifest(manifest, source='<inline>'):
    if not isinstance(manifest, dict):
        raise MalformedManifestError(
            "'%s' must contain a JSON object, got %s"
            % (source, type(manifest).__name__))
    if ID_FIELD in manifest and not isinstance(manifest[ID_FIELD], str):
        raise MalformedManifestError(
            "'%s': field '%s' must be a string" % (source, ID_FIELD))
    return manifest


def load_manifest(workspace, filename=DEFAULT_MANIFEST_FILE):
    """Reads and parses the application definition from the workspace.

    :param workspace: object providing read_text(filename)
    :type  workspace: Workspace
    :param filename: path relative to the workspace
    :rtype: collections.OrderedDict
    """
    try:
        content = workspace.read_text(filename)
    except FileNotFoundError:
        raise ManifestNotFoundError(filename)
    except UnicodeDecodeError as e:
        raise MalformedManifestError(
            "'%s' is not UTF-8 encoded: %s" % (filename, e))
    except OSError as e:
        raise ManifestError("Could not read file '%s': %s"
                            % (filename, e.strerror or e), filename)
    log.debug('Read %s characters from %s', len(content), filename)
    return parse_manifest(content, filename)


def inline_manifest(value):
    if isinstance(value, dict):
        # Round trip to get a private copy of nested values.
        try:
            value = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise MalformedManifestError(
                "Inline manifest is not serializable to JSON: %s" % e)
    return parse_manifest(value)


def set_field(manifest, key, value):
    """Sets `key`, keeping its position if it is already present."""
    manifest[key] = value
    return manifest


def _docker(manifest):
    container = manifest.get(CONTAINER_FIELD)
    if not isinstance(container, dict):
        container = collections.OrderedDict([('type', CONTAINER_TYPE_DOCKER)])
        manifest[CONTAINER_FIELD] = container
    docker = container.get(DOCKER_FIELD)
    if not isinstance(docker, dict):
        docker = collections.OrderedDict()
        container[DOCKER_FIELD] = docker
    return docker


def set_docker_image(manifest, image):
    set_field(_docker(manifest), DOCKER_IMAGE_FIELD, image)
    return manifest


def set_force_pull(manifest, force_pull):
    set_field(_docker(manifest), DOCKER_FORCE_PULL_FIELD, force_pull)
    return manifest


def add_uris(manifest, uris):
    existing = manifest.get(URIS_FIELD)
    if not isinstance(existing, list):
        existing = []
        manifest[URIS_FIELD] = existing
    for uri in uris:
        if uri not in existing:
            existing.append(uri)
    return manifest


def add_labels(manifest, labels):
    existing = manifest.get(LABELS_FIELD)
    if not isinstance(existing, dict):
        existing = collections.OrderedDict()
        manifest[LABELS_FIELD] = existing
    existing.update(labels)
    return manifest


def apply_overrides(manifest, config, env=None):
    """Merges docker image, force pull, uris and labels from the step
    configuration into `manifest`.  Values are macro expanded with `env`.
    """
    if config.docker:
        set_docker_image(manifest, replace_macro(config.docker, env))
    if config.docker_force_pull is not None:
        set_force_pull(manifest, config.docker_force_pull)
    if config.uris:
        add_uris(manifest, [replace_macro(u, env) for u in config.uris])
    if config.labels:
        add_labels(manifest, collections.OrderedDict(
            (k, replace_macro(v, env)) for k, v in config.labels))
    return manifest


def get_manifest(config, workspace, env=None):
    """Inline manifest if configured, otherwise the workspace file, with
    the step overrides merged in.
    """
    if config.json is not None:
        manifest = inline_manifest(config.json)
    else:
        manifest = load_manifest(workspace, config.filename)
    return apply_overrides(manifest, config, env)
