import json

import pytest

from marathon_deploy.config import StepConfig
from marathon_deploy.exceptions import ManifestError, ManifestNotFoundError, \
    MalformedManifestError
from marathon_deploy.manifest import Workspace, load_manifest, \
    parse_manifest, inline_manifest, apply_overrides, get_manifest, \
    set_field

import fixtures

pytestmark = pytest.mark.local


def test_load_manifest_from_workspace(tmp_path):
    (tmp_path / 'marathon.json').write_text(fixtures.DEFAULT_MANIFEST,
                                            encoding='utf-8')
    manifest = load_manifest(Workspace(str(tmp_path)))
    assert ['id', 'cmd'] == list(manifest)
    assert 'testing' == manifest['id']


def test_load_manifest_custom_file():
    ws = fixtures.DictWorkspace({'apps/web.json': '{"id": "web"}'})
    assert {'id': 'web'} == load_manifest(ws, 'apps/web.json')


def test_load_manifest_missing_file(tmp_path):
    with pytest.raises(ManifestNotFoundError) as excinfo:
        load_manifest(Workspace(str(tmp_path)))
    assert isinstance(excinfo.value, FileNotFoundError)
    assert "Could not find file 'marathon.json'" == str(excinfo.value)
    assert 'marathon.json' == excinfo.value.filename


def test_parse_manifest_malformed():
    for content in ['', '{"id": ', 'not json', '[1, 2]', '"app"', 'null',
                    '{"id": 12}', b'\xff\xfe']:
        with pytest.raises(MalformedManifestError):
            parse_manifest(content, 'marathon.json')


def test_parse_manifest_keeps_order_and_values():
    manifest = parse_manifest(fixtures.ALL_FIELDS_MANIFEST)
    expected = json.loads(fixtures.ALL_FIELDS_MANIFEST)
    assert expected == manifest
    assert 'id' == list(manifest)[0]
    assert 'maxLaunchDelaySeconds' == list(manifest)[-1]


def test_inline_manifest():
    assert {'id': 'a'} == inline_manifest('{"id": "a"}')

    source = {'id': 'a', 'labels': {'x': '1'}}
    manifest = inline_manifest(source)
    manifest['labels']['x'] = '2'
    assert '1' == source['labels']['x']

    with pytest.raises(MalformedManifestError):
        inline_manifest({'id': 'a', 'bad': object()})


def test_set_field_keeps_position():
    manifest = parse_manifest('{"cmd": "sleep", "id": "old", "mem": 1}')
    set_field(manifest, 'id', 'new')
    assert ['cmd', 'id', 'mem'] == list(manifest)
    assert 'new' == manifest['id']

    set_field(manifest, 'cpus', 0.5)
    assert ['cmd', 'id', 'mem', 'cpus'] == list(manifest)


def test_docker_overrides_create_container():
    config = StepConfig('http://m', docker='repo/app:${BUILD_NUMBER}',
                        docker_force_pull=False)
    manifest = apply_overrides(parse_manifest('{"id": "a"}'), config,
                               {'BUILD_NUMBER': '5'})
    assert {'type': 'DOCKER',
            'docker': {'image': 'repo/app:5',
                       'forcePullImage': False}} == manifest['container']


def test_docker_overrides_existing_container():
    config = StepConfig('http://m', docker='repo/app:2')
    manifest = apply_overrides(parse_manifest(fixtures.ALL_FIELDS_MANIFEST),
                               config)
    docker = manifest['container']['docker']
    assert 'repo/app:2' == docker['image']
    assert True is docker['forcePullImage']
    assert 'BRIDGE' == docker['network']


def test_uris_and_labels_overrides():
    config = StepConfig('http://m',
                        uris=['http://www.example.com/file',
                              'http://example.com/$BUILD_NUMBER.tgz'],
                        labels='team=ci, build=${BUILD_NUMBER}')
    manifest = apply_overrides(parse_manifest(fixtures.ALL_FIELDS_MANIFEST),
                               config, {'BUILD_NUMBER': '9'})
    assert ['http://www.example.com/file',
            'http://example.com/9.tgz'] == manifest['uris']
    assert {'lastChangedBy': 'test@example.com',
            'team': 'ci',
            'build': '9'} == manifest['labels']


def test_no_overrides_is_identity():
    manifest = parse_manifest(fixtures.ALL_FIELDS_MANIFEST)
    expected = json.loads(fixtures.ALL_FIELDS_MANIFEST)
    assert expected == apply_overrides(manifest, StepConfig('http://m'))


def test_get_manifest_prefers_inline():
    ws = fixtures.DictWorkspace({'marathon.json': '{"id": "from-file"}'})
    config = StepConfig('http://m', json='{"id": "inline"}')
    assert 'inline' == get_manifest(config, ws)['id']
    assert 'from-file' == get_manifest(StepConfig('http://m'), ws)['id']


def test_load_manifest_not_utf8(tmp_path):
    (tmp_path / 'marathon.json').write_bytes(b'{"id": "\xff"}')
    with pytest.raises(MalformedManifestError) as excinfo:
        load_manifest(Workspace(str(tmp_path)))
    assert 'marathon.json' in str(excinfo.value)


def test_load_manifest_unreadable(tmp_path):
    (tmp_path / 'marathon.json').mkdir()
    with pytest.raises(ManifestError) as excinfo:
        load_manifest(Workspace(str(tmp_path)))
    assert not isinstance(excinfo.value, ManifestNotFoundError)
    assert 'marathon.json' == excinfo.value.filename
    assert "Could not read file 'marathon.json'" in str(excinfo.value)


def test_overrides_leave_config_untouched():
    config = StepConfig('http://m', labels={'team': 'ci'})
    manifest = apply_overrides(parse_manifest('{"id": "a"}'), config)
    manifest['labels']['team'] = 'changed'
    assert (('team', 'ci'),) == config.labels
