import io
import json

import pytest

from k0sconfig.errors import ConfigDecodeError, ConfigIOError
from k0sconfig.loader import config_from_file, config_from_stdin, config_from_string

ALWAYS_DEFAULTED = (
    "api", "controller_manager", "scheduler", "storage", "network", "pod_security_policy",
    "telemetry", "install", "images", "konnectivity",
)

FULL_CONFIG = """
apiVersion: k0s.k0sproject.io/v1beta1
kind: ClusterConfig
metadata:
  name: my-cluster
spec:
  api:
    address: 192.168.68.104
    port: 6443
    k0sApiPort: 9443
    sans:
      - 192.168.68.104
      - k0s.example.com
  controllerManager:
    extraArgs:
      node-monitor-period: 5s
  storage:
    type: etcd
    etcd:
      peerAddress: 192.168.68.104
  network:
    provider: calico
    podCIDR: 10.244.0.0/16
    serviceCIDR: 10.96.0.0/12
    calico:
      mode: vxlan
  podSecurityPolicy:
    defaultPolicy: 00-k0s-privileged
  workerProfiles:
    - name: custom-role
      values:
        maxPods: 200
  telemetry:
    enabled: false
  extensions:
    helm:
      concurrencyLevel: 3
      repositories:
        - name: prometheus-community
          url: https://prometheus-community.github.io/helm-charts
          insecure: false
      charts:
        - name: prometheus-stack
          chartname: prometheus-community/prometheus
          version: "14.6.1"
          namespace: default
          timeout: 10m
          order: 1
          values: |
            storageSpec:
              emptyDir:
                medium: Memory
  konnectivity:
    adminPort: 8133
    agentPort: 8132
"""


def test_missing_spec_is_fully_defaulted():
    config = config_from_string("apiVersion: k0s.k0sproject.io/v1beta1\nkind: ClusterConfig\n")
    for name in ALWAYS_DEFAULTED:
        assert getattr(config.spec, name) is not None, name
    assert config.spec.extensions is None
    assert config.validate_spec() == []


def test_null_spec_is_fully_defaulted():
    config = config_from_string("spec: null\n", "/opt/k0s")
    for name in ALWAYS_DEFAULTED:
        assert getattr(config.spec, name) is not None, name
    assert "/opt/k0s/db/state.db" in config.spec.storage.kine.data_source


def test_null_spec_uses_document_data_dir():
    omitted = config_from_string("dataDir: /data/k0s\n", "/fallback")
    null = config_from_string("dataDir: /data/k0s\nspec: null\n", "/fallback")
    assert null.spec.storage.kine.data_source == omitted.spec.storage.kine.data_source
    assert "/data/k0s/db/state.db" in null.spec.storage.kine.data_source


def test_null_identity_keys_keep_defaults():
    config = config_from_string("apiVersion: null\nkind: null\nmetadata: null\n")
    assert config.api_version == "k0s.k0sproject.io/v1beta1"
    assert config.kind == "ClusterConfig"
    assert config.metadata.name == "k0s"


def test_empty_document_is_fully_defaulted():
    config = config_from_string("")
    assert config.metadata.name == "k0s"
    assert config.spec.network is not None


def test_data_dir_fallback_feeds_storage_defaults():
    config = config_from_string("kind: ClusterConfig\n", "/tmp/k0s")
    assert config.spec.storage.kine.data_source == (
        "sqlite:///tmp/k0s/db/state.db?mode=rwc&_journal=WAL&cache=shared"
    )
    assert config.data_dir == ""


def test_document_data_dir_wins_over_fallback():
    config = config_from_string("dataDir: /data/k0s\n", "/tmp/k0s")
    assert config.data_dir == "/data/k0s"
    assert "/data/k0s/db/state.db" in config.spec.storage.kine.data_source


def test_full_document():
    config = config_from_string(FULL_CONFIG)
    assert config.metadata.name == "my-cluster"
    assert config.spec.api.sans == ["192.168.68.104", "k0s.example.com"]
    assert config.spec.controller_manager.extra_args == {"node-monitor-period": "5s"}
    assert config.spec.telemetry.enabled is False
    assert config.spec.worker_profiles.root[0].values == {"maxPods": 200}

    helm = config.spec.extensions.helm
    assert helm.concurrency_level == 3
    assert helm.repositories[0].is_insecure() is False
    chart = helm.charts[0]
    assert chart.version == "14.6.1"
    assert chart.target_ns == "default"
    assert chart.timeout.total_seconds() == 600
    assert "emptyDir" in chart.values

    assert config.validate_spec() == []


def test_json_documents_are_accepted():
    doc = {"apiVersion": "k0s.k0sproject.io/v1beta1", "kind": "ClusterConfig",
           "spec": {"telemetry": {"enabled": False}}}
    config = config_from_string(json.dumps(doc))
    assert config.spec.telemetry.enabled is False


def test_unknown_field_is_a_decode_error():
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_string("spec:\n  api:\n    adress: 10.0.0.1\n")
    assert ("spec.api.adress", "Extra inputs are not permitted") in exc.value.field_errors
    assert "spec.api.adress" in str(exc.value)


def test_unknown_top_level_field_is_a_decode_error():
    with pytest.raises(ConfigDecodeError):
        config_from_string("kind: ClusterConfig\nspecs: {}\n")


@pytest.mark.parametrize("document", [
    "interval: 1m\n",
    "spec:\n  network:\n    interval: 30s\n",
    "spec:\n  extensions:\n    helm:\n      charts:\n        - name: a\n          chartname: r/a\n"
    "          namespace: ns\n          interval: 5m\n",
])
def test_interval_is_tolerated_and_dropped(document, caplog):
    config = config_from_string(document)
    assert "interval" not in json.dumps(config.to_dict())
    assert "Ignoring deprecated field" in caplog.text


def test_interval_does_not_hide_other_unknown_fields():
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_string("interval: 1m\nbogus: true\n")
    assert [loc for loc, _ in exc.value.field_errors] == ["interval", "bogus"]


def test_decode_error_carries_partial_config():
    document = (
        "dataDir: /data/k0s\n"
        "metadata:\n  name: partial\n"
        "spec:\n"
        "  api:\n    bogus: 1\n"
        "  network:\n    podCIDR: 10.0.0.0/16\n"
    )
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_string(document)
    partial = exc.value.config
    assert partial is not None
    assert partial.data_dir == "/data/k0s"
    assert partial.metadata.name == "partial"
    assert partial.spec.network.pod_cidr == "10.0.0.0/16"
    # the broken section falls back to its default
    assert partial.spec.api.port == 6443


def test_wrong_value_type_is_a_decode_error():
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_string("spec:\n  api:\n    port: not-a-port\n")
    assert exc.value.field_errors[0][0] == "spec.api.port"


@pytest.mark.parametrize("document", ["spec: [", "- a\n- b\n", "just a string"])
def test_malformed_documents_are_decode_errors(document):
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_string(document)
    assert exc.value.config is not None


def test_config_from_file(tmp_path):
    path = tmp_path / "k0s.yaml"
    path.write_text(FULL_CONFIG)
    config = config_from_file(path)
    assert config.metadata.name == "my-cluster"
    assert config_from_file(str(path)).spec.network.provider == "calico"


def test_missing_file_is_an_io_error(tmp_path):
    path = tmp_path / "missing.yaml"
    with pytest.raises(ConfigIOError) as exc:
        config_from_file(path, "/var/lib/k0s")
    assert exc.value.source == str(path)
    assert str(path) in str(exc.value)
    assert isinstance(exc.value.__cause__, OSError)


def test_config_from_stdin():
    config = config_from_stdin("", io.StringIO("metadata:\n  name: from-stdin\n"))
    assert config.metadata.name == "from-stdin"


def test_config_from_stdin_uses_sys_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("spec:\n  telemetry:\n    enabled: false\n"))
    assert config_from_stdin().spec.telemetry.enabled is False


def test_unreadable_stdin_is_an_io_error():
    stream = io.StringIO("")
    stream.close()
    with pytest.raises(ConfigIOError) as exc:
        config_from_stdin("", stream)
    assert exc.value.source == "stdin"


def test_loads_are_independent():
    first = config_from_string("")
    second = config_from_string("")
    first.spec.controller_manager.extra_args["foo"] = "bar"
    assert second.spec.controller_manager.extra_args == {}


@pytest.mark.parametrize("key,value", [
    ("chart_name", "r/a"),
    ("target_ns", "ns"),
    ("disable_force_upgrade", "true"),
])
def test_python_attribute_names_are_not_document_keys(key, value):
    document = (
        "spec:\n  extensions:\n    helm:\n      charts:\n"
        "        - name: a\n          chartname: r/a\n          namespace: ns\n"
        f"          {key}: {value}\n"
    )
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_string(document)
    assert f"spec.extensions.helm.charts[0].{key}" in [loc for loc, _ in exc.value.field_errors]


@pytest.mark.parametrize("document", [
    "spec:\n  network:\n    pod_cidr: 10.0.0.0/16\n",
    "spec:\n  extensions:\n    helm:\n      concurrency_level: 2\n",
    "data_dir: /data/k0s\n",
])
def test_snake_case_keys_are_decode_errors(document):
    with pytest.raises(ConfigDecodeError):
        config_from_string(document)


@pytest.mark.parametrize("timeout", ["[1]", ".inf", "99999999999h"])
def test_malformed_chart_timeout_is_a_decode_error(timeout):
    document = (
        "spec:\n  extensions:\n    helm:\n      charts:\n"
        "        - name: a\n          chartname: r/a\n          namespace: ns\n"
        f"          timeout: {timeout}\n"
    )
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_string(document)
    assert exc.value.field_errors[0][0] == "spec.extensions.helm.charts[0].timeout"
    assert exc.value.config is not None


def test_non_utf8_file_is_a_decode_error(tmp_path):
    path = tmp_path / "k0s.yaml"
    path.write_bytes(b"metadata:\n  name: \xff\xfe\n")
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_file(path, "/opt/k0s")
    assert str(path) in str(exc.value)
    assert exc.value.config is not None
    assert exc.value.config.spec.network is not None


def test_non_utf8_stdin_is_a_decode_error():
    stream = io.TextIOWrapper(io.BytesIO(b"metadata:\n  name: \xff\xfe\n"), encoding="utf-8")
    with pytest.raises(ConfigDecodeError) as exc:
        config_from_stdin("", stream)
    assert exc.value.config is not None
