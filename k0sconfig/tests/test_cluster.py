import yaml

from k0sconfig.models import (
    APISpec,
    Chart,
    ClusterConfig,
    ClusterExtensions,
    ClusterSpec,
    HelmExtensions,
    KonnectivitySpec,
    Validatable,
    default_cluster_config,
    default_cluster_spec,
    validate,
)

ALWAYS_DEFAULTED = (
    "api", "controller_manager", "scheduler", "storage", "network", "pod_security_policy",
    "telemetry", "install", "images", "konnectivity",
)


def test_default_cluster_spec_populates_every_section():
    spec = default_cluster_spec("/var/lib/k0s")
    for name in ALWAYS_DEFAULTED:
        assert getattr(spec, name) is not None, name
    assert spec.extensions is None
    assert spec.controller_manager.extra_args == {}
    assert spec.scheduler.extra_args == {}


def test_default_cluster_config_identity():
    config = default_cluster_config()
    assert config.kind == "ClusterConfig"
    assert config.api_version == "k0s.k0sproject.io/v1beta1"
    assert config.metadata.name == "k0s"


def test_default_config_is_valid():
    assert validate(default_cluster_config()) == []
    assert default_cluster_config("/opt/k0s").validate_spec() == []


def test_storage_default_uses_data_dir():
    spec = default_cluster_spec("/opt/k0s")
    assert spec.storage.kine.data_source.startswith("sqlite:///opt/k0s/db/state.db")


def test_unmarshal_applies_identity_defaults():
    config = ClusterConfig.unmarshal({})
    assert config.kind == "ClusterConfig"
    assert config.metadata.name == "k0s"
    assert config.spec.api is not None


def test_unmarshal_payload_values_win():
    config = ClusterConfig.unmarshal({
        "kind": "ClusterConfig",
        "metadata": {"name": "prod", "labels": {"env": "prod"}},
        "spec": {"api": {"address": "10.0.0.1"}},
    })
    assert config.metadata.name == "prod"
    assert config.metadata.labels == {"env": "prod"}
    assert config.spec.api.address == "10.0.0.1"
    assert config.spec.api.sans == ["10.0.0.1"]


def test_unmarshal_present_sub_spec_replaces_default():
    config = ClusterConfig.unmarshal({"spec": {"network": {"provider": "calico"}}})
    network = config.spec.network
    assert network.provider == "calico"
    # the default kube-router block is not merged into a replaced network section
    assert network.kuberouter is None
    assert network.pod_cidr == "10.244.0.0/16"
    # untouched sections keep their defaults
    assert config.spec.storage is not None


def test_unmarshal_does_not_modify_payload():
    payload = {"spec": {"extensions": {}}}
    ClusterConfig.unmarshal(payload)
    assert payload == {"spec": {"extensions": {}}}


def test_unmarshal_extensions_without_helm_get_helm_defaults():
    config = ClusterConfig.unmarshal({"spec": {"extensions": {}}})
    helm = config.spec.extensions.helm
    assert helm.concurrency_level == 5
    assert helm.repositories.root == []
    assert helm.charts.root == []


def test_unmarshal_without_extensions_leaves_them_absent():
    assert ClusterConfig.unmarshal({"spec": {}}).spec.extensions is None


def test_validate_fans_out_in_fixed_order():
    spec = default_cluster_spec()
    spec.konnectivity = KonnectivitySpec(admin_port=8132, agent_port=8132)
    spec.extensions = ClusterExtensions(helm=HelmExtensions(charts=[Chart(name="", chart_name="c", target_ns="n")]))
    spec.api = APISpec(address="not-an-ip", sans=["10.0.0.1"])
    config = default_cluster_config()
    config.spec = spec

    fields = [e.field for e in validate(config)]
    assert fields == [
        "spec.api.address",
        "spec.extensions.helm.charts[0].name",
        "spec.konnectivity.agentPort",
    ]


def test_validate_does_not_stop_at_first_error():
    spec = default_cluster_spec()
    spec.extensions = ClusterExtensions(helm=HelmExtensions(charts=[Chart(), Chart(name="x")]))
    config = ClusterConfig(spec=spec)
    assert len(config.validate_spec()) == 2


def test_validate_tolerates_missing_optional_sections():
    spec = ClusterSpec(api=None, telemetry=None)
    assert ClusterConfig(spec=spec).validate_spec() == []


def test_validate_reports_missing_spec():
    config = ClusterConfig(spec=None)
    assert [e.field for e in config.validate_spec()] == ["spec"]


def test_to_dict_omits_empty_argument_maps():
    data = default_cluster_config().to_dict()
    assert "controllerManager" not in data["spec"]
    assert "scheduler" not in data["spec"]
    assert "extensions" not in data["spec"]

    config = default_cluster_config()
    config.spec.scheduler.extra_args = {"bind-address": "0.0.0.0"}
    assert config.to_dict()["spec"]["scheduler"] == {"extraArgs": {"bind-address": "0.0.0.0"}}


def test_to_yaml_round_trips():
    original = default_cluster_config("/opt/k0s")
    original.spec.extensions = ClusterExtensions(helm=HelmExtensions(
        charts=[Chart(name="app", chart_name="repo/app", target_ns="apps", timeout="5m")]))
    data = yaml.safe_load(original.to_yaml())
    assert data["spec"]["extensions"]["helm"]["charts"][0]["timeout"] == "5m0s"
    assert ClusterConfig.unmarshal(data).to_dict() == original.to_dict()


def test_every_sub_spec_is_validatable():
    spec = default_cluster_spec()
    spec.extensions = ClusterExtensions()
    for name in ALWAYS_DEFAULTED + ("worker_profiles", "extensions"):
        assert isinstance(getattr(spec, name), Validatable), name
