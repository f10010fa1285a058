import socket

import pytest

from tallymetrics.cache import MetricTag
from tallymetrics.m3options import (
    DEFAULT_MAX_PACKET_SIZE,
    DEFAULT_MAX_QUEUE_SIZE,
    Configuration,
    Options,
    Protocol,
    build_common_tags,
)


def _as_dict(tags):
    return {tag.name: tag.value for tag in tags}


def test_config_simple():
    config = Configuration(host_port="127.0.0.1:9052", service="my-service", env="test")
    options = config.to_options().with_defaults()
    assert options.host_ports == ["127.0.0.1:9052"]
    tags = build_common_tags(options)
    assert MetricTag("service", "my-service") in tags
    assert MetricTag("env", "test") in tags


def test_config_multi():
    config = Configuration(
        host_ports=["127.0.0.1:9052", "127.0.0.1:9062"],
        service="my-service",
        env="test",
    )
    options = config.to_options().with_defaults()
    assert options.host_ports == ["127.0.0.1:9052", "127.0.0.1:9062"]
    tags = build_common_tags(options)
    assert MetricTag("service", "my-service") in tags
    assert MetricTag("env", "test") in tags


def test_config_carries_fields():
    config = Configuration(
        host_port="127.0.0.1:9052",
        service="svc",
        env="prod",
        common_tags={"a": "b"},
        queue=12,
        packet_size=1440,
        include_host=True,
        histogram_bucket_tag_precision=3,
    )
    options = config.to_options()
    assert options.max_queue_size == 12
    assert options.max_packet_size_bytes == 1440
    assert options.include_host is True
    assert options.histogram_bucket_tag_precision == 3
    assert options.common_tags == {"a": "b"}


def test_defaults_applied():
    options = Options(host_ports=["127.0.0.1:9052"], service="s", env="e").with_defaults()
    assert options.max_queue_size == DEFAULT_MAX_QUEUE_SIZE == 4096
    assert options.max_packet_size_bytes == DEFAULT_MAX_PACKET_SIZE == 32768
    assert options.histogram_bucket_id_name == "bucketid"
    assert options.histogram_bucket_name == "bucket"
    assert options.histogram_bucket_tag_precision == 6
    assert options.protocol is Protocol.COMPACT


def test_explicit_values_kept():
    options = Options(
        host_ports=["127.0.0.1:9052"],
        max_queue_size=1000,
        max_packet_size_bytes=1440,
        histogram_bucket_id_name="id",
        histogram_bucket_name="b",
        histogram_bucket_tag_precision=2,
        protocol=Protocol.BINARY,
    ).with_defaults()
    assert options.max_queue_size == 1000
    assert options.max_packet_size_bytes == 1440
    assert options.histogram_bucket_id_name == "id"
    assert options.histogram_bucket_name == "b"
    assert options.histogram_bucket_tag_precision == 2
    assert options.protocol is Protocol.BINARY


def test_no_host_ports_error():
    with pytest.raises(ValueError, match="HostPorts"):
        Options(service="test-service").with_defaults()


def test_invalid_address_error():
    with pytest.raises(ValueError):
        Options(host_ports=["fakeAddress"], service="test-service").with_defaults()


def test_reporter_common_tags():
    common = {
        "env": "development",
        "host": "somehost",
        "commonTag": "common",
        "commonTag2": "tag",
        "commonTag3": "val",
    }
    options = Options(
        host_ports=["127.0.0.1:9052"],
        service="test-service",
        common_tags=common,
        include_host=True,
    )
    tags = build_common_tags(options, "otherhost")
    assert len(tags) == len(common) + 1
    for tag in tags:
        if tag.name == "service":
            assert tag.value == "test-service"
        else:
            assert tag.value == common[tag.name]


def test_reporter_specify_service():
    common = {"service": "overrideService", "env": "test", "host": "overrideHost"}
    options = Options(
        host_ports=["127.0.0.1:1000"],
        service="test-service",
        common_tags=common,
        include_host=True,
    )
    tags = build_common_tags(options, "ignoredhost")
    assert _as_dict(tags) == {
        "service": "overrideService",
        "env": "test",
        "host": "overrideHost",
    }


def test_include_host():
    base = dict(host_ports=["127.0.0.1:9052"], service="test-service", common_tags={"env": "test"})
    without = build_common_tags(Options(include_host=False, **base), "myhost")
    assert "host" not in _as_dict(without)
    with_host = build_common_tags(Options(include_host=True, **base), "myhost")
    assert _as_dict(with_host)["host"] == "myhost"


def test_include_host_uses_local_name():
    options = Options(service="s", env="e", include_host=True)
    assert _as_dict(build_common_tags(options))["host"] == socket.gethostname()


def test_missing_service_error():
    with pytest.raises(ValueError, match="service common tag is required"):
        build_common_tags(Options(env="test"))


def test_missing_env_error():
    with pytest.raises(ValueError, match="env common tag is required"):
        build_common_tags(Options(service="test-service"))


def test_env_from_options():
    tags = build_common_tags(Options(service="svc", env="staging"))
    assert _as_dict(tags) == {"service": "svc", "env": "staging"}