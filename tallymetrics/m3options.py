"""Options and configuration for the M3 reporter, and its common tags."""

from __future__ import annotations

import dataclasses
import enum
import socket
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tallymetrics.cache import MetricTag
from tallymetrics.m3buckets import DEFAULT_HISTOGRAM_BUCKET_TAG_PRECISION

SERVICE_TAG = "service"
ENV_TAG = "env"
HOST_TAG = "host"

DEFAULT_MAX_QUEUE_SIZE = 4096
DEFAULT_MAX_PACKET_SIZE = 32768
DEFAULT_HISTOGRAM_BUCKET_ID_NAME = "bucketid"
DEFAULT_HISTOGRAM_BUCKET_NAME = "bucket"


class Protocol(enum.IntEnum):
    """Wire protocol used to encode metric batches."""

    COMPACT = 0
    BINARY = 1


def _check_host_port(host_port: str) -> None:
    host, sep, port = host_port.rpartition(":")
    if not sep:
        raise ValueError(f"address {host_port}: missing port in address")
    if not port.isdigit() or int(port) > 65535:
        raise ValueError(f"address {host_port}: invalid port")
    if host.startswith("[") != host.endswith("]"):
        raise ValueError(f"address {host_port}: malformed host")


@dataclass
class Options:
    """Settings for an M3 reporter."""

    host_ports: List[str] = field(default_factory=list)
    service: str = ""
    env: str = ""
    common_tags: Dict[str, str] = field(default_factory=dict)
    include_host: bool = False
    protocol: Protocol = Protocol.COMPACT
    max_queue_size: int = 0
    max_packet_size_bytes: int = 0
    histogram_bucket_id_name: str = ""
    histogram_bucket_name: str = ""
    histogram_bucket_tag_precision: int = 0

    def with_defaults(self) -> "Options":
        """Return a validated copy with unset fields given their defaults.

        Raises ValueError when no host port is given or one is malformed.
        """
        if not self.host_ports:
            raise ValueError("at least one entry for HostPorts is required")
        for host_port in self.host_ports:
            _check_host_port(host_port)

        return dataclasses.replace(
            self,
            host_ports=list(self.host_ports),
            common_tags=dict(self.common_tags or {}),
            max_queue_size=(
                self.max_queue_size if self.max_queue_size > 0 else DEFAULT_MAX_QUEUE_SIZE
            ),
            max_packet_size_bytes=(
                self.max_packet_size_bytes
                if self.max_packet_size_bytes > 0
                else DEFAULT_MAX_PACKET_SIZE
            ),
            histogram_bucket_id_name=(
                self.histogram_bucket_id_name or DEFAULT_HISTOGRAM_BUCKET_ID_NAME
            ),
            histogram_bucket_name=(
                self.histogram_bucket_name or DEFAULT_HISTOGRAM_BUCKET_NAME
            ),
            histogram_bucket_tag_precision=(
                self.histogram_bucket_tag_precision
                or DEFAULT_HISTOGRAM_BUCKET_TAG_PRECISION
            ),
        )


def build_common_tags(options: Options, hostname: Optional[str] = None) -> List[MetricTag]:
    """Tags sent with every batch: the common tags plus service, env and host.

    Service and env come from the options unless the common tags already
    set them; one of the two sources must give each. The host tag is added
    when include_host is set and the common tags lack it, using hostname or,
    if that is None, the local machine's name.
    """
    given = options.common_tags or {}
    tags = dict(given)

    if not given.get(SERVICE_TAG):
        if not options.service:
            raise ValueError(f"{SERVICE_TAG} common tag is required")
        tags[SERVICE_TAG] = options.service

    if not given.get(ENV_TAG):
        if not options.env:
            raise ValueError(f"{ENV_TAG} common tag is required")
        tags[ENV_TAG] = options.env

    if options.include_host and not given.get(HOST_TAG):
        if hostname is None:
            try:
                hostname = socket.gethostname()
            except OSError as exc:
                raise OSError(f"error resolving host tag: {exc}") from exc
        tags[HOST_TAG] = hostname

    return [MetricTag(name, value) for name, value in tags.items()]


@dataclass
class Configuration:
    """Declarative M3 reporter configuration."""

    host_port: str = ""
    host_ports: List[str] = field(default_factory=list)
    service: str = ""
    env: str = ""
    common_tags: Dict[str, str] = field(default_factory=dict)
    queue: int = 0
    packet_size: int = 0
    include_host: bool = False
    histogram_bucket_tag_precision: int = 0

    def to_options(self) -> Options:
        """Reporter options described by this configuration."""
        host_ports = list(self.host_ports) if self.host_ports else [self.host_port]
        return Options(
            host_ports=host_ports,
            service=self.service,
            env=self.env,
            common_tags=dict(self.common_tags or {}),
            max_queue_size=self.queue,
            max_packet_size_bytes=self.packet_size,
            include_host=self.include_host,
            histogram_bucket_tag_precision=self.histogram_bucket_tag_precision,
        )