"""Capability schema of every configurable field.

Each record type maps to an ordered tuple of ``FieldSpec`` entries. A spec
names the persisted key of the field, its value kind, and for every grouping
it takes part in, the labels under which the field is retained:

- a grouping the entry doesn't mention leaves the field untouched;
- a mentioned grouping keeps the field only for the listed labels, or for
  any label when ``WILDCARD`` is listed.

The projection engine and both codecs walk this table, so adding a field here
is all it takes to prune, persist and load it.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field

from . import consts
from .common.exceptions import ConfigurationError
from .models import (
    AuthSettings,
    AutoDelete,
    ClientCommon,
    HealthCheckConf,
    PluginParams,
    Proxy,
)

WILDCARD = "*"


class Grouping(str, Enum):
    """Field groupings whose active label decides which fields survive."""

    AUTH = "auth"
    AUTO_DELETE = "auto_delete"
    PLUGIN = "plugin"
    HEALTH_CHECK = "health_check"
    PROXY_TYPE = "proxy_type"
    VISITOR = "visitor"


class FieldKind(str, Enum):
    """Value kind of a field, which fixes its zero value and its encoding."""

    STR = "str"
    INT = "int"
    BOOL = "bool"
    LIST = "list"
    MAP = "map"
    DATE = "date"
    RECORD = "record"


class FieldSpec(BaseModel):
    """Schema entry of a single field."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Attribute name on the record")
    kind: FieldKind = Field(default=FieldKind.STR)
    key: str | None = Field(
        default=None, description="Persisted key; None when the field isn't persisted"
    )
    prefix: str | None = Field(default=None, description="Side-map key prefix")
    record: type[BaseModel] | None = Field(
        default=None, description="Nested record type"
    )
    accepts: dict[Grouping, frozenset[str]] = Field(default_factory=dict)
    always_present: bool = Field(
        default=False, description="Written even when it holds the zero value"
    )
    legacy: bool = Field(
        default=True, description="Representable in the legacy INI format"
    )

    def declares(self, grouping: Grouping) -> bool:
        return grouping in self.accepts

    def retains(self, grouping: Grouping, label: str) -> bool:
        """Check whether the field survives projection onto ``label``."""
        labels = self.accepts.get(grouping)
        if labels is None:
            return True
        return WILDCARD in labels or label in labels


_SAME = "\0same"


def _spec(
    name: str,
    kind: FieldKind = FieldKind.STR,
    key: str | None = _SAME,
    *,
    prefix: str | None = None,
    record: type[BaseModel] | None = None,
    always_present: bool = False,
    legacy: bool = True,
    **accepts: Iterable[str],
) -> FieldSpec:
    if key == _SAME:
        key = None if kind in (FieldKind.MAP, FieldKind.RECORD) else name
    return FieldSpec(
        name=name,
        kind=kind,
        key=key,
        prefix=prefix,
        record=record,
        accepts={Grouping(g): frozenset(labels) for g, labels in accepts.items()},
        always_present=always_present,
        legacy=legacy,
    )


STR = FieldKind.STR
INT = FieldKind.INT
BOOL = FieldKind.BOOL
LIST = FieldKind.LIST
MAP = FieldKind.MAP
DATE = FieldKind.DATE
RECORD = FieldKind.RECORD

ANY = (WILDCARD,)
NONE: tuple[str, ...] = ()

SECRET_TYPES = consts.VISITOR_PROXY_TYPES
VHOST_TYPES = (consts.PROXY_TYPE_HTTP, consts.PROXY_TYPE_HTTPS, consts.PROXY_TYPE_TCPMUX)
HTTP_TYPES = (consts.PROXY_TYPE_HTTP,)
HTTP_AUTH_TYPES = (consts.PROXY_TYPE_HTTP, consts.PROXY_TYPE_TCPMUX)
XTCP = (consts.PROXY_TYPE_XTCP,)

HTTP_PLUGINS = (
    consts.PLUGIN_HTTP2HTTPS,
    consts.PLUGIN_HTTP2HTTP,
    consts.PLUGIN_HTTPS2HTTPS,
    consts.PLUGIN_HTTPS2HTTP,
)
TLS_PLUGINS = (
    consts.PLUGIN_HTTPS2HTTPS,
    consts.PLUGIN_HTTPS2HTTP,
    consts.PLUGIN_TLS2RAW,
)
BASIC_AUTH_PLUGINS = (consts.PLUGIN_HTTP_PROXY, consts.PLUGIN_STATIC_FILE)

AUTH_METHODS = (consts.AUTH_TOKEN, consts.AUTH_OIDC)
TOKEN = (consts.AUTH_TOKEN,)
OIDC = (consts.AUTH_OIDC,)

HEALTH_CHECKS = (consts.HEALTH_CHECK_TCP, consts.HEALTH_CHECK_HTTP)


SCHEMA: dict[type[BaseModel], tuple[FieldSpec, ...]] = {
    AuthSettings: (
        _spec("method", key="authentication_method"),
        _spec("authenticate_heartbeats", BOOL, auth=AUTH_METHODS),
        _spec("authenticate_new_work_conns", BOOL, auth=AUTH_METHODS),
        _spec("token", auth=TOKEN),
        _spec("token_source", legacy=False, auth=TOKEN),
        _spec("token_source_file", legacy=False, auth=TOKEN),
        _spec("oidc_client_id", auth=OIDC),
        _spec("oidc_client_secret", auth=OIDC),
        _spec("oidc_audience", auth=OIDC),
        _spec("oidc_scope", auth=OIDC),
        _spec("oidc_token_endpoint", key="oidc_token_endpoint_url", auth=OIDC),
        _spec(
            "oidc_additional_params",
            MAP,
            prefix=consts.OIDC_ADDITIONAL_PREFIX,
            auth=OIDC,
        ),
    ),
    AutoDelete: (
        _spec("method", key="frpcgui_delete_method"),
        _spec(
            "after_days",
            INT,
            key="frpcgui_delete_after_days",
            auto_delete=(consts.DELETE_RELATIVE,),
        ),
        _spec(
            "after_date",
            DATE,
            key="frpcgui_delete_after_date",
            auto_delete=(consts.DELETE_ABSOLUTE,),
        ),
    ),
    ClientCommon: (
        _spec("auth", RECORD, record=AuthSettings),
        _spec("server_addr"),
        _spec("server_port", INT),
        _spec("nat_hole_stun_server"),
        _spec("dial_server_timeout", INT),
        _spec("dial_server_keepalive", INT),
        _spec("connect_server_local_ip"),
        _spec("http_proxy"),
        _spec("log_file"),
        _spec("log_level"),
        _spec("log_max_days", INT),
        _spec("admin_addr"),
        _spec("admin_port", INT),
        _spec("admin_user"),
        _spec("admin_pwd"),
        _spec("assets_dir"),
        _spec("pool_count", INT),
        _spec("dns_server"),
        _spec("protocol"),
        _spec("quic_keepalive_period", INT),
        _spec("quic_max_idle_timeout", INT),
        _spec("quic_max_incoming_streams", INT),
        _spec("login_fail_exit", BOOL, always_present=True),
        _spec("user"),
        _spec("heartbeat_interval", INT),
        _spec("heartbeat_timeout", INT),
        _spec("tcp_mux", BOOL, always_present=True),
        _spec("tcp_mux_keepalive_interval", INT),
        _spec("tls_enable", BOOL, always_present=True),
        _spec("tls_cert_file"),
        _spec("tls_key_file"),
        _spec("tls_trusted_ca_file"),
        _spec("tls_server_name"),
        _spec("udp_packet_size", INT),
        _spec("start", LIST),
        _spec("pprof_enable", BOOL),
        _spec("disable_custom_tls_first_byte", BOOL, always_present=True),
        _spec("name", key="frpcgui_name", always_present=True),
        _spec("manual_start", BOOL, key="frpcgui_manual_start"),
        _spec("auto_delete", RECORD, record=AutoDelete),
        _spec("metas", MAP, prefix=consts.META_PREFIX),
        _spec("legacy_format", BOOL, key=None),
    ),
    PluginParams: (
        _spec("kind", key="plugin"),
        _spec("local_addr", key="plugin_local_addr", plugin=HTTP_PLUGINS + (consts.PLUGIN_TLS2RAW,)),
        _spec("crt_path", key="plugin_crt_path", plugin=TLS_PLUGINS),
        _spec("key_path", key="plugin_key_path", plugin=TLS_PLUGINS),
        _spec("host_header_rewrite", key="plugin_host_header_rewrite", plugin=HTTP_PLUGINS),
        _spec("http_user", key="plugin_http_user", plugin=BASIC_AUTH_PLUGINS),
        _spec("http_passwd", key="plugin_http_passwd", plugin=BASIC_AUTH_PLUGINS),
        _spec("user", key="plugin_user", plugin=(consts.PLUGIN_SOCKS5,)),
        _spec("passwd", key="plugin_passwd", plugin=(consts.PLUGIN_SOCKS5,)),
        _spec("local_path", key="plugin_local_path", plugin=(consts.PLUGIN_STATIC_FILE,)),
        _spec("strip_prefix", key="plugin_strip_prefix", plugin=(consts.PLUGIN_STATIC_FILE,)),
        _spec("unix_path", key="plugin_unix_path", plugin=(consts.PLUGIN_UNIX_DOMAIN_SOCKET,)),
        _spec("headers", MAP, prefix=consts.PLUGIN_HEADER_PREFIX, plugin=HTTP_PLUGINS),
        _spec(
            "enable_http2",
            BOOL,
            key="plugin_enable_http2",
            legacy=False,
            plugin=(consts.PLUGIN_HTTPS2HTTPS, consts.PLUGIN_HTTPS2HTTP),
        ),
    ),
    HealthCheckConf: (
        _spec("kind", key="health_check_type"),
        _spec("timeout_s", INT, key="health_check_timeout_s", health_check=HEALTH_CHECKS),
        _spec("max_failed", INT, key="health_check_max_failed", health_check=HEALTH_CHECKS),
        _spec("interval_s", INT, key="health_check_interval_s", health_check=HEALTH_CHECKS),
        _spec("url", key="health_check_url", health_check=(consts.HEALTH_CHECK_HTTP,)),
        _spec(
            "http_headers",
            MAP,
            prefix=consts.HEALTH_CHECK_HEADER_PREFIX,
            health_check=(consts.HEALTH_CHECK_HTTP,),
        ),
    ),
    Proxy: (
        # Shared by every proxy type; a visitor keeps only its identity flags.
        _spec("name", key=None, visitor=ANY),
        _spec("type", visitor=ANY),
        _spec("use_encryption", BOOL, visitor=ANY),
        _spec("use_compression", BOOL, visitor=ANY),
        _spec("group", visitor=NONE),
        _spec("group_key", visitor=NONE),
        _spec("proxy_protocol_version", visitor=NONE),
        _spec("bandwidth_limit", visitor=NONE),
        _spec("bandwidth_limit_mode", visitor=NONE),
        _spec("local_ip", visitor=NONE),
        _spec("local_port", visitor=NONE),
        _spec("plugin", RECORD, record=PluginParams, visitor=NONE),
        _spec("health_check", RECORD, record=HealthCheckConf, visitor=NONE),
        _spec("metas", MAP, prefix=consts.META_PREFIX, visitor=NONE),
        _spec("disabled", BOOL, key=None, visitor=ANY),
        # Type specific
        _spec("remote_port", proxy_type=consts.RANGE_PROXY_TYPES, visitor=NONE),
        _spec("role", proxy_type=SECRET_TYPES, visitor=ANY),
        _spec("sk", proxy_type=SECRET_TYPES, visitor=ANY),
        _spec("allow_users", proxy_type=SECRET_TYPES, visitor=NONE),
        _spec("server_user", proxy_type=NONE, visitor=ANY),
        _spec("server_name", proxy_type=NONE, visitor=ANY),
        _spec("bind_addr", proxy_type=NONE, visitor=ANY),
        _spec("bind_port", INT, proxy_type=NONE, visitor=ANY),
        _spec("custom_domains", proxy_type=VHOST_TYPES, visitor=NONE),
        _spec("subdomain", proxy_type=VHOST_TYPES, visitor=NONE),
        _spec("locations", proxy_type=HTTP_TYPES, visitor=NONE),
        _spec("http_user", proxy_type=HTTP_AUTH_TYPES, visitor=NONE),
        _spec("http_pwd", proxy_type=HTTP_AUTH_TYPES, visitor=NONE),
        _spec("host_header_rewrite", proxy_type=HTTP_TYPES, visitor=NONE),
        _spec("headers", MAP, prefix=consts.HEADER_PREFIX, proxy_type=HTTP_TYPES, visitor=NONE),
        _spec(
            "response_headers",
            MAP,
            prefix=consts.RESPONSE_HEADER_PREFIX,
            proxy_type=HTTP_TYPES,
            visitor=NONE,
        ),
        _spec("multiplexer", proxy_type=(consts.PROXY_TYPE_TCPMUX,), visitor=NONE),
        _spec("route_by_http_user", proxy_type=HTTP_AUTH_TYPES, visitor=NONE),
        # xtcp visitor tuning
        _spec("protocol", proxy_type=NONE, visitor=XTCP),
        _spec("keep_tunnel_open", BOOL, proxy_type=NONE, visitor=XTCP),
        _spec("max_retries_an_hour", INT, proxy_type=NONE, visitor=XTCP),
        _spec("min_retry_interval", INT, proxy_type=NONE, visitor=XTCP),
        _spec("fallback_to", proxy_type=NONE, visitor=XTCP),
        _spec("fallback_timeout_ms", INT, proxy_type=NONE, visitor=XTCP),
    ),
}


def specs_for(record_type: type[BaseModel]) -> tuple[FieldSpec, ...]:
    """Get the schema entries of a record type, in persisted order."""
    try:
        return SCHEMA[record_type]
    except KeyError:
        raise ConfigurationError(f"No schema for {record_type.__name__}") from None


_ZERO_SCALARS: dict[FieldKind, Any] = {
    FieldKind.STR: "",
    FieldKind.INT: 0,
    FieldKind.BOOL: False,
    FieldKind.DATE: None,
}


def zero_value(spec: FieldSpec) -> Any:
    """Zero value of a field; a fresh object for containers and records."""
    if spec.kind == FieldKind.LIST:
        return []
    if spec.kind == FieldKind.MAP:
        return {}
    if spec.kind == FieldKind.RECORD:
        return zero_record(cast(type[BaseModel], spec.record))
    return _ZERO_SCALARS[spec.kind]


def zero_record(record_type: type[BaseModel]) -> Any:
    """Record of ``record_type`` with every field at its zero value."""
    return record_type.model_construct(
        **{spec.name: zero_value(spec) for spec in specs_for(record_type)}
    )


def _check_coverage() -> None:
    """Every model field has exactly one schema entry and nested records are described."""
    for record_type, specs in SCHEMA.items():
        names = [spec.name for spec in specs]
        if len(names) != len(set(names)):
            raise ConfigurationError(f"Duplicate schema entries for {record_type.__name__}")
        fields = set(record_type.model_fields)
        missing = fields - set(names)
        unknown = set(names) - fields
        if missing or unknown:
            raise ConfigurationError(
                f"Schema of {record_type.__name__} out of sync: "
                f"missing={sorted(missing)} unknown={sorted(unknown)}"
            )
        for spec in specs:
            if spec.kind == FieldKind.RECORD and spec.record not in SCHEMA:
                raise ConfigurationError(f"No schema for nested record {spec.name}")
            if spec.kind == FieldKind.MAP and not spec.prefix:
                raise ConfigurationError(f"Side-map {spec.name} has no key prefix")


_check_coverage()
