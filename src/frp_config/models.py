"""Client configuration models using Pydantic for type safety and validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from . import consts
from .ranges import get_alias, is_range


class ConfigModel(BaseModel):
    """Base for every configuration record."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        coerce_numbers_to_str=True,
    )


class AuthSettings(ConfigModel):
    """Authentication against the server."""

    method: str = Field(default="", description="Authentication method: token or oidc")
    authenticate_heartbeats: bool = Field(
        default=False, description="Authenticate every heartbeat"
    )
    authenticate_new_work_conns: bool = Field(
        default=False, description="Authenticate every new work connection"
    )
    token: str = Field(default="", description="Shared secret token")
    token_source: str = Field(
        default="", description="External token source; 'file' reads it from a file"
    )
    token_source_file: str = Field(
        default="", description="Path of the token file when the source is 'file'"
    )
    oidc_client_id: str = Field(default="", description="OIDC client id")
    oidc_client_secret: str = Field(default="", description="OIDC client secret")
    oidc_audience: str = Field(default="", description="OIDC audience")
    oidc_scope: str = Field(default="", description="OIDC scope")
    oidc_token_endpoint: str = Field(default="", description="OIDC token endpoint URL")
    oidc_additional_params: dict[str, str] = Field(
        default_factory=dict, description="Extra OIDC endpoint parameters"
    )


class AutoDelete(ConfigModel):
    """Self-destruct schedule for temporary configurations."""

    method: str = Field(default="", description="Delete method: absolute or relative")
    after_days: int = Field(
        default=0, ge=0, description="Days after which the config is deleted"
    )
    after_date: datetime | None = Field(
        default=None, description="Date on which the config is deleted"
    )


class ClientCommon(ConfigModel):
    """Connection-level settings shared by the whole client."""

    auth: AuthSettings = Field(
        default_factory=lambda: AuthSettings(method=consts.AUTH_TOKEN)
    )
    server_addr: str = Field(default="", description="Server address")
    server_port: int = Field(
        default=consts.DEFAULT_SERVER_PORT, ge=0, le=65535, description="Server port"
    )
    nat_hole_stun_server: str = Field(default="", description="STUN server for xtcp")
    dial_server_timeout: int = Field(default=0, ge=0, description="Dial timeout seconds")
    dial_server_keepalive: int = Field(default=0, description="Dial keep-alive seconds")
    connect_server_local_ip: str = Field(
        default="", description="Local address used to reach the server"
    )
    http_proxy: str = Field(default="", description="Proxy used to reach the server")
    log_file: str = Field(default="", description="Log file path")
    log_level: str = Field(default=consts.LOG_LEVEL_INFO, description="Log level")
    log_max_days: int = Field(
        default=consts.DEFAULT_LOG_MAX_DAYS, ge=0, description="Log retention days"
    )
    admin_addr: str = Field(default="", description="Admin endpoint address")
    admin_port: int = Field(default=0, ge=0, le=65535, description="Admin endpoint port")
    admin_user: str = Field(default="", description="Admin endpoint user")
    admin_pwd: str = Field(default="", description="Admin endpoint password")
    assets_dir: str = Field(default="", description="Admin web assets directory")
    pool_count: int = Field(default=0, ge=0, description="Pre-established connections")
    dns_server: str = Field(default="", description="DNS server")
    protocol: str = Field(default="", description="Transport protocol")
    quic_keepalive_period: int = Field(default=0, ge=0)
    quic_max_idle_timeout: int = Field(default=0, ge=0)
    quic_max_incoming_streams: int = Field(default=0, ge=0)
    login_fail_exit: bool = Field(
        default=False, description="Exit when the first login fails"
    )
    user: str = Field(default="", description="User name prefixed to proxy names")
    heartbeat_interval: int = Field(default=0, description="Heartbeat interval seconds")
    heartbeat_timeout: int = Field(default=0, description="Heartbeat timeout seconds")
    tcp_mux: bool = Field(default=True, description="Multiplex streams over one link")
    tcp_mux_keepalive_interval: int = Field(default=0, ge=0)
    tls_enable: bool = Field(default=True, description="Use TLS to reach the server")
    tls_cert_file: str = Field(default="", description="Client TLS certificate")
    tls_key_file: str = Field(default="", description="Client TLS key")
    tls_trusted_ca_file: str = Field(default="", description="Trusted CA file")
    tls_server_name: str = Field(default="", description="TLS server name override")
    udp_packet_size: int = Field(default=0, ge=0, description="UDP packet size")
    start: list[str] = Field(
        default_factory=list,
        description="Explicit start list of proxy aliases; empty means all",
    )
    pprof_enable: bool = Field(default=False, description="Expose the profiler")
    disable_custom_tls_first_byte: bool = Field(default=True)
    name: str = Field(default="", description="Display name of this config")
    manual_start: bool = Field(
        default=False, description="Do not start this config on system boot"
    )
    auto_delete: AutoDelete = Field(
        default_factory=lambda: AutoDelete(method=consts.DELETE_RELATIVE)
    )
    metas: dict[str, str] = Field(default_factory=dict, description="Client metadata")
    legacy_format: bool = Field(
        default=False, description="Persist in the legacy INI format"
    )


class PluginParams(ConfigModel):
    """Plugin settings, applicable only when a plugin kind is set."""

    kind: str = Field(default="", description="Plugin kind")
    local_addr: str = Field(default="", description="Address the plugin forwards to")
    crt_path: str = Field(default="", description="TLS certificate path")
    key_path: str = Field(default="", description="TLS key path")
    host_header_rewrite: str = Field(default="")
    http_user: str = Field(default="")
    http_passwd: str = Field(default="")
    user: str = Field(default="", description="SOCKS5 user")
    passwd: str = Field(default="", description="SOCKS5 password")
    local_path: str = Field(default="", description="Directory served by static_file")
    strip_prefix: str = Field(default="", description="URL prefix stripped by static_file")
    unix_path: str = Field(default="", description="Unix domain socket path")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers")
    enable_http2: bool = Field(default=False, description="Serve HTTP/2")


class HealthCheckConf(ConfigModel):
    """Health checking, applicable only when a health check kind is set."""

    kind: str = Field(default="", description="Health check kind: tcp or http")
    timeout_s: int = Field(default=0, ge=0, description="Seconds to wait for a check")
    max_failed: int = Field(default=0, ge=0, description="Failures before removal")
    interval_s: int = Field(default=0, ge=0, description="Seconds between checks")
    url: str = Field(default="", description="Probe URL for http checks")
    http_headers: dict[str, str] = Field(default_factory=dict)


class Proxy(ConfigModel):
    """One tunnel definition."""

    name: str = Field(default="", description="Proxy name")
    type: str = Field(default=consts.PROXY_TYPE_TCP, description="Proxy type")
    use_encryption: bool = Field(default=False)
    use_compression: bool = Field(default=False)
    group: str = Field(default="", description="Load balancing group")
    group_key: str = Field(default="", description="Load balancing group key")
    proxy_protocol_version: str = Field(default="", description="v1, v2 or empty")
    bandwidth_limit: str = Field(default="", description="Bandwidth limit, e.g. 1MB")
    bandwidth_limit_mode: str = Field(default="", description="client or server")
    local_ip: str = Field(default="")
    local_port: str = Field(default="", description="Local port or port range")
    plugin: PluginParams = Field(default_factory=PluginParams)
    health_check: HealthCheckConf = Field(default_factory=HealthCheckConf)
    metas: dict[str, str] = Field(default_factory=dict, description="Proxy metadata")
    disabled: bool = Field(default=False, description="Excluded from the start list")

    remote_port: str = Field(default="", description="Remote port or port range")
    role: str = Field(default="", description="server or visitor")
    sk: str = Field(default="", description="Secret key shared with visitors")
    allow_users: str = Field(default="")
    server_user: str = Field(default="")
    server_name: str = Field(default="", description="Name of the visited proxy")
    bind_addr: str = Field(default="")
    bind_port: int = Field(default=0, description="Visitor bind port; -1 disables it")
    custom_domains: str = Field(default="")
    subdomain: str = Field(default="")
    locations: str = Field(default="")
    http_user: str = Field(default="")
    http_pwd: str = Field(default="")
    host_header_rewrite: str = Field(default="")
    headers: dict[str, str] = Field(default_factory=dict)
    response_headers: dict[str, str] = Field(default_factory=dict)
    multiplexer: str = Field(default="")
    route_by_http_user: str = Field(default="")
    protocol: str = Field(default="", description="xtcp visitor protocol: kcp or quic")
    keep_tunnel_open: bool = Field(default=False)
    max_retries_an_hour: int = Field(default=0, ge=0)
    min_retry_interval: int = Field(default=0, ge=0)
    fallback_to: str = Field(default="", description="Visitor used when xtcp fails")
    fallback_timeout_ms: int = Field(default=0, ge=0)

    def is_visitor(self) -> bool:
        """Check whether this proxy has the visitor role."""
        return (
            self.type in consts.VISITOR_PROXY_TYPES
            and self.role == consts.ROLE_VISITOR
        )

    def is_range(self) -> bool:
        """Check whether the ports of this proxy expand into several proxies."""
        return is_range(self.type, self.local_port, self.remote_port)

    def get_alias(self) -> list[str]:
        """Names under which this proxy is started.

        It's usually the proxy name alone, but a range proxy is started as one
        proxy per local port.
        """
        return get_alias(self.name, self.type, self.local_port, self.remote_port)


class ClientConfig(ConfigModel):
    """Aggregate root: common settings plus the ordered proxy list."""

    common: ClientCommon = Field(default_factory=ClientCommon)
    proxies: list[Proxy] = Field(default_factory=list)

    @property
    def name(self) -> str:
        """Display name of this config."""
        return self.common.name

    @property
    def auto_start(self) -> bool:
        """Whether this config should be started at boot."""
        return not self.common.manual_start

    def add_proxy(self, proxy: Proxy) -> None:
        self.proxies = [*self.proxies, proxy]

    def delete_proxy(self, index: int) -> Proxy:
        proxies = list(self.proxies)
        removed = proxies.pop(index)
        self.proxies = proxies
        return removed

    def count_start(self) -> int:
        """Number of enabled proxies."""
        return sum(1 for proxy in self.proxies if not proxy.disabled)

    def ext(self) -> str:
        """File extension implied by the format of this config."""
        return consts.EXT_LEGACY if self.common.legacy_format else consts.EXT_MODERN

    def copy_config(self, all_proxies: bool) -> "ClientConfig":
        """Create a new config from this one.

        Args:
            all_proxies: Copy the proxies too, not only the common settings

        Returns:
            Independent copy; the log file is cleared since two configs can't
            share one
        """
        common = self.common.model_copy(deep=True)
        common.log_file = ""
        proxies = (
            [proxy.model_copy(deep=True) for proxy in self.proxies]
            if all_proxies
            else []
        )
        return ClientConfig(common=common, proxies=proxies)
