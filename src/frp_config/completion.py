"""Completion: pruning and cross-field reconciliation of a client config.

Completion runs once after a config is decoded ("read" mode) and once
before it is encoded ("write" mode). Both modes prune fields that don't apply
to the active auth method, auto-delete method, transport, plugin, health check
and proxy type. They differ in how the start list relates to the per-proxy
``disabled`` flags: reading derives the flags from the list, writing derives
the list from the flags.
"""

from . import consts
from .common.logging import get_logger
from .models import (
    AuthSettings,
    AutoDelete,
    ClientCommon,
    ClientConfig,
    HealthCheckConf,
    PluginParams,
    Proxy,
)
from .projection import project
from .schema import Grouping

logger = get_logger(__name__)


def complete_auth(auth: AuthSettings) -> AuthSettings:
    """Prune auth settings down to the active method.

    A token source takes precedence over a literal token. Choosing the token
    method with neither a token nor a source leaves no usable method, so the
    whole block is cleared.
    """
    method = auth.method
    if not method:
        return AuthSettings()

    auth = project(auth, Grouping.AUTH, method)
    if method == consts.AUTH_TOKEN:
        if auth.token_source:
            auth.token = ""
        else:
            auth.token_source_file = ""
            if not auth.token:
                return AuthSettings()
    return auth


def complete_auto_delete(auto_delete: AutoDelete) -> AutoDelete:
    """Keep only the value that matches the active delete method."""
    if not auto_delete.method:
        return AutoDelete()
    return project(auto_delete, Grouping.AUTO_DELETE, auto_delete.method)


def complete_common(common: ClientCommon) -> None:
    """Prune the client-common settings in place."""
    if common.legacy_format:
        # The legacy format has no way to express an external token source.
        common.auth = common.auth.model_copy(update={"token_source": ""})
    common.auth = complete_auth(common.auth)

    if common.admin_port == 0:
        common.admin_user = ""
        common.admin_pwd = ""
        common.assets_dir = ""
        common.pprof_enable = False

    common.auto_delete = complete_auto_delete(common.auto_delete)

    if not common.tcp_mux:
        common.tcp_mux_keepalive_interval = 0

    if not common.tls_enable:
        common.tls_server_name = ""
        common.tls_cert_file = ""
        common.tls_key_file = ""
        common.tls_trusted_ca_file = ""

    if common.protocol == consts.PROTO_QUIC:
        common.dial_server_timeout = 0
        common.dial_server_keepalive = 0
    else:
        common.quic_max_idle_timeout = 0
        common.quic_keepalive_period = 0
        common.quic_max_incoming_streams = 0


def complete_proxy(proxy: Proxy) -> None:
    """Remove the parameters that don't apply to the proxy type, in place."""
    if proxy.is_visitor():
        # Name, type, encryption, compression and the disabled flag accept any
        # visitor type in the schema; every other shared field is dropped.
        completed = project(proxy, Grouping.VISITOR, proxy.type)
        if not completed.keep_tunnel_open:
            completed.max_retries_an_hour = 0
            completed.min_retry_interval = 0
        if not completed.fallback_to:
            completed.fallback_timeout_ms = 0
    else:
        update: dict[str, object] = {}
        if proxy.plugin.kind:
            # The plugin replaces forwarding to a local address.
            update["local_ip"] = ""
            update["local_port"] = ""
            update["plugin"] = project(proxy.plugin, Grouping.PLUGIN, proxy.plugin.kind)
        else:
            update["plugin"] = PluginParams()

        if proxy.health_check.kind:
            update["health_check"] = project(
                proxy.health_check, Grouping.HEALTH_CHECK, proxy.health_check.kind
            )
        else:
            update["health_check"] = HealthCheckConf()

        # Shared fields, plugin and health check don't take part in the proxy
        # type grouping, so the values completed above pass through untouched.
        completed = project(
            proxy.model_copy(update=update), Grouping.PROXY_TYPE, proxy.type
        )

    for name in Proxy.model_fields:
        setattr(proxy, name, getattr(completed, name))


def gather_start(proxies: list[Proxy]) -> list[str]:
    """Aliases of the enabled proxies, or an empty list if all are enabled."""
    start: list[str] = []
    all_start = True
    for proxy in proxies:
        if proxy.disabled:
            all_start = False
        else:
            start.extend(proxy.get_alias())
    if all_start:
        return []
    return start


def complete(config: ClientConfig, read: bool) -> None:
    """Prune and complete a config in place.

    Args:
        config: Config to complete
        read: True for a config just loaded from a source, False for one about
            to be written to disk
    """
    complete_common(config.common)

    start = set(config.common.start)
    for proxy in config.proxies:
        complete_proxy(proxy)
        if read and start:
            proxy.disabled = not all(alias in start for alias in proxy.get_alias())

    if not read:
        config.common.start = gather_start(config.proxies)

    logger.debug(
        "Config completed",
        read=read,
        proxies=len(config.proxies),
        enabled=config.count_start(),
    )
