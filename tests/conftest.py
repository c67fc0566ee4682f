"""Shared pytest fixtures for configuration engine tests."""

import textwrap

import pytest

from frp_config.models import ClientConfig, PluginParams, Proxy


@pytest.fixture
def legacy_text():
    """Minimal legacy config with one tcp proxy.

    Returns:
        str: INI text
    """
    return textwrap.dedent(
        """\
        [common]
        server_addr = example.com
        server_port = 7001
        token = 123456
        frpcgui_manual_start = true
        frpcgui_delete_method = absolute
        frpcgui_delete_after_date = 2023-03-23T00:00:00Z
        meta_1 = value

        [ssh]
        type = tcp
        local_ip = 192.168.1.1
        local_port = 22
        remote_port = 6000
        meta_2 = value
        """
    )


@pytest.fixture
def modern_text():
    """Modern config with a web proxy and a disabled range proxy.

    Returns:
        str: TOML text
    """
    return textwrap.dedent(
        """\
        [client]
        server_addr = "frp.example.com"
        server_port = 7000
        authentication_method = "token"
        token = "secret"
        frpcgui_name = "office"
        start = ["web"]
        meta_owner = "ops"

        [proxies.web]
        type = "http"
        local_port = "8080"
        custom_domains = "www.example.com"
        locations = "/"
        header_X-From-Where = "frp"

        [proxies.games]
        type = "udp"
        local_port = "7000-7002"
        remote_port = "7000-7002"
        """
    )


@pytest.fixture
def sample_config():
    """Config with one proxy of each flavor.

    Returns:
        ClientConfig: Config in the modern format
    """
    config = ClientConfig()
    config.common.name = "sample"
    config.common.server_addr = "example.com"
    config.common.auth.token = "token"
    config.add_proxy(
        Proxy(name="ssh", type="tcp", local_ip="127.0.0.1", local_port="22", remote_port="6000")
    )
    config.add_proxy(
        Proxy(
            name="web",
            type="http",
            local_port="80",
            subdomain="web",
            headers={"X-From-Where": "frp"},
        )
    )
    config.add_proxy(
        Proxy(name="range_tcp", type="tcp", local_port="6000-6002", remote_port="6000-6002")
    )
    config.add_proxy(
        Proxy(
            name="secret_visitor",
            type="stcp",
            role="visitor",
            server_name="secret",
            sk="abc",
            bind_addr="127.0.0.1",
            bind_port=9000,
        )
    )
    config.add_proxy(
        Proxy(
            name="files",
            type="tcp",
            remote_port="6010",
            plugin=PluginParams(kind="static_file", local_path="/srv", strip_prefix="static"),
        )
    )
    return config
