"""Tests for profile paths and config file names."""

import os

import pytest

from frp_config.models import ClientCommon, ClientConfig
from frp_config.profiles import (
    config_filename,
    is_profile_dir,
    profile_dir_name,
    profile_path,
    sanitize_filename,
)


class TestProfilePath:
    """Test per-server profile directories."""

    def test_dir_name(self):
        config = ClientConfig(common=ClientCommon(server_addr="10.0.0.1", server_port=7001))

        assert profile_dir_name(config) == "R_10_0_0_1_7001"

    def test_ipv6_dir_name(self):
        config = ClientConfig(common=ClientCommon(server_addr="::1"))

        assert profile_dir_name(config) == "R___1_7000"

    def test_no_server(self):
        assert profile_dir_name(ClientConfig()) is None

    def test_path(self):
        config = ClientConfig(common=ClientCommon(server_addr="example.com"))

        assert profile_path(config, "office.toml") == os.path.join(
            "profiles", "R_example_com_7000", "office.toml"
        )

    def test_temp_profile(self):
        assert profile_path(None, "a.ini") == os.path.join("profiles", "temp", "a.ini")
        assert profile_path(ClientConfig(), "a.ini") == os.path.join("profiles", "temp", "a.ini")

    def test_is_profile_dir(self):
        assert is_profile_dir(os.path.join("profiles", "R_example_com_7000"))
        assert not is_profile_dir(os.path.join("profiles", "temp"))
        assert not is_profile_dir(os.path.join("profiles", "R_"))
        assert not is_profile_dir(os.path.join("other", "R_example_com_7000"))


class TestConfigFilename:
    """Test config file naming."""

    def test_sanitize(self):
        assert sanitize_filename('a<b>c:d"e/f\\g|h?i*j') == "a_b_c_d_e_f_g_h_i_j"

    def test_modern_name(self):
        config = ClientConfig(common=ClientCommon(name="office/main"))

        assert config_filename(config) == "office_main.toml"

    def test_legacy_name(self):
        config = ClientConfig(common=ClientCommon(name="office", legacy_format=True))

        assert config_filename(config) == "office.ini"

    def test_fallback(self):
        assert config_filename(ClientConfig(), fallback="imported") == "imported.toml"

    def test_no_name(self):
        with pytest.raises(ValueError, match="no name"):
            config_filename(ClientConfig())
