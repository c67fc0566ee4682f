"""Tests for the capability schema table."""

import pytest

from frp_config.models import (
    AuthSettings,
    AutoDelete,
    ClientCommon,
    HealthCheckConf,
    PluginParams,
    Proxy,
)
from frp_config.schema import (
    SCHEMA,
    WILDCARD,
    FieldKind,
    FieldSpec,
    Grouping,
    specs_for,
    zero_record,
    zero_value,
)
from frp_config.common.exceptions import ConfigurationError


class TestSchemaCoverage:
    """Every model field is described exactly once."""

    @pytest.mark.parametrize(
        "record_type",
        [AuthSettings, AutoDelete, ClientCommon, PluginParams, HealthCheckConf, Proxy],
    )
    def test_fields_match_model(self, record_type):
        names = [spec.name for spec in specs_for(record_type)]

        assert sorted(names) == sorted(record_type.model_fields)

    def test_persisted_keys_are_unique_per_block(self):
        """Nested records share their parent's block, so keys must not clash"""

        def keys(record_type):
            for spec in SCHEMA[record_type]:
                if spec.kind == FieldKind.RECORD:
                    yield from keys(spec.record)
                elif spec.key is not None:
                    yield spec.key

        for record_type in (ClientCommon, Proxy):
            block = list(keys(record_type))
            assert len(block) == len(set(block))

    def test_unknown_record_type(self):
        with pytest.raises(ConfigurationError, match="No schema"):
            specs_for(FieldSpec)


class TestFieldSpec:
    """Test label acceptance of a single field."""

    def test_undeclared_grouping_retains(self):
        spec = FieldSpec(name="token")

        assert spec.retains(Grouping.PLUGIN, "socks5")

    def test_declared_labels(self):
        spec = FieldSpec(name="token", accepts={Grouping.AUTH: frozenset({"token"})})

        assert spec.retains(Grouping.AUTH, "token")
        assert not spec.retains(Grouping.AUTH, "oidc")

    def test_wildcard(self):
        spec = FieldSpec(name="sk", accepts={Grouping.VISITOR: frozenset({WILDCARD})})

        assert spec.retains(Grouping.VISITOR, "xtcp")
        assert spec.retains(Grouping.VISITOR, "anything")

    def test_empty_label_set_never_retains(self):
        spec = FieldSpec(name="local_ip", accepts={Grouping.VISITOR: frozenset()})

        assert spec.declares(Grouping.VISITOR)
        assert not spec.retains(Grouping.VISITOR, "stcp")


class TestZeroValues:
    """Test zero values derived from field kinds."""

    def test_scalars(self):
        assert zero_value(FieldSpec(name="a", kind=FieldKind.STR)) == ""
        assert zero_value(FieldSpec(name="a", kind=FieldKind.INT)) == 0
        assert zero_value(FieldSpec(name="a", kind=FieldKind.BOOL)) is False
        assert zero_value(FieldSpec(name="a", kind=FieldKind.DATE)) is None

    def test_containers_are_fresh(self):
        spec = FieldSpec(name="metas", kind=FieldKind.MAP, prefix="meta_")

        first = zero_value(spec)
        first["k"] = "v"

        assert zero_value(spec) == {}

    def test_zero_record_differs_from_defaults(self):
        """ClientCommon defaults (tcp_mux, TLS) are not its zero values"""
        zero = zero_record(ClientCommon)

        assert zero.tcp_mux is False
        assert zero.tls_enable is False
        assert zero.server_port == 0
        assert zero.auth == AuthSettings()

    def test_zero_auto_delete(self):
        assert zero_record(AutoDelete) == AutoDelete()

