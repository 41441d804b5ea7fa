"""
Tests for ResolverConfig
"""
import dataclasses

import pytest

from clientaddr import (
    ClientAddressResolver,
    ConfigurationError,
    ConfigurationReason,
    DEFAULT_HEADER_NAMES,
    InvalidTrustSpecError,
    IPFamily,
    MissingTrustedProxiesError,
    ResolverConfig,
    SpecKind,
    TrustSpec,
)


class TestResolverConfig:
    """Test configuration defaults and validation"""

    def test_defaults(self):
        """Test default configuration ignores proxy headers"""
        config = ResolverConfig()
        assert config.check_proxy_headers is False
        assert config.trusted_proxies == ()
        assert config.attribute_name == "ip_address"
        assert config.header_names == DEFAULT_HEADER_NAMES
        assert config.hop_count is None

    def test_default_header_priority(self):
        """Test standard header list order"""
        assert DEFAULT_HEADER_NAMES == (
            "Forwarded",
            "X-Forwarded-For",
            "X-Forwarded",
            "X-Cluster-Client-Ip",
            "Client-Ip",
        )

    def test_missing_trusted_proxies_raises(self):
        """Test enabling proxy headers without a list fails fast"""
        with pytest.raises(MissingTrustedProxiesError) as exc_info:
            ResolverConfig(check_proxy_headers=True)
        assert exc_info.value.reason == ConfigurationReason.MISSING_TRUSTED_PROXIES

    def test_empty_trusted_proxies_allowed(self):
        """Test explicit empty list means implicit trust"""
        config = ResolverConfig(check_proxy_headers=True, trusted_proxies=[])
        assert config.trusts_implicitly

    def test_trusted_proxies_parsed(self):
        """Test patterns become TrustSpec tuple"""
        config = ResolverConfig(
            check_proxy_headers=True,
            trusted_proxies=["192.168.0.1", "10.0.*.*", "10.11.0.0/16", "*"],
        )
        assert [s.kind for s in config.trusted_proxies] == [
            SpecKind.EXACT, SpecKind.WILDCARD, SpecKind.CIDR, SpecKind.MATCH_ALL,
        ]
        assert not config.trusts_implicitly

    def test_trusted_proxies_from_generator(self):
        """Test any iterable of patterns is accepted"""
        config = ResolverConfig(
            check_proxy_headers=True,
            trusted_proxies=(p for p in ["10.0.0.1"]),
        )
        assert len(config.trusted_proxies) == 1

    def test_trust_spec_instances_used_for_resolution(self):
        """Test TrustSpec objects in the config are honored when resolving"""
        config = ResolverConfig(
            check_proxy_headers=True,
            trusted_proxies=[
                TrustSpec(kind=SpecKind.CIDR, pattern="10.0.0.0/8", family=IPFamily.IPV4),
                TrustSpec(kind=SpecKind.EXACT, pattern="192.168.0.1"),
            ],
        )
        resolver = ClientAddressResolver(config)
        headers = {"X-Forwarded-For": "203.0.113.9"}
        assert resolver.resolve("10.1.2.3", headers) == "203.0.113.9"
        assert resolver.resolve("192.168.0.1", headers) == "203.0.113.9"
        assert resolver.resolve("192.168.0.2", headers) == "192.168.0.2"

    def test_invalid_pattern_raises(self):
        """Test malformed trust pattern aborts construction"""
        with pytest.raises(InvalidTrustSpecError):
            ResolverConfig(check_proxy_headers=True, trusted_proxies=["10.0.0.0/40"])

    def test_invalid_pattern_raises_without_proxy_checking(self):
        """Test patterns are validated even when headers are not checked"""
        with pytest.raises(InvalidTrustSpecError):
            ResolverConfig(trusted_proxies=["10.*"])

    @pytest.mark.parametrize("hop_count", [-1, 1.5, "2", True])
    def test_invalid_hop_count(self, hop_count):
        """Test hop count must be a non-negative integer"""
        with pytest.raises(ConfigurationError) as exc_info:
            ResolverConfig(check_proxy_headers=True, trusted_proxies=[], hop_count=hop_count)
        assert exc_info.value.reason == ConfigurationReason.INVALID_HOP_COUNT

    def test_zero_hop_count_allowed(self):
        """Test zero is a valid hop count"""
        assert ResolverConfig(hop_count=0).hop_count == 0

    @pytest.mark.parametrize("attribute_name", ["", None, 5])
    def test_invalid_attribute_name(self, attribute_name):
        """Test attribute name must be a non-empty string"""
        with pytest.raises(ConfigurationError) as exc_info:
            ResolverConfig(attribute_name=attribute_name)
        assert exc_info.value.reason == ConfigurationReason.INVALID_ATTRIBUTE_NAME

    @pytest.mark.parametrize("header_names", [[""], ["Forwarded", None], ["  "]])
    def test_invalid_header_names(self, header_names):
        """Test header names must be non-empty strings"""
        with pytest.raises(ConfigurationError) as exc_info:
            ResolverConfig(header_names=header_names)
        assert exc_info.value.reason == ConfigurationReason.INVALID_HEADER_NAMES

    def test_single_header_name_string(self):
        """Test a lone header name is not split into characters"""
        assert ResolverConfig(header_names="Foo-Bar").header_names == ("Foo-Bar",)

    def test_header_names_frozen(self):
        """Test header list is copied into a tuple"""
        names = ["Foo-Bar"]
        config = ResolverConfig(header_names=names)
        names.append("X-Forwarded-For")
        assert config.header_names == ("Foo-Bar",)

    def test_config_is_immutable(self):
        """Test fields cannot be reassigned"""
        config = ResolverConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.check_proxy_headers = True

    def test_configuration_error_is_value_error(self):
        """Test configuration errors can be caught as ValueError"""
        with pytest.raises(ValueError):
            ResolverConfig(check_proxy_headers=True)


class TestFromMapping:
    """Test building config from settings"""

    def test_from_mapping(self):
        """Test known keys map to fields"""
        config = ResolverConfig.from_mapping({
            "check_proxy_headers": True,
            "trusted_proxies": ["10.0.0.0/8"],
            "hop_count": 2,
        })
        assert config.check_proxy_headers is True
        assert config.hop_count == 2
        assert config.trusted_proxies[0].kind == SpecKind.CIDR

    def test_unknown_key_rejected(self):
        """Test typos are reported"""
        with pytest.raises(ConfigurationError, match="trusted_proxy"):
            ResolverConfig.from_mapping({"check_proxy_headers": True, "trusted_proxy": []})

    def test_validation_applies(self):
        """Test mapping input goes through the same validation"""
        with pytest.raises(MissingTrustedProxiesError):
            ResolverConfig.from_mapping({"check_proxy_headers": True})
