import dataclasses
import hashlib

import pytest

from otpcore import Algorithm, Config, InvalidConfiguration, OTPError, UnsupportedAlgorithm, config_from_env, make_config


class TestAlgorithm:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("SHA1", Algorithm.SHA1),
            ("sha1", Algorithm.SHA1),
            ("SHA-256", Algorithm.SHA256),
            ("sha_512", Algorithm.SHA512),
            ("HmacSHA256", Algorithm.SHA256),
            (Algorithm.SHA512, Algorithm.SHA512),
        ],
    )
    def test_parse(self, name, expected):
        assert Algorithm.parse(name) is expected

    @pytest.mark.parametrize("name", ["MD5", "SHA384", "", None, 256])
    def test_parse_unknown(self, name):
        with pytest.raises(UnsupportedAlgorithm):
            Algorithm.parse(name)

    def test_resolve(self):
        assert Algorithm.SHA1.resolve() is hashlib.sha1
        assert Algorithm.SHA256.resolve() is hashlib.sha256
        assert Algorithm.SHA512.resolve() is hashlib.sha512


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.digits == 6
        assert config.algorithm is Algorithm.SHA1
        assert config.period == 30
        assert config.digest is hashlib.sha1

    def test_immutable(self):
        config = Config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.digits = 8

    def test_equality(self):
        assert Config(digits=8) == make_config(digits=8)
        assert Config(algorithm="sha256") == Config(algorithm=Algorithm.SHA256)
        assert Config() != Config(period=60)

    @pytest.mark.parametrize("digits", [6, 7, 8, 9, 10])
    def test_valid_digits(self, digits):
        assert Config(digits=digits).digits == digits

    @pytest.mark.parametrize("digits", [-1, 0, 5, 11, 12, True, 6.0, "6"])
    def test_invalid_digits(self, digits):
        with pytest.raises(InvalidConfiguration):
            Config(digits=digits)

    @pytest.mark.parametrize("period", [0, -30, 1.5, "30", None])
    def test_invalid_period(self, period):
        with pytest.raises(InvalidConfiguration):
            Config(period=period)

    def test_unknown_algorithm(self):
        with pytest.raises(UnsupportedAlgorithm):
            make_config(algorithm="MD5")

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidConfiguration, OTPError)
        assert issubclass(UnsupportedAlgorithm, OTPError)
        with pytest.raises(ValueError):
            Config(digits=4)

    def test_repr(self):
        assert repr(Config()) == "Config(digits=6, algorithm=<Algorithm.SHA1: 'sha1'>, period=30)"


class TestConfigFromEnv:
    def test_defaults(self):
        assert config_from_env({}) == Config()

    def test_reads_prefixed_values(self):
        environ = {"OTP_DIGITS": "8", "OTP_ALGORITHM": "SHA512", "OTP_PERIOD": "60"}
        assert config_from_env(environ) == Config(digits=8, algorithm=Algorithm.SHA512, period=60)

    def test_custom_prefix(self):
        environ = {"MFA_DIGITS": "7", "OTP_DIGITS": "8"}
        assert config_from_env(environ, prefix="MFA_").digits == 7

    def test_blank_values_use_defaults(self):
        assert config_from_env({"OTP_DIGITS": " ", "OTP_ALGORITHM": ""}) == Config()

    def test_non_integer(self):
        with pytest.raises(InvalidConfiguration):
            config_from_env({"OTP_PERIOD": "thirty"})

    def test_out_of_range(self):
        with pytest.raises(InvalidConfiguration):
            config_from_env({"OTP_DIGITS": "12"})

    def test_os_environ(self, monkeypatch):
        monkeypatch.setenv("OTP_DIGITS", "9")
        monkeypatch.delenv("OTP_ALGORITHM", raising=False)
        monkeypatch.delenv("OTP_PERIOD", raising=False)
        assert config_from_env().digits == 9
