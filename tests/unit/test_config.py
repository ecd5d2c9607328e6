# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest
from aws_sdk_sigv2 import SigV2Config
from aws_sdk_sigv2.exceptions import ConfigurationError


def test_defaults() -> None:
    config = SigV2Config()
    assert config.debug_signing is False
    assert config.s3_force_path_style is False
    assert config.logger is None


def test_from_empty_environment() -> None:
    config = SigV2Config.from_environment({})
    assert config.debug_signing is False
    assert config.s3_force_path_style is False


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1", True),
        ("true", True),
        ("TRUE", True),
        (" yes ", True),
        ("on", True),
        ("", False),
        ("0", False),
        ("False", False),
        ("no", False),
        ("off", False),
    ],
)
def test_from_environment_booleans(value: str, expected: bool) -> None:
    config = SigV2Config.from_environment(
        {"AWS_SIGV2_DEBUG_SIGNING": value, "AWS_S3_FORCE_PATH_STYLE": value}
    )
    assert config.debug_signing is expected
    assert config.s3_force_path_style is expected


def test_from_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_S3_FORCE_PATH_STYLE", "true")
    monkeypatch.delenv("AWS_SIGV2_DEBUG_SIGNING", raising=False)

    config = SigV2Config.from_environment()
    assert config.s3_force_path_style is True
    assert config.debug_signing is False


def test_invalid_boolean() -> None:
    with pytest.raises(ConfigurationError, match="AWS_S3_FORCE_PATH_STYLE"):
        SigV2Config.from_environment({"AWS_S3_FORCE_PATH_STYLE": "maybe"})
