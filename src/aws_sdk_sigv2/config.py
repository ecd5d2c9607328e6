# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self

from .exceptions import ConfigurationError

DEBUG_SIGNING_ENV_VAR = "AWS_SIGV2_DEBUG_SIGNING"
FORCE_PATH_STYLE_ENV_VAR = "AWS_S3_FORCE_PATH_STYLE"

_TRUTHY = frozenset(("1", "true", "yes", "on"))
_FALSY = frozenset(("", "0", "false", "no", "off"))


@dataclass(kw_only=True)
class SigV2Config:
    """Configuration for signing requests with SigV2."""

    debug_signing: bool = False
    """Log the string to sign and the authorization of every signed request."""

    s3_force_path_style: bool = False
    """Whether the bucket is addressed in the path instead of the host."""

    logger: logging.Logger | None = None
    """Logger receiving signing debug messages."""

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Create a config from environment variables.

        The environment is read once, when this method is called.

        :param environ: Mapping to read instead of ``os.environ``.
        :raises ConfigurationError: If a variable holds something other than a
            boolean.
        """
        if environ is None:
            environ = os.environ
        return cls(
            debug_signing=_parse_bool(environ, DEBUG_SIGNING_ENV_VAR),
            s3_force_path_style=_parse_bool(environ, FORCE_PATH_STYLE_ENV_VAR),
        )


def _parse_bool(environ: Mapping[str, str], name: str) -> bool:
    value = environ.get(name, "").strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(
        f"Expected a boolean value for {name}, found {environ[name]!r}."
    )
