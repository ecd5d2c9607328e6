# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import logging
import os
from collections.abc import Mapping, Sequence
from typing import Final

from ._identity import AWSCredentialIdentity, CredentialIdentity
from .exceptions import CredentialError
from .interfaces.identity import CredentialsResolver

logger: Final = logging.getLogger(__name__)


class StaticCredentialsResolver(CredentialsResolver[CredentialIdentity]):
    """Resolve a fixed credential identity."""

    def __init__(self, *, credentials: CredentialIdentity) -> None:
        self._credentials = credentials

    def get_identity(self) -> CredentialIdentity:
        return self._credentials


class EnvironmentCredentialsResolver(CredentialsResolver[AWSCredentialIdentity]):
    """Resolves AWS Credentials from system environment variables."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ
        self._credentials: AWSCredentialIdentity | None = None

    def get_identity(self) -> AWSCredentialIdentity:
        if self._credentials is not None:
            return self._credentials

        environ = os.environ if self._environ is None else self._environ
        access_key_id = environ.get("AWS_ACCESS_KEY_ID")
        secret_access_key = environ.get("AWS_SECRET_ACCESS_KEY")
        session_token = environ.get("AWS_SESSION_TOKEN") or None

        if not access_key_id or not secret_access_key:
            raise CredentialError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are required"
            )

        self._credentials = AWSCredentialIdentity(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
        )
        return self._credentials


class ChainedCredentialsResolver(CredentialsResolver[CredentialIdentity]):
    """Attempts to resolve credentials by checking a sequence of sub-resolvers.

    If a nested resolver raises a :py:class:`CredentialError`, the next resolver in
    the chain will be attempted.
    """

    def __init__(
        self, resolvers: Sequence[CredentialsResolver[CredentialIdentity]]
    ) -> None:
        """Construct a ChainedCredentialsResolver.

        :param resolvers: The sequence of resolvers to resolve credentials from.
        """
        self._resolvers = resolvers

    def get_identity(self) -> CredentialIdentity:
        logger.debug("Attempting to resolve credentials from resolver chain.")
        for resolver in self._resolvers:
            try:
                logger.debug(
                    "Attempting to resolve credentials from %s.", type(resolver)
                )
                return resolver.get_identity()
            except CredentialError as e:
                logger.debug(
                    "Failed to resolve credentials from %s: %s", type(resolver), e
                )

        raise CredentialError("Failed to resolve credentials from resolver chain.")
