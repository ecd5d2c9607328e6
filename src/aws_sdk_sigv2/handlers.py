# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Adapter for signing requests as one step of a request handler chain."""

import logging
from dataclasses import dataclass
from typing import Final, Self

from ._http import AWSRequest
from ._identity import AnonymousCredentialIdentity, CredentialIdentity
from .config import SigV2Config
from .exceptions import BaseAWSSDKException
from .interfaces.identity import CredentialsResolver
from .signers import SigV2Signer, SigV2SigningProperties

logger: Final = logging.getLogger(__name__)


@dataclass(kw_only=True)
class OutboundRequest:
    """An outbound request as seen by the handler chain."""

    http_request: AWSRequest
    """The request that will be sent. Signing updates its fields in place."""

    credentials_resolver: CredentialsResolver[CredentialIdentity]
    """Source of the credentials used to sign the request."""

    path_style: bool | None = None
    """Whether the bucket is addressed in the path instead of the host.

    If not set, the default of the handler is used.
    """

    error: Exception | None = None
    """Set by a handler that failed. Later handlers should not send the request."""


class SignRequestHandler:
    """Signs an :py:class:`OutboundRequest` in place with SigV2.

    Requests resolving to an :py:class:`AnonymousCredentialIdentity` are left
    unsigned. Otherwise any existing ``Authorization`` field is removed first, also
    when signing fails. Failures are stored on ``request.error``.
    """

    name: str = "v2.SignRequestHandler"

    def __init__(
        self, *, signer: SigV2Signer | None = None, path_style: bool = False
    ) -> None:
        self._signer = signer or SigV2Signer()
        self._path_style = path_style

    @classmethod
    def from_config(cls, config: SigV2Config) -> Self:
        signer = SigV2Signer(debug=config.debug_signing, logger=config.logger)
        return cls(signer=signer, path_style=config.s3_force_path_style)

    def __call__(self, request: OutboundRequest) -> None:
        path_style = self._path_style
        if request.path_style is not None:
            path_style = request.path_style

        http_request = request.http_request
        try:
            match request.credentials_resolver.get_identity():
                case AnonymousCredentialIdentity():
                    logger.debug("Anonymous credentials, skipping request signing.")
                    return
                case identity:
                    _remove_authorization(http_request)
                    context = self._signer.authorize(
                        properties=SigV2SigningProperties(path_style=path_style),
                        request=http_request,
                        identity=identity,
                    )
        except BaseAWSSDKException as e:
            _remove_authorization(http_request)
            logger.debug("Failed to sign request: %s", e)
            request.error = e
            return

        self._signer.apply_signing_fields(request=http_request, context=context)


def _remove_authorization(request: AWSRequest) -> None:
    if "Authorization" in request.fields:
        del request.fields["Authorization"]
