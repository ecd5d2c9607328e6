# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""SigV2 authentication for the `requests <https://requests.readthedocs.io>`_ library.

Usage::

    import requests
    from aws_sdk_sigv2 import EnvironmentCredentialsResolver
    from aws_sdk_sigv2.requests import SigV2Auth

    auth = SigV2Auth(EnvironmentCredentialsResolver())
    requests.get("https://johnsmith.s3.amazonaws.com/photos/puppy.jpg", auth=auth)
"""

from typing import Self
from urllib.parse import urlsplit

import requests.auth
from requests.utils import to_native_string

from ._http import URI, AWSRequest, Fields
from ._identity import (
    AnonymousCredentialIdentity,
    AWSCredentialIdentity,
    CredentialIdentity,
)
from .config import SigV2Config
from .credentials import StaticCredentialsResolver
from .interfaces.identity import CredentialsResolver
from .signers import SECURITY_TOKEN_HEADER, SigV2Signer, SigV2SigningProperties

__all__ = ["SigV2Auth"]


class SigV2Auth(requests.auth.AuthBase):
    def __init__(
        self,
        credentials: CredentialsResolver[CredentialIdentity] | CredentialIdentity,
        *,
        path_style: bool = False,
        signer: SigV2Signer | None = None,
    ) -> None:
        """Initialize the authentication helper for requests.

        Use this with the auth argument of the requests methods, or assign it to a
        session's auth property. Credentials are resolved for every request.

        :param credentials: Source of the credentials used for signing. A bare
            identity is wrapped in a :py:class:`StaticCredentialsResolver`.
        :param path_style: Whether the bucket is addressed in the path instead of
            the host.
        :param signer: The signer to use. Defaults to a new :py:class:`SigV2Signer`.
        """
        self._credentials_resolver: CredentialsResolver[CredentialIdentity]
        match credentials:
            case AWSCredentialIdentity() | AnonymousCredentialIdentity():
                self._credentials_resolver = StaticCredentialsResolver(
                    credentials=credentials
                )
            case _:
                self._credentials_resolver = credentials
        self._path_style = path_style
        self._signer = signer or SigV2Signer()

    @classmethod
    def from_config(
        cls,
        config: SigV2Config,
        credentials: CredentialsResolver[CredentialIdentity] | CredentialIdentity,
    ) -> Self:
        return cls(
            credentials,
            path_style=config.s3_force_path_style,
            signer=SigV2Signer(debug=config.debug_signing, logger=config.logger),
        )

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        match self._credentials_resolver.get_identity():
            case AnonymousCredentialIdentity():
                return request
            case identity:
                context = self._signer.authorize(
                    properties=SigV2SigningProperties(path_style=self._path_style),
                    request=self._to_aws_request(request),
                    identity=identity,
                )

        request.headers["Authorization"] = context.authorization
        if not request.headers.get("Date"):
            request.headers["Date"] = context.date
        if (
            context.security_token is not None
            and SECURITY_TOKEN_HEADER not in request.headers
        ):
            request.headers[SECURITY_TOKEN_HEADER] = context.security_token
        return request

    def _to_aws_request(self, request: requests.PreparedRequest) -> AWSRequest:
        assert isinstance(request.method, str)
        assert isinstance(request.url, str)
        url_parts = urlsplit(request.url)
        uri = URI(
            scheme=url_parts.scheme,
            host=url_parts.hostname or "",
            port=url_parts.port,
            path=url_parts.path,
            query=url_parts.query,
        )
        return AWSRequest(
            destination=uri,
            method=request.method,
            fields=Fields.from_pairs(
                (to_native_string(name), to_native_string(value, "latin-1"))
                for name, value in request.headers.items()
            ),
        )
