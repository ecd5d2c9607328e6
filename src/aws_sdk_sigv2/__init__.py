# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""AWS SDK SigV2 provides stand-alone AWS Signature Version 2 signing of requests to
S3-compatible object storage, for use with HTTP tools such as Requests."""

from __future__ import annotations

from ._http import URI, AWSRequest, Field, Fields
from ._identity import (
    AnonymousCredentialIdentity,
    AWSCredentialIdentity,
    CredentialIdentity,
)
from .config import SigV2Config
from .credentials import (
    ChainedCredentialsResolver,
    EnvironmentCredentialsResolver,
    StaticCredentialsResolver,
)
from .exceptions import CredentialError, MalformedRequestError
from .handlers import OutboundRequest, SignRequestHandler
from .signers import SigV2Signer, SigV2SigningContext, SigV2SigningProperties

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "AWSCredentialIdentity",
    "AWSRequest",
    "AnonymousCredentialIdentity",
    "ChainedCredentialsResolver",
    "CredentialError",
    "CredentialIdentity",
    "EnvironmentCredentialsResolver",
    "Field",
    "Fields",
    "MalformedRequestError",
    "OutboundRequest",
    "SigV2Config",
    "SigV2Signer",
    "SigV2SigningContext",
    "SigV2SigningProperties",
    "SignRequestHandler",
    "StaticCredentialsResolver",
)
