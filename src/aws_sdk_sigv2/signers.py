# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import base64
import datetime
import hmac
import logging
from copy import deepcopy
from dataclasses import dataclass
from email.utils import format_datetime
from hashlib import sha1
from typing import Final, TypedDict

from ._http import AWSRequest, Field
from ._identity import AWSCredentialIdentity
from .exceptions import CredentialError, MalformedRequestError
from .interfaces.identity import AWSCredentialsIdentity as _AWSCredentialsIdentity

_LOGGER: Final = logging.getLogger(__name__)

# Sub-resources that are part of the canonical resource. The order is significant,
# they are appended in exactly this (lexicographic) order.
SUB_RESOURCES: tuple[str, ...] = (
    "acl",
    "lifecycle",
    "location",
    "logging",
    "notification",
    "partNumber",
    "policy",
    "requestPayment",
    "torrent",
    "uploadId",
    "uploads",
    "versionId",
    "versioning",
    "versions",
    "website",
)
AMZ_HEADER_PREFIX: str = "x-amz"
SECURITY_TOKEN_HEADER: str = "X-Amz-Security-Token"

SIGNING_INFO_MSG: str = """Request Signature:
---[ STRING TO SIGN ]--------------------------------
%s
---[ SIGNATURE ]-------------------------------------
%s
-----------------------------------------------------"""


class SigV2SigningProperties(TypedDict, total=False):
    date: str
    path_style: bool


@dataclass(kw_only=True, frozen=True)
class SigV2SigningContext:
    """Everything derived while signing a single request.

    The context is a pure function of the request, the identity and the signing
    properties. Use :py:meth:`SigV2Signer.sign` to get a request with the values
    applied, or apply ``authorization``, ``date`` and ``security_token`` yourself.
    """

    path_style: bool
    canonical_resource: str
    canonical_amz_headers: str
    string_to_sign: str
    signature: str

    authorization: str
    """Value for the ``Authorization`` header: ``AWS <access key id>:<signature>``."""

    date: str
    """Value of the ``Date`` header that was signed."""

    security_token: str | None = None
    """Value for the ``X-Amz-Security-Token`` header, if the identity carried one."""


class SigV2Signer:
    """Request signer for applying the AWS Signature Version 2 algorithm used by S3."""

    def __init__(self, *, debug: bool = False, logger: logging.Logger | None = None):
        """
        :param debug: Log the string to sign and resulting authorization of every
            request. Messages are emitted at DEBUG level.
        :param logger: Logger receiving the debug messages. Defaults to this
            module's logger.
        """
        self._debug = debug
        self._logger = logger if logger is not None else _LOGGER

    def sign(
        self,
        *,
        properties: SigV2SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialIdentity,
    ) -> AWSRequest:
        """Generate and apply a SigV2 Signature to a copy of the supplied request.

        :param properties: SigV2SigningProperties to define the addressing style and
            an optional date.
        :param request: An AWSRequest to sign prior to sending to the service.
        :param identity: A set of credentials representing an AWS Identity or role
            capacity.
        """
        new_request = self._generate_new_request(request=request)
        context = self.authorize(
            properties=properties, request=new_request, identity=identity
        )
        self.apply_signing_fields(request=new_request, context=context)
        return new_request

    def authorize(
        self,
        *,
        properties: SigV2SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialIdentity,
    ) -> SigV2SigningContext:
        """Compute the SigV2 signature of a request without modifying it.

        :param properties: SigV2SigningProperties to define the addressing style and
            an optional date.
        :param request: The AWSRequest to compute a signature for.
        :param identity: A set of credentials representing an AWS Identity or role
            capacity.
        :raises CredentialError: If the identity cannot be used for signing.
        :raises MalformedRequestError: If no host can be determined for the request.
        """
        self._validate_identity(identity=identity)
        path_style = properties.get("path_style", False)

        # Work on a copy so required fields can be added before canonicalization.
        new_request = self._generate_new_request(request=request)
        if "Authorization" in new_request.fields:
            del new_request.fields["Authorization"]
        date = self._resolve_date(request=new_request, properties=properties)
        security_token = self._apply_required_fields(
            request=new_request, date=date, identity=identity
        )

        canonical_resource = self.canonical_resource(
            request=new_request, path_style=path_style
        )
        canonical_amz_headers = self.canonical_amz_headers(request=new_request)
        string_to_sign = self.string_to_sign(
            request=new_request,
            canonical_amz_headers=canonical_amz_headers,
            canonical_resource=canonical_resource,
        )
        signature = self._signature(
            string_to_sign=string_to_sign, secret_key=identity.secret_access_key
        )
        authorization = self.generate_authorization_field(
            access_key_id=identity.access_key_id, signature=signature
        ).as_string()

        if self._debug and self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(SIGNING_INFO_MSG, string_to_sign, authorization)

        return SigV2SigningContext(
            path_style=path_style,
            canonical_resource=canonical_resource,
            canonical_amz_headers=canonical_amz_headers,
            string_to_sign=string_to_sign,
            signature=signature,
            authorization=authorization,
            date=date,
            security_token=security_token,
        )

    def generate_authorization_field(
        self, *, access_key_id: str, signature: str
    ) -> Field:
        """Generate the `Authorization` field.

        :param access_key_id: The access key ID of the signing identity.
        :param signature: Base64 encoded HMAC-SHA1 of the string to sign.
        """
        return Field(
            name="Authorization", values=[f"AWS {access_key_id}:{signature}"]
        )

    def string_to_sign(
        self,
        *,
        request: AWSRequest,
        canonical_amz_headers: str,
        canonical_resource: str,
    ) -> str:
        """The string to sign is the exact text the signature is computed over.

        The SigV2 specification defines the string to sign as:
            HTTP-Verb \n
            Content-MD5 \n
            Content-Type \n
            Date \n
            CanonicalizedAmzHeaders
            CanonicalizedResource

        The amz header block carries its own trailing newline when it isn't empty.

        :param request: The AWSRequest being signed. It must already carry a
            ``Date`` field.
        :param canonical_amz_headers: Output of :py:meth:`canonical_amz_headers`.
        :param canonical_resource: Output of :py:meth:`canonical_resource`.
        """
        fields = request.fields
        return (
            f"{request.method}\n"
            f"{fields.get_value('Content-MD5')}\n"
            f"{fields.get_value('Content-Type')}\n"
            f"{fields.get_value('Date')}\n"
            f"{canonical_amz_headers}"
            f"{canonical_resource}"
        )

    def canonical_resource(self, *, request: AWSRequest, path_style: bool) -> str:
        """Build the bucket, path and sub-resource portion of the string to sign.

        With virtual-hosted-style addressing, hosts made of four labels, such as
        ``johnsmith.s3.amazonaws.com``, contribute their first label as the bucket.

        :param request: The AWSRequest being signed.
        :param path_style: Whether the bucket is part of the path rather than the
            host.
        """
        host, path = self._resolve_host_and_path(request=request)

        if path_style:
            resource = path
        else:
            resource = ""
            if host.count(".") == 3:
                resource = "/" + host.split(".")[0]
            resource += path
            if not resource:
                resource = "/"

        return resource + self._format_sub_resources(query=request.destination.query)

    def canonical_amz_headers(self, *, request: AWSRequest) -> str:
        """Build the block of ``x-amz-*`` headers included in the string to sign.

        :param request: The AWSRequest being signed.
        """
        amz_fields: dict[str, list[str]] = {}
        for field in request.fields:
            name = field.name.strip().lower()
            if not name.startswith(AMZ_HEADER_PREFIX):
                continue
            values = [value.replace("\n", " ") for value in field.values]
            amz_fields.setdefault(name, []).extend(values)

        if not amz_fields:
            return ""
        return "".join(
            f"{name}:{','.join(values)}\n"
            for name, values in sorted(amz_fields.items())
        )

    def _format_sub_resources(self, *, query: str | None) -> str:
        if not query:
            return ""

        params = query.split("&")
        sub_resources: list[str] = []
        for sub_resource in SUB_RESOURCES:
            for param in params:
                if not param.startswith(sub_resource):
                    continue
                # ?uploads= is signed as ?uploads
                parts = param.split("=")
                if len(parts) < 2 or not parts[1]:
                    sub_resources.append(parts[0])
                else:
                    sub_resources.append(param)
                break

        if not sub_resources:
            return ""
        return "?" + "&".join(sub_resources)

    def _resolve_host_and_path(self, *, request: AWSRequest) -> tuple[str, str]:
        """Get the host and path, falling back to the opaque form of the URI."""
        destination = request.destination
        host = destination.host
        path = destination.path or ""
        if host and path:
            return host, path

        opaque_parts = destination.opaque.split("/") if destination.opaque else []
        if not host:
            if len(opaque_parts) < 3 or not opaque_parts[2]:
                raise MalformedRequestError(
                    "Unable to determine the host of the request. Set the host of "
                    f"the destination or an opaque form like '//host/path', got "
                    f"{destination.opaque!r}."
                )
            host = opaque_parts[2]
        if not path:
            path = "/" + "/".join(opaque_parts[3:])
        return host, path

    def _signature(self, *, string_to_sign: str, secret_key: str) -> str:
        digest = hmac.new(
            key=secret_key.encode(), msg=string_to_sign.encode(), digestmod=sha1
        ).digest()
        return base64.b64encode(digest).decode()

    def _validate_identity(self, *, identity: AWSCredentialIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, _AWSCredentialsIdentity):  # pyright: ignore
            raise CredentialError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        elif identity.is_expired:
            raise CredentialError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )

    def _resolve_date(
        self, *, request: AWSRequest, properties: SigV2SigningProperties
    ) -> str:
        if date := request.fields.get_value("Date"):
            return date
        if date := properties.get("date"):
            return date
        return format_datetime(datetime.datetime.now(datetime.UTC))

    def _generate_new_request(self, *, request: AWSRequest) -> AWSRequest:
        return deepcopy(request)

    def _apply_required_fields(
        self, *, request: AWSRequest, date: str, identity: AWSCredentialIdentity
    ) -> str | None:
        """Add the fields that must be signed, returning the security token used."""
        if not request.fields.get_value("Date"):
            request.fields.set_field(Field(name="Date", values=[date]))

        if SECURITY_TOKEN_HEADER in request.fields:
            return request.fields.get_value(SECURITY_TOKEN_HEADER) or None
        if identity.session_token is not None:
            request.fields.set_field(
                Field(name=SECURITY_TOKEN_HEADER, values=[identity.session_token])
            )
            return identity.session_token
        return None

    def apply_signing_fields(
        self, *, request: AWSRequest, context: SigV2SigningContext
    ) -> None:
        """Set the fields described by ``context`` on ``request``.

        ``Authorization`` is replaced, ``Date`` and ``X-Amz-Security-Token`` are only
        set when the request doesn't carry them already.
        """
        request.fields.set_field(
            Field(name="Authorization", values=[context.authorization])
        )
        if not request.fields.get_value("Date"):
            request.fields.set_field(Field(name="Date", values=[context.date]))
        if (
            context.security_token is not None
            and SECURITY_TOKEN_HEADER not in request.fields
        ):
            request.fields.set_field(
                Field(name=SECURITY_TOKEN_HEADER, values=[context.security_token])
            )
