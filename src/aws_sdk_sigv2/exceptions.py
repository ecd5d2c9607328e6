# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class BaseAWSSDKException(Exception):
    """Top-level exception to capture SDK-related errors."""


class CredentialError(BaseAWSSDKException, ValueError):
    """Credentials could not be resolved or cannot be used for signing."""


class MalformedRequestError(BaseAWSSDKException, ValueError):
    """The request does not carry enough information to be canonicalized."""


class ConfigurationError(BaseAWSSDKException, ValueError):
    """A configuration value could not be interpreted."""
