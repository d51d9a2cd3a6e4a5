"""
Module for fetching resource lists from AWS and shaping them into display rows.
"""
import json

import jq
from botocore import exceptions as botoerror

from .aws import AWS
from .common import datetime_hack
from .errors import (
    CredentialError,
    NetworkError,
    PermissionDeniedError,
    ProviderError,
)
from .services import Service

MISSING = "-"

LISTERS = {
    Service.EC2: {
        "resource_key": "ec2",
        "list_method": "describe_instances",
        "item_path": "[.Reservations[].Instances[]]",
        "column_paths": [
            ".InstanceId",
            '[.Tags[]? | select(.Key=="Name") | .Value][0]',
            ".State.Name",
            ".InstanceType",
            ".PublicIpAddress",
        ],
    },
    Service.S3: {
        "resource_key": "s3",
        "list_method": "list_buckets",
        "item_path": "[.Buckets[]?]",
        "column_paths": [
            ".Name",
            ".CreationDate",
        ],
    },
    Service.IAM: {
        "resource_key": "iam",
        "list_method": "list_users",
        "item_path": "[.Users[]?]",
        "column_paths": [
            ".UserName",
            ".UserId",
            ".CreateDate",
        ],
    },
    Service.CLOUDWATCH: {
        "resource_key": "cloudwatch",
        "list_method": "describe_alarms",
        "item_path": "[.MetricAlarms[]?]",
        "column_paths": [
            ".AlarmName",
            ".StateValue",
            ".MetricName",
        ],
    },
}
"""
How each service is listed: the client and method to call, the jq path to the list of items in the response, and one jq path per display column.
"""

CREDENTIAL_CODES = {
    "AuthFailure",
    "ExpiredToken",
    "ExpiredTokenException",
    "InvalidAccessKeyId",
    "InvalidClientTokenId",
    "InvalidToken",
    "RequestExpired",
    "SignatureDoesNotMatch",
    "UnrecognizedClientException",
}

PERMISSION_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "AuthorizationError",
    "UnauthorizedOperation",
}

_jq_cache = {}


def jq_program(stmt):
    """
    Compiles a jq statement, caching the result.

    Parameters
    ----------
    stmt : str
        The jq statement.

    Returns
    -------
    jq._Program
        The compiled statement.
    """
    if stmt not in _jq_cache:
        _jq_cache[stmt] = jq.compile(stmt)
    return _jq_cache[stmt]


def display_value(value):
    """
    Converts a value extracted from an API response into its display form.

    Parameters
    ----------
    value : object
        The extracted value.

    Returns
    -------
    str
        The value as text, or "-" for missing values.
    """
    if value is None or value == "":
        return MISSING
    if isinstance(value, str):
        return value
    return json.dumps(value)


def translate_error(error):
    """
    Classifies an exception raised by boto3 into a provider error.

    Parameters
    ----------
    error : Exception
        The exception raised while listing resources.

    Returns
    -------
    awsome.errors.ProviderError
        The provider error describing the cause in human readable form.
    """
    if isinstance(error, ProviderError):
        return error
    if isinstance(error, (botoerror.NoCredentialsError, botoerror.PartialCredentialsError)):
        return CredentialError(
            "Unable to locate AWS credentials. Configure them via environment variables, ~/.aws/credentials or an instance profile."
        )
    if isinstance(error, botoerror.NoRegionError):
        return CredentialError(
            "No AWS region configured. Set AWS_REGION, a region in ~/.aws/config or default_region in the awsome configuration."
        )
    if isinstance(error, (botoerror.ProfileNotFound, botoerror.CredentialRetrievalError)):
        return CredentialError(str(error))
    if isinstance(error, (botoerror.ConnectionError, botoerror.HTTPClientError)):
        return NetworkError(f"Network error: {error}")
    if isinstance(error, botoerror.ClientError):
        err = error.response.get("Error", {})
        code = err.get("Code", "Unknown")
        message = err.get("Message", str(error))
        text = f"AWS: {code}: {message}"
        if code in PERMISSION_CODES:
            return PermissionDeniedError(text, code=code)
        if code in CREDENTIAL_CODES:
            return CredentialError(text, code=code)
        return ProviderError(text, code=code)
    if isinstance(error, botoerror.BotoCoreError):
        return ProviderError(str(error))
    return ProviderError(f"{type(error).__name__}: {error}")


class ResourceProvider:
    """
    Lists the resources of a service through the AWS API.

    A provider holds no state between fetches, so it is safe to call fetch() from several threads at once.

    Attributes
    ----------
    aws : awsome.aws.AWS
        The client factory.
    """

    def __init__(self, aws=None):
        self.aws = AWS() if aws is None else aws

    def fetch(self, service):
        """
        Fetches the resources of a service with a single list call.

        Parameters
        ----------
        service : awsome.services.Service
            The service to list.

        Returns
        -------
        list(tuple(str))
            One row per resource, with one field per column of the service.

        Raises
        ------
        awsome.errors.ProviderError
            If listing fails for any reason.
        """
        lister = LISTERS[service]
        try:
            client = self.aws(lister["resource_key"])
            return self.get_data_generic(
                client,
                lister["list_method"],
                lister["item_path"],
                lister["column_paths"],
            )
        except Exception as error:
            raise translate_error(error) from error

    def get_data_generic(self, client, list_method, item_path, column_paths):
        """
        Calls a list method and extracts one row per item found at item_path in the response.

        Parameters
        ----------
        client : object
            The boto3 client to call.
        list_method : str
            The name of the client method to call, without arguments.
        item_path : str
            jq path to the list of items in the response.
        column_paths : list(str)
            jq path of every column, relative to an item.

        Returns
        -------
        list(tuple(str))
            The extracted rows.
        """
        response = getattr(client, list_method)()
        items = (
            jq_program(item_path)
            .input_text(json.dumps(response, default=datetime_hack))
            .first()
        )
        return [
            tuple(
                display_value(jq_program(path).input_value(item).first())
                for path in column_paths
            )
            for item in items or []
        ]
