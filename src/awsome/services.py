"""
Module for the enumeration of supported AWS services.
"""
from enum import Enum


class Service(Enum):
    """
    The AWS resource categories that can be listed.

    Each member carries its display metadata and the shape of the rows listed for it.

    Attributes
    ----------
    short_name : str
        Name displayed in the favorites header.
    display_name : str
        Name displayed as the title of the resource panel and in the service selector.
    permission : str
        The IAM action required to list the resources. Informational only.
    columns : tuple(tuple(str, int))
        Column titles of the listed rows along with their initial display widths.
    """

    EC2 = (
        "EC2",
        "EC2 Instances",
        "ec2:DescribeInstances",
        (
            ("instance id", 20),
            ("name", 30),
            ("state", 12),
            ("type", 12),
            ("public ip", 15),
        ),
    )
    S3 = (
        "S3",
        "S3 Buckets",
        "s3:ListAllMyBuckets",
        (("name", 50), ("creation date", 25)),
    )
    IAM = (
        "IAM",
        "IAM Users",
        "iam:ListUsers",
        (("user name", 30), ("user id", 25), ("creation date", 25)),
    )
    CLOUDWATCH = (
        "CloudWatch",
        "CloudWatch Alarms",
        "cloudwatch:DescribeAlarms",
        (("alarm name", 40), ("state", 18), ("metric", 25)),
    )

    def __init__(self, short_name, display_name, permission, columns):
        self.short_name = short_name
        self.display_name = display_name
        self.permission = permission
        self.columns = columns

    @property
    def column_titles(self):
        """
        The column titles of the rows listed for this service, in display order.
        """
        return tuple(title for title, _ in self.columns)

    @classmethod
    def ordered(cls):
        """
        Returns all services in the order they are displayed in the service selector.

        Returns
        -------
        tuple(awsome.services.Service)
            Every service.
        """
        return tuple(cls)

    @classmethod
    def from_short_name(cls, name):
        """
        Looks up a service by its short name, case insensitively.

        Parameters
        ----------
        name : str
            The short name, such as "EC2" or "cloudwatch".

        Returns
        -------
        awsome.services.Service
            The matching service.

        Raises
        ------
        KeyError
            If no service has the given short name.
        """
        for service in cls:
            if service.short_name.lower() == str(name).lower():
                return service
        raise KeyError(f'Unknown service "{name}"')
