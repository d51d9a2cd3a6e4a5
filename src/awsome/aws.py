"""
boto3 client factory.
"""

import boto3
from botocore import config as botoconf


class AWS:
    """
    Creates boto3 clients for the configured region.

    Credentials always come from the standard boto3 credential chain. The region does too, unless one is given here.

    Attributes
    ----------
    region : str
        The region override, or None.
    """

    def __init__(self, region=None):
        self.region = region

    def conf(self, signature_version="v4"):
        """
        The botocore client configuration.

        Parameters
        ----------
        signature_version : str
            The request signing scheme. S3 needs "s3v4".

        Returns
        -------
        botocore.config.Config
            The client configuration.
        """
        return botoconf.Config(
            region_name=self.region,
            signature_version=signature_version,
        )

    def s3conf(self):
        return self.conf(signature_version="s3v4")

    def env_session(self):
        """
        A new boto3 session on the credentials of the process environment. Sessions are not shared, as every fetch runs on its own
        thread.
        """
        return boto3.Session()

    def __call__(self, service):
        """
        Creates a client.

        Parameters
        ----------
        service : str
            The boto3 service name, such as "ec2".

        Returns
        -------
        botocore.client.BaseClient
            The client.
        """
        config = self.s3conf() if service == "s3" else self.conf()
        return self.env_session().client(service, config=config)
