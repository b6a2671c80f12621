"""Access to a Fedora 3 repository: profiles, content streams and the REST client."""
from .base import DatastreamProfile, RepositoryClient
from .content import DatastreamContent
from .profile_xml import parse_datastream_profile, parse_fedora_datetime
from .rest_client import FedoraRestClient

__all__ = [
    "DatastreamProfile",
    "RepositoryClient",
    "DatastreamContent",
    "FedoraRestClient",
    "parse_datastream_profile",
    "parse_fedora_datetime",
]
