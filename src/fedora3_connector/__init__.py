"""
Fedora 3 connector.

Exposes the metadata, content and SHA-1 of Fedora 3 datastreams for
migration into a newer repository.
"""
from .errors import (
    DatastreamError,
    DatastreamNotFoundError,
    IdentityMismatchError,
    IntegrityError,
    ProfileParseError,
    RetrievalError,
)
from .record import DatastreamRecord
from .remote_record import RemoteDatastreamRecord
from .repository import DatastreamProfile, FedoraRestClient, RepositoryClient
from .settings import Settings, create_settings_from_env

__version__ = "0.1.0"

__all__ = [
    "DatastreamRecord",
    "RemoteDatastreamRecord",
    "DatastreamProfile",
    "RepositoryClient",
    "FedoraRestClient",
    "Settings",
    "create_settings_from_env",
    "DatastreamError",
    "RetrievalError",
    "DatastreamNotFoundError",
    "ProfileParseError",
    "IdentityMismatchError",
    "IntegrityError",
]
