"""Minimal GitLab REST client for the deployment diff."""

from .api import GitLabApi, select_project
from .errors import DecodeError, DiffError, NotFoundError, TransportError
from .http import HttpClient, MockHttpClient, RealHttpClient
from .models import BranchComparison, Commit, DeploymentTag, ProjectIdentity

__all__ = [
    # api
    "GitLabApi",
    "select_project",
    # errors
    "DecodeError",
    "DiffError",
    "NotFoundError",
    "TransportError",
    # http
    "HttpClient",
    "MockHttpClient",
    "RealHttpClient",
    # models
    "BranchComparison",
    "Commit",
    "DeploymentTag",
    "ProjectIdentity",
]
