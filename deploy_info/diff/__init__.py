"""Deployment diff pipeline: manifest, tickets, resolver, report."""

from .manifest import VersionManifest, parse_manifest
from .report import render_report
from .resolver import DeployDiffResolver, DeploymentDiff, DiffFailure, DiffSettings, Step
from .tickets import TicketReference, extract_ticket, extract_tickets

__all__ = [
    "VersionManifest",
    "parse_manifest",
    "render_report",
    "DeployDiffResolver",
    "DeploymentDiff",
    "DiffFailure",
    "DiffSettings",
    "Step",
    "TicketReference",
    "extract_ticket",
    "extract_tickets",
]
