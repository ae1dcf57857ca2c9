"""Snapshot fetching: retrieve a repository's file tree without history."""

from edutech.core.snapshot.abc import SnapshotFetcher
from edutech.core.snapshot.real import RealSnapshotFetcher

__all__ = ["RealSnapshotFetcher", "SnapshotFetcher"]
