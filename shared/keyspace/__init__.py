"""Keyspace enumeration."""

from shared.keyspace.codec import KeyspaceCodec

__all__ = ["KeyspaceCodec"]
