"""Mapping of logical keys onto filesystem paths.

A key such as ``sys/policy/root`` lives in the directory ``<root>/sys/policy``
as a file whose name is derived from the leaf segment ``root``. Only the leaf
is encoded: encoding every segment would hide the hierarchy, while leaving
the leaf raw lets characters through that some hosts reject in file names.

Leaf names are produced by an ordered list of codecs. The first one is used
for every write; the rest are older forms still recognised on read, delete
and list. Adding a new encoding means putting a new codec at the front.
"""
from __future__ import annotations
import base64
import binascii
import os
import posixpath
import re
from typing import List, NamedTuple, Optional, Sequence, Tuple

SEPARATOR = "/"
LEAF_MARKER = "_"

_URLSAFE_B64 = re.compile(r"[A-Za-z0-9_-]*={0,2}")


class LeafCodec:
    """Turns a leaf segment into an on-disk file name and back."""

    name = "abstract"

    def encode(self, leaf: str) -> str:
        raise NotImplementedError

    def decode(self, stored: str) -> Optional[str]:
        """Return the leaf for `stored` (marker already stripped) or None."""
        raise NotImplementedError


class Base64LeafCodec(LeafCodec):
    """Padded base64-URL encoding of the UTF-8 leaf."""

    name = "base64url"

    def encode(self, leaf: str) -> str:
        return base64.urlsafe_b64encode(leaf.encode("utf-8")).decode("ascii")

    def decode(self, stored: str) -> Optional[str]:
        if len(stored) % 4 or not _URLSAFE_B64.fullmatch(stored):
            return None
        try:
            raw = base64.urlsafe_b64decode(stored)
        except (binascii.Error, ValueError):
            return None
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return None


class RawLeafCodec(LeafCodec):
    """Legacy form: the leaf stored as-is."""

    name = "raw"

    def encode(self, leaf: str) -> str:
        return leaf

    def decode(self, stored: str) -> Optional[str]:
        return stored


DEFAULT_CODECS: Tuple[LeafCodec, ...] = (Base64LeafCodec(), RawLeafCodec())


def normalize_key(key: str) -> str:
    """Collapse ``.``, ``..``, repeated and edge separators in `key`.

    The result is relative and can never climb above the root.
    """
    if not key:
        return ""
    return posixpath.normpath(SEPARATOR + key).lstrip(SEPARATOR)


def split_key(key: str) -> List[str]:
    norm = normalize_key(key)
    return norm.split(SEPARATOR) if norm else []


class KeyPaths(NamedTuple):
    base_path: str
    candidates: Tuple[str, ...]
    # False when the canonical codec cannot represent the leaf; every
    # candidate is then a legacy form.
    encodable: bool = True

    @property
    def encoded_path(self) -> Optional[str]:
        return self.candidates[0] if self.encodable else None

    @property
    def legacy_paths(self) -> Tuple[str, ...]:
        return self.candidates[1:] if self.encodable else self.candidates

    @property
    def legacy_path(self) -> str:
        return self.legacy_paths[0]


class PathMapper:
    """Compute where a key lives below `root`."""

    def __init__(self, root: str, codecs: Sequence[LeafCodec] = DEFAULT_CODECS) -> None:
        if not codecs:
            raise ValueError("at least one leaf codec is required")
        self.root = root
        self.codecs = tuple(codecs)

    def dir_path(self, segments: Sequence[str]) -> str:
        return os.path.join(self.root, *segments)

    def paths_for(self, key: str) -> KeyPaths:
        segments = split_key(key)
        if not segments:
            raise ValueError(f"key {key!r} has no leaf segment")
        base_path = self.dir_path(segments[:-1])
        leaf = segments[-1]
        candidates = []
        encodable = True
        for i, codec in enumerate(self.codecs):
            try:
                stored = codec.encode(leaf)
            except UnicodeEncodeError:
                # lone surrogates from undecodable on-disk names
                if i == 0:
                    encodable = False
                continue
            candidates.append(os.path.join(base_path, LEAF_MARKER + stored))
        if not candidates:
            raise ValueError(f"key {key!r} cannot be mapped to a file name")
        return KeyPaths(base_path, tuple(candidates), encodable)

    def decode_name(self, name: str) -> str:
        """Translate one directory entry name into a listing name.

        Leaf files lose their marker and are decoded by the first codec that
        accepts them; anything else is a sub-container and gets a trailing
        separator.
        """
        if not name.startswith(LEAF_MARKER):
            return name + SEPARATOR
        stored = name[len(LEAF_MARKER):]
        for codec in self.codecs:
            decoded = codec.decode(stored)
            if decoded is not None:
                return decoded
        return stored
