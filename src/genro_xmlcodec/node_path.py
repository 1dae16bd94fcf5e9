# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Structural paths locating nodes inside an XML document.

A NodePath is an ordered tuple of PathSegments, each holding an element
name and, for repeated siblings, the 1-based position among the
siblings sharing that name (XPath convention):

    /root/cars/car[2]/comment()[1]

The decoder parses the location of every comment once into a NodePath
and uses the parent path to attach the comment to its element.

Example:
    >>> path = NodePath.from_xpath('/root/cars/car[2]/comment()')
    >>> path.parent
    NodePath('/root/cars/car[2]')
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from genro_toolbox import smartsplit

from .errors import InvalidInput

COMMENT_STEP = 'comment()'

_STEP = re.compile(r'^(?P<name>[^\[\]/]+)(?:\[(?P<position>\d+)\])?$')


@dataclass(frozen=True)
class PathSegment:
    """One step of a NodePath."""

    name: str
    position: int | None = None

    def __str__(self) -> str:
        if self.position is None:
            return self.name
        return f'{self.name}[{self.position}]'


@dataclass(frozen=True)
class NodePath:
    """Immutable, hashable path from the document root to a node."""

    segments: tuple[PathSegment, ...] = ()

    @classmethod
    def from_xpath(cls, xpath: str) -> NodePath:
        """Parse an absolute XPath-like node path.

        Raises:
            InvalidInput: if a step is not `name` or `name[n]`.
        """
        segments = []
        for step in [x for x in smartsplit(xpath.strip(), '/') if x]:
            match = _STEP.match(step)
            if match is None:
                raise InvalidInput(f'Invalid node path step {step!r} in {xpath!r}')
            position = match.group('position')
            segments.append(PathSegment(match.group('name'), int(position) if position else None))
        return cls(tuple(segments))

    def child(self, name: str, position: int | None = None) -> NodePath:
        return NodePath(self.segments + (PathSegment(name, position),))

    @property
    def parent(self) -> NodePath:
        return NodePath(self.segments[:-1])

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return '/' + '/'.join(str(s) for s in self.segments)

    def __repr__(self) -> str:
        return f'NodePath({str(self)!r})'
