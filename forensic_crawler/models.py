# models.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, List, Optional
from urllib.parse import urlparse


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_dict(cls, box: Optional[dict]) -> "BoundingBox":
        if not box:
            return cls(0, 0, 0, 0)
        return cls(box.get('x', 0), box.get('y', 0), box.get('width', 0), box.get('height', 0))

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def key(self) -> str:
        """Dedup key; distinct nodes sharing a box count as one click target."""
        return f"x:{self.x}, y:{self.y}, width:{self.width}, height:{self.height}"


@dataclass(frozen=True)
class CandidateNode:
    node_tag: str
    listener_types: Optional[FrozenSet[str]]
    bounding_box: BoundingBox
    backend_id: Any = None


@dataclass(frozen=True)
class NodeCenter:
    x: float
    y: float


@dataclass
class Candidates:
    anchors: List[CandidateNode] = field(default_factory=list)
    clickables: List[CandidateNode] = field(default_factory=list)

    def get(self, kind: str) -> List[CandidateNode]:
        if kind not in ('anchors', 'clickables'):
            raise ValueError(f"Unknown candidate list: {kind}")
        return getattr(self, kind)


@dataclass(frozen=True)
class SeedIdentity:
    origin: str
    path: str

    @classmethod
    def from_url(cls, url: str) -> "SeedIdentity":
        return cls(origin=origin_of(url), path=urlparse(url).path)


@dataclass
class RunContext:
    log_dir: Path
    debug: bool = False
    click_budget: int = 10
    current_url: str = 'about:blank'


def origin_of(url: str) -> str:
    """scheme://host[:port], default ports dropped; 'null' for opaque URLs."""
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme not in ('http', 'https', 'ws', 'wss', 'ftp') or not parsed.hostname:
        return 'null'
    port = parsed.port
    default_port = {'http': 80, 'ws': 80, 'https': 443, 'wss': 443, 'ftp': 21}[scheme]
    netloc = parsed.hostname
    if port is not None and port != default_port:
        netloc = f"{netloc}:{port}"
    return f"{scheme}://{netloc}"
